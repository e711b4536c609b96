"""Embedding similarity module."""

from .similarity import compute_embedding_similarities

__all__ = ["compute_embedding_similarities"]
