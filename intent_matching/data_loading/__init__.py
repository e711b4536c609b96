"""Data loading module for participants, similarities and embeddings."""

from .loaders import load_participants, load_similarities, load_embeddings

__all__ = ["load_participants", "load_similarities", "load_embeddings"]
