"""Pair generation module for candidate participant pairs."""

from .generator import (
    PairGenerator,
    canonical_pair_key,
    canonical_order,
    split_into_batches,
    chunk_candidates,
)

__all__ = [
    "PairGenerator",
    "canonical_pair_key",
    "canonical_order",
    "split_into_batches",
    "chunk_candidates",
]
