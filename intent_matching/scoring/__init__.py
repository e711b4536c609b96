"""Composite match scoring module."""

from .config import (
    ScoringConfig,
    DEFAULT_WEIGHTS_WITH_EMBEDDINGS,
    DEFAULT_WEIGHTS_WITHOUT_EMBEDDINGS,
)
from .subscores import (
    NEUTRAL_SCORE,
    compute_industry_score,
    compute_interest_score,
    compute_complementarity_score,
    compute_embedding_score,
)
from .candidates import MatchCandidate, ScoringRunResult
from .composite import CompositeMatchScorer, rank_candidates

__all__ = [
    "ScoringConfig",
    "DEFAULT_WEIGHTS_WITH_EMBEDDINGS",
    "DEFAULT_WEIGHTS_WITHOUT_EMBEDDINGS",
    "NEUTRAL_SCORE",
    "compute_industry_score",
    "compute_interest_score",
    "compute_complementarity_score",
    "compute_embedding_score",
    "MatchCandidate",
    "ScoringRunResult",
    "CompositeMatchScorer",
    "rank_candidates",
]
