"""
Match candidate records produced by a scoring run.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from ..fusion import ParticipantVector


@dataclass
class MatchCandidate:
    """
    One scored participant pair.

    Attributes:
        participant_a_id: Smaller participant id of the pair
        participant_b_id: Larger participant id of the pair
        intent_score: Intent compatibility sub-score (0-100)
        industry_score: Industry sub-score (0-100)
        interest_score: Interest overlap sub-score (0-100)
        complementarity_score: Complementarity sub-score (0-100)
        embedding_score: Embedding similarity sub-score (0-100)
        score: Weighted composite score (0-100, 2 decimals)
        reasons: Short human-readable reasons, most specific first
    """
    participant_a_id: str
    participant_b_id: str
    intent_score: float
    industry_score: float
    interest_score: float
    complementarity_score: float
    embedding_score: float
    score: float
    reasons: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Enforce canonical pair ordering."""
        if not self.participant_a_id < self.participant_b_id:
            raise ValueError(
                f"Match candidate ids must be in canonical order: "
                f"{self.participant_a_id!r} < {self.participant_b_id!r}"
            )

    @property
    def pair_key(self):
        return (self.participant_a_id, self.participant_b_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "participant_a_id": self.participant_a_id,
            "participant_b_id": self.participant_b_id,
            "score": self.score,
            "intent_score": self.intent_score,
            "industry_score": self.industry_score,
            "interest_score": self.interest_score,
            "complementarity_score": self.complementarity_score,
            "embedding_score": self.embedding_score,
            "match_reasons": list(self.reasons),
        }

    def to_record(self, event_id: Optional[str] = None) -> Dict[str, Any]:
        """Flat row for persistence, tagged with the event id."""
        record = {"event_id": event_id}
        record.update(self.to_dict())
        return record


@dataclass
class ScoringRunResult:
    """
    Output of one scoring run.

    Attributes:
        candidates: Surviving candidates, best first
        vectors: Resolved intent vector per participant id
        participant_count: Number of participants scored
        pairs_evaluated: Pairs that passed the exclusion rules
        pairs_excluded: Pairs dropped by the exclusion rules
        below_threshold: Evaluated pairs discarded by the minimum score
        weights: Normalized sub-score weights used for the run
        has_embeddings: Whether embedding similarities were available
    """
    candidates: List[MatchCandidate]
    vectors: Dict[str, ParticipantVector]
    participant_count: int
    pairs_evaluated: int
    pairs_excluded: int
    below_threshold: int
    weights: Dict[str, float]
    has_embeddings: bool

    @property
    def refreshed_vectors(self) -> Dict[str, Dict[str, Any]]:
        """Cache entries for participants whose vector was recomputed."""
        return {
            participant_id: vector.to_dict()
            for participant_id, vector in self.vectors.items()
            if vector.was_recomputed
        }

    def summary(self) -> Dict[str, Any]:
        """Counts describing the run."""
        return {
            "participant_count": self.participant_count,
            "pairs_evaluated": self.pairs_evaluated,
            "pairs_excluded": self.pairs_excluded,
            "below_threshold": self.below_threshold,
            "match_count": len(self.candidates),
            "vectors_recomputed": len(self.refreshed_vectors),
            "has_embeddings": self.has_embeddings,
            "weights": dict(self.weights),
        }
