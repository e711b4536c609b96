"""
Scoring configuration.

Weights may be left unset individually; unset weights take the defaults
for the run, which depend on whether embedding similarities are available:

    with embeddings:    intent 0.30, industry 0.20, interest 0.20,
                        complementarity 0.10, embedding 0.20
    without embeddings: intent 0.35, industry 0.25, interest 0.25,
                        complementarity 0.15, embedding 0

Without embedding data the embedding weight is always forced to 0 before
the weights are renormalized to sum to 1.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional
import json

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS_WITH_EMBEDDINGS = {
    "intent": 0.30,
    "industry": 0.20,
    "interest": 0.20,
    "complementarity": 0.10,
    "embedding": 0.20,
}

DEFAULT_WEIGHTS_WITHOUT_EMBEDDINGS = {
    "intent": 0.35,
    "industry": 0.25,
    "interest": 0.25,
    "complementarity": 0.15,
    "embedding": 0.0,
}


@dataclass
class ScoringConfig:
    """
    Per-run scoring configuration.

    Attributes:
        intent_weight: Weight of the intent compatibility sub-score
        industry_weight: Weight of the industry sub-score
        interest_weight: Weight of the interest overlap sub-score
        complementarity_weight: Weight of the complementarity sub-score
        embedding_weight: Weight of the embedding similarity sub-score
        minimum_score: Candidates with a composite below this are discarded
        exclude_same_company: Skip pairs from the same company
        exclude_same_role: Skip pairs with the same role
        intent_confidence_threshold: Accepted for compatibility; not applied as a filter
    """
    intent_weight: Optional[float] = None
    industry_weight: Optional[float] = None
    interest_weight: Optional[float] = None
    complementarity_weight: Optional[float] = None
    embedding_weight: Optional[float] = None
    minimum_score: float = 40.0
    exclude_same_company: bool = True
    exclude_same_role: bool = False
    intent_confidence_threshold: int = 0

    def validate(self) -> None:
        """Validate configuration values."""
        for name, value in self.configured_weights().items():
            if value is not None and value < 0:
                raise ValueError(f"{name} weight must be non-negative, got {value}")
        if not 0 <= self.minimum_score <= 100:
            raise ValueError(f"minimum_score must be in [0, 100], got {self.minimum_score}")
        if not 0 <= self.intent_confidence_threshold <= 100:
            raise ValueError(
                f"intent_confidence_threshold must be in [0, 100], got {self.intent_confidence_threshold}"
            )

    def configured_weights(self) -> Dict[str, Optional[float]]:
        """Weights as configured, with None for unset entries."""
        return {
            "intent": self.intent_weight,
            "industry": self.industry_weight,
            "interest": self.interest_weight,
            "complementarity": self.complementarity_weight,
            "embedding": self.embedding_weight,
        }

    def normalized_weights(self, has_embeddings: bool) -> Dict[str, float]:
        """
        Resolve and renormalize the sub-score weights for one run.

        Args:
            has_embeddings: Whether embedding similarities exist for the run

        Returns:
            Dictionary of sub-score name -> weight, summing to 1

        Raises:
            ValueError: If the resolved weights sum to zero
        """
        defaults = DEFAULT_WEIGHTS_WITH_EMBEDDINGS if has_embeddings else DEFAULT_WEIGHTS_WITHOUT_EMBEDDINGS
        weights = {
            name: (defaults[name] if value is None else float(value))
            for name, value in self.configured_weights().items()
        }
        if not has_embeddings:
            weights["embedding"] = 0.0

        total = sum(weights.values())
        if total <= 0:
            raise ValueError(
                "Scoring weights sum to zero; at least one sub-score weight must be positive"
            )

        return {name: value / total for name, value in weights.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringConfig":
        """Create from main config dictionary."""
        scoring_config = config.get("scoring", {}) or {}
        weights = scoring_config.get("weights", {}) or {}
        minimum_score = scoring_config.get("minimum_score")
        threshold = scoring_config.get("intent_confidence_threshold")

        return cls(
            intent_weight=weights.get("intent"),
            industry_weight=weights.get("industry"),
            interest_weight=weights.get("interest"),
            complementarity_weight=weights.get("complementarity"),
            embedding_weight=weights.get("embedding"),
            minimum_score=40.0 if minimum_score is None else minimum_score,
            exclude_same_company=scoring_config.get("exclude_same_company", True),
            exclude_same_role=scoring_config.get("exclude_same_role", False),
            intent_confidence_threshold=0 if threshold is None else threshold
        )

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "ScoringConfig":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)
