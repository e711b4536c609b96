"""
Evaluation metrics for a scoring run.

There are NO ground-truth labels for which matches are good, so the run
report documents behavior rather than accuracy:
1. Score distribution of the surviving candidates
2. Rank correlation of each sub-score with the composite (which dimensions
   actually drive the ranking)
3. Intent coverage: how many participants had evidence for their vector,
   mean confidence, and the distribution of dominant intents

This module DOES NOT claim real-world match quality.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Mapping, Sequence
import json

import numpy as np
from scipy.stats import spearmanr

from ..intents import INTENT_KEYS, vector_to_array
from ..fusion import ParticipantVector
from ..scoring import MatchCandidate, ScoringRunResult

logger = logging.getLogger(__name__)

SUBSCORE_FIELDS = {
    "intent": "intent_score",
    "industry": "industry_score",
    "interest": "interest_score",
    "complementarity": "complementarity_score",
    "embedding": "embedding_score",
}


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 45.2, "p50": 58.0, "p90": 77.1}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class IntentCoverage:
    """How well the participants' intent vectors are supported by evidence."""
    participant_count: int
    unscored_count: int  # confidence 0, uniform fallback vector
    recomputed_count: int
    mean_confidence: float
    dominant_intents: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant_count": int(self.participant_count),
            "unscored_count": int(self.unscored_count),
            "recomputed_count": int(self.recomputed_count),
            "mean_confidence": float(self.mean_confidence),
            "dominant_intents": {k: int(v) for k, v in self.dominant_intents.items()}
        }


@dataclass
class RunReport:
    """
    Evaluation report for one scoring run.

    Contains the score distribution, sub-score correlations and intent
    coverage, plus the run counts.
    """
    event_id: Optional[str]
    distribution_stats: Optional[ScoreDistributionStats]
    subscore_correlations: Dict[str, Optional[float]]
    intent_coverage: IntentCoverage
    run_summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "distribution_stats": self.distribution_stats.to_dict() if self.distribution_stats else None,
            "subscore_correlations": dict(self.subscore_correlations),
            "intent_coverage": self.intent_coverage.to_dict(),
            "run_summary": self.run_summary
        }

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved evaluation report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Run Report: {self.event_id or 'unnamed event'}",
            "=" * 50,
            "",
        ]

        if self.distribution_stats:
            lines.extend([
                f"Score Distribution ({self.distribution_stats.count} candidates):",
                f"  Mean: {self.distribution_stats.mean:.2f}",
                f"  Std:  {self.distribution_stats.std:.2f}",
                f"  Min:  {self.distribution_stats.min:.2f}",
                f"  Max:  {self.distribution_stats.max:.2f}",
            ])
            for q_name, q_value in self.distribution_stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.2f}")
        else:
            lines.append("Score Distribution: no candidates")

        lines.extend(["", "Sub-score Spearman correlation with composite:"])
        for name, corr in self.subscore_correlations.items():
            lines.append(f"  {name}: {'n/a' if corr is None else f'{corr:.4f}'}")

        coverage = self.intent_coverage
        lines.extend([
            "",
            "Intent Coverage:",
            f"  Participants: {coverage.participant_count}",
            f"  Without evidence: {coverage.unscored_count}",
            f"  Recomputed: {coverage.recomputed_count}",
            f"  Mean confidence: {coverage.mean_confidence:.1f}",
        ])
        for intent, count in coverage.dominant_intents.items():
            lines.append(f"  {intent}: {count}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: List[float] = [0.1, 0.25, 0.5, 0.75, 0.9]
) -> Optional[ScoreDistributionStats]:
    """
    Compute distribution statistics for composite scores.

    Args:
        scores: Composite scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance, or None when there are no scores
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        return None

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        count=int(scores.size),
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compute_subscore_correlations(
    candidates: Sequence[MatchCandidate]
) -> Dict[str, Optional[float]]:
    """
    Spearman rank correlation of each sub-score with the composite score.

    A correlation is None when it is undefined: fewer than two candidates,
    or a constant sub-score or composite.
    """
    correlations = {}
    composite = np.array([c.score for c in candidates], dtype=float)

    for name, attr in SUBSCORE_FIELDS.items():
        values = np.array([getattr(c, attr) for c in candidates], dtype=float)
        if len(values) < 2 or np.ptp(values) == 0 or np.ptp(composite) == 0:
            correlations[name] = None
            continue
        correlation, _ = spearmanr(values, composite)
        correlations[name] = float(correlation)

    return correlations


def compute_intent_coverage(vectors: Mapping[str, ParticipantVector]) -> IntentCoverage:
    """
    Summarize evidence behind the participants' intent vectors.

    Participants without evidence carry the uniform vector; they are
    counted as unscored and left out of the dominant intent counts.
    """
    dominant = {key: 0 for key in INTENT_KEYS}
    confidences = []
    unscored = 0
    recomputed = 0

    for vector in vectors.values():
        confidences.append(vector.confidence)
        if vector.was_recomputed:
            recomputed += 1
        if vector.confidence == 0:
            unscored += 1
            continue
        dominant[INTENT_KEYS[int(np.argmax(vector_to_array(vector.vector)))]] += 1

    return IntentCoverage(
        participant_count=len(vectors),
        unscored_count=unscored,
        recomputed_count=recomputed,
        mean_confidence=float(np.mean(confidences)) if confidences else 0.0,
        dominant_intents=dominant
    )


def create_run_report(
    result: ScoringRunResult,
    event_id: Optional[str] = None,
    quantiles: List[float] = [0.1, 0.25, 0.5, 0.75, 0.9]
) -> RunReport:
    """
    Create the evaluation report for a scoring run.

    Args:
        result: Output of CompositeMatchScorer.score_event
        event_id: Event identifier to tag the report with
        quantiles: Quantiles to compute

    Returns:
        RunReport instance
    """
    scores = [c.score for c in result.candidates]

    return RunReport(
        event_id=event_id,
        distribution_stats=compute_score_distribution_stats(scores, quantiles),
        subscore_correlations=compute_subscore_correlations(result.candidates),
        intent_coverage=compute_intent_coverage(result.vectors),
        run_summary=result.summary()
    )
