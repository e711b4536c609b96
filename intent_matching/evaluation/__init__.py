"""Evaluation module for scoring runs."""

from .metrics import (
    ScoreDistributionStats,
    IntentCoverage,
    RunReport,
    compute_score_distribution_stats,
    compute_subscore_correlations,
    compute_intent_coverage,
    create_run_report,
)

__all__ = [
    "ScoreDistributionStats",
    "IntentCoverage",
    "RunReport",
    "compute_score_distribution_stats",
    "compute_subscore_correlations",
    "compute_intent_coverage",
    "create_run_report",
]
