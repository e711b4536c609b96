"""Tests for the run report."""

import json

import pytest

from intent_matching.profiles import ParticipantScoringProfile
from intent_matching.scoring import CompositeMatchScorer, ScoringConfig
from intent_matching.evaluation import (
    compute_intent_coverage,
    compute_score_distribution_stats,
    compute_subscore_correlations,
    create_run_report,
)


@pytest.fixture
def run_result(seller, buyer):
    people = [
        seller,
        buyer,
        ParticipantScoringProfile(id="c", intents=["learning"], industry="Finance"),
        ParticipantScoringProfile(id="d"),
    ]
    return CompositeMatchScorer(ScoringConfig(minimum_score=0)).score_event(people)


class TestScoreDistribution:
    """Tests for compute_score_distribution_stats."""

    def test_stats(self):
        stats = compute_score_distribution_stats([40, 50, 60])
        assert stats.count == 3
        assert stats.mean == pytest.approx(50)
        assert stats.min == 40
        assert stats.max == 60
        assert stats.quantiles["p50"] == pytest.approx(50)

    def test_empty(self):
        assert compute_score_distribution_stats([]) is None


class TestSubscoreCorrelations:
    """Tests for compute_subscore_correlations."""

    def test_constant_subscores_are_undefined(self, run_result):
        correlations = compute_subscore_correlations(run_result.candidates)
        assert correlations["embedding"] is None
        assert correlations["intent"] is not None
        assert -1.0 <= correlations["intent"] <= 1.0

    def test_too_few_candidates(self, run_result):
        correlations = compute_subscore_correlations(run_result.candidates[:1])
        assert all(value is None for value in correlations.values())


class TestIntentCoverage:
    """Tests for compute_intent_coverage."""

    def test_counts(self, run_result):
        coverage = compute_intent_coverage(run_result.vectors)
        assert coverage.participant_count == 4
        assert coverage.unscored_count == 1
        assert coverage.recomputed_count == 4
        assert coverage.mean_confidence == pytest.approx(37.5)
        assert coverage.dominant_intents["selling"] == 1
        assert coverage.dominant_intents["buying"] == 1
        assert coverage.dominant_intents["learning"] == 1
        assert coverage.dominant_intents["networking"] == 0


class TestRunReport:
    """Tests for create_run_report."""

    def test_report(self, run_result, tmp_path):
        report = create_run_report(run_result, event_id="event-1")
        assert report.distribution_stats.count == 6
        assert report.run_summary["match_count"] == 6

        path = tmp_path / "report.json"
        report.save(str(path))
        saved = json.loads(path.read_text())
        assert saved["event_id"] == "event-1"
        assert saved["intent_coverage"]["participant_count"] == 4

        summary = report.summary()
        assert "event-1" in summary
        assert "embedding: n/a" in summary

    def test_report_without_candidates(self, blank_pair):
        result = CompositeMatchScorer().score_event(blank_pair)
        report = create_run_report(result)
        assert report.distribution_stats is None
        assert report.to_dict()["distribution_stats"] is None
        assert "no candidates" in report.summary()
