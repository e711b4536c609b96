"""Tests for intent vectors and the compatibility model."""

import numpy as np
import pytest

from intent_matching.intents import (
    INTENT_KEYS,
    COMPATIBILITY_MATRIX,
    compatibility,
    compute_intent_compatibility,
    empty_vector,
    is_complete_vector,
    normalize_vector,
    round_half_up,
    uniform_vector,
)


def one_hot(intent):
    vector = empty_vector()
    vector[intent] = 1.0
    return vector


class TestNormalizeVector:
    """Tests for normalize_vector."""

    @pytest.mark.parametrize("raw", [
        {"buying": 1, "selling": 1, "investing": 1},
        {"selling": 33, "partnering": 20},
        {"buying": 0.1, "networking": 7, "learning": 2.5},
        {key: 1 for key in INTENT_KEYS},
    ])
    def test_sums_to_one(self, raw):
        normalized = normalize_vector(raw)
        assert set(normalized) == set(INTENT_KEYS)
        assert sum(normalized.values()) == pytest.approx(1.0, abs=0.001)
        assert all(value >= 0 for value in normalized.values())

    def test_three_decimals(self):
        normalized = normalize_vector({"buying": 1, "selling": 1, "investing": 1})
        assert normalized["buying"] == pytest.approx(0.334)
        assert normalized["selling"] == pytest.approx(0.333)
        assert normalized["investing"] == pytest.approx(0.333)
        assert normalized["learning"] == 0.0

    def test_all_zero_gives_uniform(self):
        normalized = normalize_vector(empty_vector())
        for key in INTENT_KEYS:
            assert round(normalized[key], 4) == 0.1667

    def test_negative_values_are_ignored(self):
        normalized = normalize_vector({"buying": -5, "selling": 2})
        assert normalized["buying"] == 0.0
        assert normalized["selling"] == pytest.approx(1.0)

    def test_uniform_vector(self):
        assert uniform_vector() == pytest.approx({key: 1 / 6 for key in INTENT_KEYS})


class TestVectorHelpers:
    """Tests for vector validation and rounding helpers."""

    def test_complete_vector(self):
        assert is_complete_vector(uniform_vector())

    def test_incomplete_vectors(self):
        partial = uniform_vector()
        del partial["networking"]
        assert not is_complete_vector(partial)
        assert not is_complete_vector(None)
        assert not is_complete_vector({**uniform_vector(), "buying": -0.1})
        assert not is_complete_vector({**uniform_vector(), "buying": "high"})
        assert not is_complete_vector('{"buying": 1.0}')
        assert not is_complete_vector(list(uniform_vector().values()))

    def test_round_half_up(self):
        assert round_half_up(34.5) == 35
        assert round_half_up(12.125, 2) == pytest.approx(12.13)
        assert round_half_up(0.5) == 1


class TestCompatibilityModel:
    """Tests for the 6x6 compatibility model."""

    def test_matrix_is_symmetric(self):
        assert COMPATIBILITY_MATRIX.shape == (6, 6)
        for i in range(6):
            for j in range(6):
                assert COMPATIBILITY_MATRIX[i, j] == COMPATIBILITY_MATRIX[j, i]

    def test_matrix_is_read_only(self):
        with pytest.raises(ValueError):
            COMPATIBILITY_MATRIX[0, 0] = 1

    def test_lookup(self):
        assert compatibility("selling", "buying") == 100
        assert compatibility("selling", "selling") == 60
        assert compatibility("learning", "networking") == 100
        assert compatibility("investing", "partnering") == 100


class TestIntentCompatibility:
    """Tests for compute_intent_compatibility."""

    def test_pure_selling_pair(self):
        result = compute_intent_compatibility(one_hot("selling"), 100, one_hot("selling"), 100)
        assert result.peak == 60
        assert result.base == 60
        assert result.confidence == 100
        assert result.final == pytest.approx(60)

    def test_seller_meets_buyer(self):
        result = compute_intent_compatibility(one_hot("selling"), 50, one_hot("buying"), 50)
        assert result.peak == 100
        assert result.base == 100
        assert result.confidence == 50
        assert result.final == pytest.approx(75)

    @pytest.mark.parametrize("confidence_a,confidence_b", [(0, 80), (80, 0), (0, 0)])
    def test_zero_confidence_halves_score(self, confidence_a, confidence_b):
        a, b = one_hot("selling"), one_hot("selling")
        result = compute_intent_compatibility(a, confidence_a, b, confidence_b)
        assert result.confidence == 0
        assert result.final == pytest.approx(0.5 * (0.6 * result.peak + 0.4 * result.base))
        assert result.final > 0

    def test_uniform_vectors(self):
        result = compute_intent_compatibility(uniform_vector(), 0, uniform_vector(), 0)
        assert result.peak == pytest.approx(2.78)
        assert result.base == pytest.approx(57.22)
        assert result.final == pytest.approx(12.28)

    def test_uses_lower_confidence(self):
        result = compute_intent_compatibility(one_hot("buying"), 90, one_hot("selling"), 30)
        assert result.confidence == 30
        assert result.final == pytest.approx(100 * (0.5 + 0.5 * 0.3))

    def test_swap_gives_same_scores(self):
        rng = np.random.RandomState(0)
        a = normalize_vector(dict(zip(INTENT_KEYS, rng.rand(6))))
        b = normalize_vector(dict(zip(INTENT_KEYS, rng.rand(6))))
        assert compute_intent_compatibility(a, 40, b, 70) == compute_intent_compatibility(b, 70, a, 40)

    def test_to_dict(self):
        result = compute_intent_compatibility(one_hot("selling"), 50, one_hot("buying"), 50)
        assert result.to_dict() == {"peak": 100, "base": 100, "confidence": 50, "final": 75}
