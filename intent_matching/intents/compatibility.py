"""
Intent compatibility model and pairwise intent scoring.

The compatibility model is a fixed, hand-authored 6x6 table M where
M[a][b] in [0, 100] scores how well intent a in one participant pairs with
intent b in the other.

Pairwise Formula:
    contribution[i][j] = p_A[i] * M[i][j] * p_B[j]
    peak = max(contribution)          # the single best reason to meet
    base = sum(contribution)          # p_A^T M p_B, overall alignment
    K = min(conf_A, conf_B) / 100     # only as trustworthy as the weaker side
    final = (0.6 * peak + 0.4 * base) * (0.5 + 0.5 * K)
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any, Mapping

import numpy as np

from .vectors import INTENT_KEYS, vector_to_array, round_half_up

logger = logging.getLogger(__name__)


# Rows: intent of participant A, columns: intent of participant B (INTENT_KEYS order)
COMPATIBILITY_MATRIX = np.array([
    #  buy  sell  inv  part  learn  net
    [   60,  100,  30,   30,    30,  30],   # buying
    [  100,   60,  80,   80,    60,  30],   # selling
    [   30,   80,  60,  100,    30,  30],   # investing
    [   30,   80, 100,   60,    60,  60],   # partnering
    [   30,   60,  30,   60,    60, 100],   # learning
    [   30,   30,  30,   60,   100,  60],   # networking
], dtype=np.float64)
COMPATIBILITY_MATRIX.setflags(write=False)

PEAK_WEIGHT = 0.6
BASE_WEIGHT = 0.4
CONFIDENCE_FLOOR = 0.5

_KEY_INDEX = {key: i for i, key in enumerate(INTENT_KEYS)}


@dataclass(frozen=True)
class IntentCompatibility:
    """
    Result of pairwise intent scoring.

    Attributes:
        peak: Strongest single intent-pairing contribution (0-100, 2 decimals)
        base: Full bilinear form over all intent pairings (0-100, 2 decimals)
        confidence: min(conf_A, conf_B) as an integer percentage
        final: Hybrid score damped by confidence (0-100, 2 decimals)
    """
    peak: float
    base: float
    confidence: int
    final: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def compatibility(intent_a: str, intent_b: str) -> float:
    """
    Look up M[intent_a][intent_b].

    Raises:
        KeyError: If either intent is not one of the six intent keys
    """
    return float(COMPATIBILITY_MATRIX[_KEY_INDEX[intent_a], _KEY_INDEX[intent_b]])


def compute_intent_compatibility(
    vector_a: Mapping[str, float],
    confidence_a: float,
    vector_b: Mapping[str, float],
    confidence_b: float
) -> IntentCompatibility:
    """
    Compute the intent compatibility between two participants.

    Callers evaluate pairs in canonical (A, B) order so that repeated runs
    produce identical numbers.

    Args:
        vector_a: Normalized intent vector of participant A
        confidence_a: Confidence (0-100) of participant A's vector
        vector_b: Normalized intent vector of participant B
        confidence_b: Confidence (0-100) of participant B's vector

    Returns:
        IntentCompatibility with peak, base, confidence and final scores
    """
    p_a = vector_to_array(vector_a)
    p_b = vector_to_array(vector_b)

    contributions = np.outer(p_a, p_b) * COMPATIBILITY_MATRIX
    peak = max(float(contributions.max()), 0.0)
    base = float(contributions.sum())

    k = min(confidence_a, confidence_b) / 100
    final = (PEAK_WEIGHT * peak + BASE_WEIGHT * base) * (CONFIDENCE_FLOOR + (1 - CONFIDENCE_FLOOR) * k)

    return IntentCompatibility(
        peak=round_half_up(peak, 2),
        base=round_half_up(base, 2),
        confidence=int(round_half_up(k * 100)),
        final=round_half_up(final, 2)
    )
