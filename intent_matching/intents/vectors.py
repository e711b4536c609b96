"""
Intent taxonomy and intent vector helpers.

An intent vector maps every intent key to a non-negative number. Two forms
are used throughout the engine:
- raw: an unnormalized accumulator (values have no upper bound)
- normalized: a probability distribution rounded to 3 decimals

Normalization Rules:
    p_k = raw_k / sum(raw), rounded to 3 decimals
    rounding residue is assigned by largest remainder so sum(p) == 1.000
    an all-zero raw vector normalizes to the uniform distribution (1/6 each)
"""

import math
from collections import abc
from enum import Enum
from typing import Dict, Mapping, Optional

import numpy as np


class IntentKey(Enum):
    """Reasons a participant attends an event. Order is significant for tie-breaking."""
    BUYING = "buying"
    SELLING = "selling"
    INVESTING = "investing"
    PARTNERING = "partnering"
    LEARNING = "learning"
    NETWORKING = "networking"


INTENT_KEYS = tuple(key.value for key in IntentKey)

IntentVector = Dict[str, float]

# Normalized vectors carry 3 decimals
_PRECISION = 1000


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round half away from zero for non-negative scores.

    Python's round() uses banker's rounding; scores and confidences in this
    engine round .5 upwards.

    Args:
        value: Value to round
        ndigits: Number of decimals to keep

    Returns:
        Rounded value (a float; wrap in int() for integer confidences)
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def empty_vector() -> IntentVector:
    """Create a raw vector with every intent at zero."""
    return {key: 0.0 for key in INTENT_KEYS}


def uniform_vector() -> IntentVector:
    """Create the uniform distribution used when there is no evidence."""
    uniform = 1 / len(INTENT_KEYS)
    return {key: uniform for key in INTENT_KEYS}


def vector_to_array(vector: Mapping[str, float]) -> np.ndarray:
    """
    Convert an intent vector to a numpy array in INTENT_KEYS order.

    Missing keys are read as zero.

    Args:
        vector: Mapping of intent key -> value

    Returns:
        Float array of shape (6,)
    """
    return np.array([float(vector.get(key, 0.0)) for key in INTENT_KEYS], dtype=np.float64)


def is_complete_vector(vector: Optional[Mapping[str, float]]) -> bool:
    """Check that a vector carries a finite, non-negative value for every intent key."""
    if not vector or not isinstance(vector, abc.Mapping):
        return False
    for key in INTENT_KEYS:
        value = vector.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value) or value < 0:
            return False
    return True


def normalize_vector(raw: Mapping[str, float]) -> IntentVector:
    """
    Normalize a raw score vector into a probability distribution.

    Args:
        raw: Raw (unnormalized) intent scores

    Returns:
        Normalized vector whose values sum to 1.0 (3-decimal precision),
        or the uniform distribution if every raw value is zero
    """
    values = np.maximum(vector_to_array(raw), 0.0)
    total = values.sum()

    if total <= 0:
        return uniform_vector()

    # Work in integer thousandths so the rounded values sum exactly to 1.000
    scaled = np.round(values / total * _PRECISION, 6)
    units = np.floor(scaled)
    remainders = scaled - units
    shortfall = int(round(_PRECISION - units.sum()))

    if shortfall > 0:
        order = np.argsort(-remainders, kind="stable")
        units[order[:shortfall]] += 1

    return {key: float(units[i]) / _PRECISION for i, key in enumerate(INTENT_KEYS)}
