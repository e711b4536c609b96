"""Intent taxonomy, vector helpers and the compatibility model."""

from .vectors import (
    IntentKey,
    INTENT_KEYS,
    IntentVector,
    empty_vector,
    uniform_vector,
    normalize_vector,
    vector_to_array,
    is_complete_vector,
    round_half_up,
)
from .compatibility import (
    COMPATIBILITY_MATRIX,
    IntentCompatibility,
    compatibility,
    compute_intent_compatibility,
)

__all__ = [
    "IntentKey",
    "INTENT_KEYS",
    "IntentVector",
    "empty_vector",
    "uniform_vector",
    "normalize_vector",
    "vector_to_array",
    "is_complete_vector",
    "round_half_up",
    "COMPATIBILITY_MATRIX",
    "IntentCompatibility",
    "compatibility",
    "compute_intent_compatibility",
]
