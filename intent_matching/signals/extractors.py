"""
Signal extractors.

Each extractor turns one kind of evidence about a participant into a
normalized intent vector plus a confidence in [0, 100]:

- Explicit selections: every valid selected intent scores 40
    confidence = min(50 + (count - 1) * 15, 75)   (0 when nothing valid)
- Free text: every matching keyword pattern adds its weight
    confidence = min(matched_patterns * 12, 60)

Externally produced classifications are validated here as well, but are not
fused into the participant vector.
"""

import logging
from collections import abc
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple

from ..intents import INTENT_KEYS, IntentVector, empty_vector, normalize_vector
from .patterns import TITLE_SIGNALS, BODY_SIGNALS, SignalPattern

logger = logging.getLogger(__name__)

EXPLICIT_INTENT_SCORE = 40
EXPLICIT_BASE_CONFIDENCE = 50
EXPLICIT_CONFIDENCE_STEP = 15
EXPLICIT_MAX_CONFIDENCE = 75

TEXT_CONFIDENCE_PER_MATCH = 12
TEXT_MAX_CONFIDENCE = 60


@dataclass(frozen=True)
class Signal:
    """
    One extractor's output prior to fusion.

    Attributes:
        vector: Normalized intent vector
        confidence: Evidence strength (0-100)
        weight: Fixed trust multiplier of the evidence source
    """
    vector: IntentVector
    confidence: int
    weight: float


def from_explicit_intents(intents: Iterable[str]) -> Tuple[IntentVector, int]:
    """
    Score the intents a participant explicitly selected.

    Values outside the six intent keys are dropped. Duplicates count once.

    Args:
        intents: Selected intent keys (typically 0-3)

    Returns:
        Tuple of (normalized vector, confidence)
    """
    selected = []
    for intent in intents or []:
        if intent in INTENT_KEYS:
            if intent not in selected:
                selected.append(intent)
        else:
            logger.warning(f"Ignoring unknown explicit intent: {intent!r}")

    raw = empty_vector()
    if not selected:
        return normalize_vector(raw), 0

    for intent in selected:
        raw[intent] += EXPLICIT_INTENT_SCORE

    confidence = min(
        EXPLICIT_BASE_CONFIDENCE + (len(selected) - 1) * EXPLICIT_CONFIDENCE_STEP,
        EXPLICIT_MAX_CONFIDENCE
    )
    return normalize_vector(raw), confidence


def _apply_patterns(text: str, table: Tuple[SignalPattern, ...], raw: IntentVector) -> int:
    """Add the weight of every matching pattern to raw; return the match count."""
    matched = 0
    for rule in table:
        if rule.pattern.search(text):
            raw[rule.intent] += rule.weight
            matched += 1
    return matched


def from_text_signals(
    title: Optional[str],
    bio: Optional[str],
    company_name: Optional[str] = None
) -> Tuple[IntentVector, int]:
    """
    Score free-text profile fields against the keyword tables.

    The title is matched against TITLE_SIGNALS and the bio against
    BODY_SIGNALS. company_name is accepted for signature compatibility
    and does not contribute to the score.

    Args:
        title: Job title
        bio: Free-text biography (or any body text)
        company_name: Company name (unused)

    Returns:
        Tuple of (normalized vector, confidence)
    """
    raw = empty_vector()
    matched = 0

    if title:
        matched += _apply_patterns(title, TITLE_SIGNALS, raw)
    if bio:
        matched += _apply_patterns(bio, BODY_SIGNALS, raw)

    confidence = min(matched * TEXT_CONFIDENCE_PER_MATCH, TEXT_MAX_CONFIDENCE)
    return normalize_vector(raw), confidence


from_profile_signals = from_text_signals


def build_looking_offering_text(looking_for: Optional[str], offering: Optional[str]) -> str:
    """
    Combine looking-for and offering answers into one body text.

    The fragments are prefixed so that the body patterns read them in
    context, e.g. "looking for a CRM vendor. we offer analytics".
    """
    parts = []
    if looking_for:
        parts.append(f"looking for {looking_for}")
    if offering:
        parts.append(f"we offer {offering}")
    return ". ".join(parts)


def validate_classification(payload: Optional[Mapping[str, Any]]) -> Optional[IntentVector]:
    """
    Validate an externally produced intent classification.

    A valid payload has a number in [0, 1] for every intent key. It is
    normalized to a probability distribution before being returned.

    Args:
        payload: Mapping of intent key -> probability, e.g. parsed JSON

    Returns:
        Normalized vector, or None if the payload is missing or invalid
    """
    if not payload:
        return None
    if not isinstance(payload, abc.Mapping):
        logger.warning(f"Rejecting intent classification: expected a mapping, got {type(payload).__name__}")
        return None

    values = {}
    for key in INTENT_KEYS:
        value = payload.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 1:
            logger.warning(f"Rejecting intent classification: invalid value for {key!r}: {value!r}")
            return None
        values[key] = float(value)

    return normalize_vector(values)
