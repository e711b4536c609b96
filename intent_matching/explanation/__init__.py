"""Match explanation module."""

from .reasons import generate_reasons, dominant_intent_pair, FALLBACK_REASON

__all__ = ["generate_reasons", "dominant_intent_pair", "FALLBACK_REASON"]
