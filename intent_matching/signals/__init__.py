"""Signal extraction module for participant intent evidence."""

from .extractors import (
    Signal,
    from_explicit_intents,
    from_text_signals,
    from_profile_signals,
    build_looking_offering_text,
    validate_classification,
)
from .patterns import SignalPattern, TITLE_SIGNALS, BODY_SIGNALS

__all__ = [
    "Signal",
    "from_explicit_intents",
    "from_text_signals",
    "from_profile_signals",
    "build_looking_offering_text",
    "validate_classification",
    "SignalPattern",
    "TITLE_SIGNALS",
    "BODY_SIGNALS",
]
