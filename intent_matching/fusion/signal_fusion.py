"""
Signal fusion for participant intent vectors.

This module merges the signals produced by the extractors into one
probability vector and one confidence per participant.

Fusion Formula:
    w_eff_s = weight_s * confidence_s / 100          (signals with confidence 0 skipped)
    vector  = normalize(sum(w_eff_s * vector_s) / sum(w_eff_s))
    confidence = min(round(sum(confidence_s * weight_s) / sum(weight_s)), cap)

Source weights reflect how trustworthy each kind of evidence is:
- explicit selections: 3.0
- looking-for / offering text: 2.0
- title + bio text: 1.5
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any, Iterable, List, Optional, Sequence, Tuple
import json

from joblib import Parallel, delayed

from ..intents import (
    INTENT_KEYS,
    IntentVector,
    empty_vector,
    normalize_vector,
    uniform_vector,
    is_complete_vector,
    round_half_up,
)
from ..profiles import ParticipantScoringProfile
from ..signals import (
    Signal,
    from_explicit_intents,
    from_text_signals,
    build_looking_offering_text,
    validate_classification,
)

logger = logging.getLogger(__name__)


@dataclass
class FusionConfig:
    """
    Configuration for signal fusion.

    Attributes:
        explicit_weight: Source weight of explicit intent selections
        profile_weight: Source weight of title + bio text
        looking_offering_weight: Source weight of looking-for / offering text
        confidence_cap: Highest confidence a fused vector may claim
    """
    explicit_weight: float = 3.0
    profile_weight: float = 1.5
    looking_offering_weight: float = 2.0
    confidence_cap: int = 95

    def validate(self) -> None:
        """Validate configuration values."""
        for name in ["explicit_weight", "profile_weight", "looking_offering_weight"]:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if not 0 <= self.confidence_cap <= 100:
            raise ValueError(f"confidence_cap must be in [0, 100], got {self.confidence_cap}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FusionConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "FusionConfig":
        """Create from main config dictionary."""
        fusion_config = config.get("fusion", {}) or {}
        source_weights = fusion_config.get("source_weights", {}) or {}

        return cls(
            explicit_weight=source_weights.get("explicit", 3.0),
            profile_weight=source_weights.get("profile_text", 1.5),
            looking_offering_weight=source_weights.get("looking_offering_text", 2.0),
            confidence_cap=fusion_config.get("confidence_cap", 95)
        )

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved fusion config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "FusionConfig":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


@dataclass(frozen=True)
class ParticipantVector:
    """
    Fused intent vector for one participant.

    Attributes:
        vector: Normalized intent vector
        confidence: Confidence (0-100)
        was_recomputed: False when a cached vector was reused
        classification: Validated external classification, carried alongside
    """
    vector: IntentVector
    confidence: int
    was_recomputed: bool
    classification: Optional[IntentVector] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the cache shape written back onto participant records."""
        return {
            "intent_vector": dict(self.vector),
            "intent_confidence": self.confidence,
        }


def merge_signals(
    signals: Sequence[Signal],
    confidence_cap: int = 95
) -> Tuple[IntentVector, int]:
    """
    Merge weighted signals into one normalized vector and confidence.

    Args:
        signals: Signals to merge
        confidence_cap: Upper bound on the output confidence

    Returns:
        Tuple of (normalized vector, confidence). With no usable evidence the
        uniform vector and confidence 0 are returned.
    """
    merged = empty_vector()
    total_weight = 0.0

    for signal in signals:
        if signal.confidence == 0:
            continue
        effective_weight = signal.weight * (signal.confidence / 100)
        for key in INTENT_KEYS:
            merged[key] += signal.vector.get(key, 0.0) * effective_weight
        total_weight += effective_weight

    if total_weight == 0:
        return uniform_vector(), 0

    for key in INTENT_KEYS:
        merged[key] /= total_weight

    # Averaged over every supplied signal by source weight, not effective weight
    source_weight = sum(s.weight for s in signals)
    average = sum(s.confidence * s.weight for s in signals) / source_weight
    confidence = min(int(round_half_up(average)), confidence_cap)

    return normalize_vector(merged), confidence


def collect_signals(
    profile: ParticipantScoringProfile,
    config: Optional[FusionConfig] = None
) -> List[Signal]:
    """
    Build the signals available for one participant.

    Only signals carrying evidence (confidence > 0) are returned.
    """
    config = config or FusionConfig()
    signals = []

    explicit = profile.explicit_intents
    if explicit:
        vector, confidence = from_explicit_intents(explicit)
        if confidence > 0:
            signals.append(Signal(vector, confidence, config.explicit_weight))

    if profile.title or profile.bio:
        vector, confidence = from_text_signals(profile.title, profile.bio, profile.company_name)
        if confidence > 0:
            signals.append(Signal(vector, confidence, config.profile_weight))

    looking_offering = build_looking_offering_text(profile.looking_for, profile.offering)
    if looking_offering:
        vector, confidence = from_text_signals(None, looking_offering)
        if confidence > 0:
            signals.append(Signal(vector, confidence, config.looking_offering_weight))

    return signals


def compute_participant_vector(
    profile: ParticipantScoringProfile,
    config: Optional[FusionConfig] = None
) -> Tuple[IntentVector, int]:
    """
    Compute a participant's intent vector from every available signal.

    Behavioral activity and external classifications are not fused.

    Args:
        profile: Participant record
        config: Fusion configuration (defaults to the reference weights)

    Returns:
        Tuple of (normalized vector, confidence)
    """
    config = config or FusionConfig()
    signals = collect_signals(profile, config)

    if not signals:
        return uniform_vector(), 0

    return merge_signals(signals, confidence_cap=config.confidence_cap)


def resolve_participant_vector(
    profile: ParticipantScoringProfile,
    config: Optional[FusionConfig] = None
) -> ParticipantVector:
    """
    Reuse a cached vector when it is usable, otherwise recompute it.

    A cache entry is usable when it covers every intent key and its
    confidence is in (0, 100]. Persisting a recomputed vector is left to the
    caller.
    """
    classification = validate_classification(profile.ai_intent_classification)

    if 0 < profile.intent_confidence <= 100 and is_complete_vector(profile.intent_vector):
        logger.debug(f"Reusing cached intent vector for participant {profile.id}")
        return ParticipantVector(
            vector={key: float(profile.intent_vector[key]) for key in INTENT_KEYS},
            confidence=profile.intent_confidence,
            was_recomputed=False,
            classification=classification
        )

    vector, confidence = compute_participant_vector(profile, config)
    logger.debug(f"Computed intent vector for participant {profile.id} (confidence={confidence})")
    return ParticipantVector(
        vector=vector,
        confidence=confidence,
        was_recomputed=True,
        classification=classification
    )


def compute_participant_vectors(
    profiles: Iterable[ParticipantScoringProfile],
    config: Optional[FusionConfig] = None,
    n_jobs: int = 1
) -> Dict[str, ParticipantVector]:
    """
    Resolve vectors for every participant of a run.

    Participants are independent, so the work is spread over n_jobs
    joblib workers.

    Returns:
        Dictionary mapping participant id -> ParticipantVector
    """
    profiles = list(profiles)
    config = config or FusionConfig()

    results = Parallel(n_jobs=n_jobs)(
        delayed(resolve_participant_vector)(profile, config) for profile in profiles
    )
    vectors = {profile.id: result for profile, result in zip(profiles, results)}

    recomputed = sum(1 for v in vectors.values() if v.was_recomputed)
    unscored = sum(1 for v in vectors.values() if v.confidence == 0)
    logger.info(f"Resolved {len(vectors)} intent vectors "
                f"({recomputed} recomputed, {len(vectors) - recomputed} cached, {unscored} without evidence)")
    return vectors
