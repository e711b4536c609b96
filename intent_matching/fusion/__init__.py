"""Signal fusion module for participant intent vectors."""

from .signal_fusion import (
    FusionConfig,
    ParticipantVector,
    merge_signals,
    collect_signals,
    compute_participant_vector,
    resolve_participant_vector,
    compute_participant_vectors,
)

__all__ = [
    "FusionConfig",
    "ParticipantVector",
    "merge_signals",
    "collect_signals",
    "compute_participant_vector",
    "resolve_participant_vector",
    "compute_participant_vectors",
]
