"""Participant profile schema."""

from .schema import ParticipantScoringProfile

__all__ = ["ParticipantScoringProfile"]
