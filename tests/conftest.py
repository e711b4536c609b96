"""Shared fixtures for the intent matching tests."""

import pytest

from intent_matching.profiles import ParticipantScoringProfile


@pytest.fixture
def seller():
    """Participant who explicitly sells and has AI expertise."""
    return ParticipantScoringProfile(
        id="a",
        full_name="Ana",
        intents=["selling"],
        industry="Technology",
        expertise_areas=["AI"],
    )


@pytest.fixture
def buyer():
    """Participant who explicitly buys and is interested in AI."""
    return ParticipantScoringProfile(
        id="b",
        full_name="Ben",
        intents=["buying"],
        industry="Technology",
        interests=["AI"],
    )


@pytest.fixture
def blank_pair():
    """Two participants without any scoring data."""
    return [ParticipantScoringProfile(id="x"), ParticipantScoringProfile(id="y")]
