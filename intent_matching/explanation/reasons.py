"""
Human-readable match reasons.

Reasons are produced only for candidates that survive the minimum score,
in a fixed order:
1. dominant intent pairing (intent score >= 40)
2. same industry (industry score >= 90)
3. shared expertise (up to 3 items)
4. A's expertise covers B's interests
5. looking-for words (longer than 3 characters) found in the other side's offering
6. high embedding similarity (embedding score >= 75, embeddings present)
Every candidate carries at least one reason; "Complementary profiles" is
the fallback.
"""

import logging
from typing import List, Mapping

import numpy as np

from ..intents import INTENT_KEYS, vector_to_array
from ..profiles import ParticipantScoringProfile

logger = logging.getLogger(__name__)

INTENT_REASON_THRESHOLD = 40
INDUSTRY_REASON_THRESHOLD = 90
EMBEDDING_REASON_THRESHOLD = 75
SHARED_EXPERTISE_LIMIT = 3
NEED_WORD_MIN_LENGTH = 3

FALLBACK_REASON = "Complementary profiles"


def dominant_intent_pair(vector_a: Mapping[str, float], vector_b: Mapping[str, float]):
    """
    Find the intent pair (i, j) maximizing p_A[i] * p_B[j].

    The compatibility model is not applied here. Ties resolve to the first
    pair in INTENT_KEYS row-major order.
    """
    products = np.outer(vector_to_array(vector_a), vector_to_array(vector_b))
    i, j = np.unravel_index(int(np.argmax(products)), products.shape)
    return INTENT_KEYS[i], INTENT_KEYS[j]


def describe_intents(
    a: ParticipantScoringProfile,
    b: ParticipantScoringProfile,
    vector_a: Mapping[str, float],
    vector_b: Mapping[str, float]
) -> str:
    """Describe the dominant intent pairing of two participants."""
    intent_a, intent_b = dominant_intent_pair(vector_a, vector_b)
    if intent_a == intent_b:
        return f"Both are {intent_a}"
    return f"{a.display_name} is {intent_a}, {b.display_name} is {intent_b}"


def shared_items(first: List[str], second: List[str]) -> List[str]:
    """Items of first that also occur in second, in first's order, without repeats."""
    lookup = set(second)
    shared = []
    for item in first:
        if item in lookup and item not in shared:
            shared.append(item)
    return shared


def generate_reasons(
    a: ParticipantScoringProfile,
    b: ParticipantScoringProfile,
    vector_a: Mapping[str, float],
    vector_b: Mapping[str, float],
    intent_score: float,
    industry_score: float,
    embedding_score: float,
    has_embeddings: bool
) -> List[str]:
    """
    Generate the reasons explaining why A and B were matched.

    Args:
        a: Participant A (smaller id)
        b: Participant B (larger id)
        vector_a: Intent vector of A
        vector_b: Intent vector of B
        intent_score: Intent compatibility sub-score
        industry_score: Industry sub-score
        embedding_score: Embedding similarity sub-score
        has_embeddings: Whether embedding data exists for the run

    Returns:
        Non-empty list of reason strings
    """
    reasons = []

    if intent_score >= INTENT_REASON_THRESHOLD:
        reasons.append(describe_intents(a, b, vector_a, vector_b))

    if industry_score >= INDUSTRY_REASON_THRESHOLD:
        reasons.append(f"Both in {a.industry}")

    expertise = shared_items(a.expertise_areas, b.expertise_areas)
    if expertise:
        reasons.append(f"Shared expertise: {', '.join(expertise[:SHARED_EXPERTISE_LIMIT])}")

    if shared_items(a.expertise_areas, b.interests):
        reasons.append(f"{a.display_name} has expertise {b.display_name} is interested in")

    if a.needs_met_by(b, min_length=NEED_WORD_MIN_LENGTH):
        reasons.append(f"{a.display_name}'s needs align with {b.display_name}'s offerings")
    if b.needs_met_by(a, min_length=NEED_WORD_MIN_LENGTH):
        reasons.append(f"{b.display_name}'s needs align with {a.display_name}'s offerings")

    if has_embeddings and embedding_score >= EMBEDDING_REASON_THRESHOLD:
        reasons.append("High AI profile similarity")

    if not reasons:
        reasons.append(FALLBACK_REASON)

    return reasons
