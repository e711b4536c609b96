"""Tests for match reason generation."""

import pytest

from intent_matching.intents import empty_vector, uniform_vector
from intent_matching.profiles import ParticipantScoringProfile
from intent_matching.explanation import FALLBACK_REASON, dominant_intent_pair, generate_reasons


def one_hot(intent):
    vector = empty_vector()
    vector[intent] = 1.0
    return vector


def reasons_for(a, b, vector_a=None, vector_b=None, intent=0, industry=50, embedding=50,
                has_embeddings=False):
    return generate_reasons(
        a, b,
        vector_a or uniform_vector(), vector_b or uniform_vector(),
        intent, industry, embedding, has_embeddings
    )


class TestDominantIntentPair:
    """Tests for dominant_intent_pair."""

    def test_raw_product_not_compatibility(self):
        a = {**empty_vector(), "selling": 0.6, "learning": 0.4}
        b = {**empty_vector(), "learning": 0.7, "buying": 0.3}
        # selling x buying is the most compatible pairing, selling x learning has the largest product
        assert dominant_intent_pair(a, b) == ("selling", "learning")

    def test_ties_resolve_to_first_pair(self):
        assert dominant_intent_pair(uniform_vector(), uniform_vector()) == ("buying", "buying")


class TestGenerateReasons:
    """Tests for generate_reasons."""

    def test_same_intent(self):
        a = ParticipantScoringProfile(id="a", full_name="Ana")
        b = ParticipantScoringProfile(id="b", full_name="Ben")
        reasons = reasons_for(a, b, one_hot("partnering"), one_hot("partnering"), intent=60)
        assert reasons == ["Both are partnering"]

    def test_intent_below_threshold(self):
        a = ParticipantScoringProfile(id="a")
        b = ParticipantScoringProfile(id="b")
        reasons = reasons_for(a, b, one_hot("selling"), one_hot("buying"), intent=39.99)
        assert reasons == [FALLBACK_REASON]

    def test_display_name_falls_back_to_id(self):
        a = ParticipantScoringProfile(id="a")
        b = ParticipantScoringProfile(id="b", full_name="Ben")
        reasons = reasons_for(a, b, one_hot("selling"), one_hot("buying"), intent=40)
        assert reasons == ["a is selling, Ben is buying"]

    def test_industry(self):
        a = ParticipantScoringProfile(id="a", industry="Finance")
        b = ParticipantScoringProfile(id="b", industry="Finance")
        assert reasons_for(a, b, industry=100) == ["Both in Finance"]

    def test_shared_expertise_limited_to_three(self):
        a = ParticipantScoringProfile(id="a", expertise_areas=["AI", "Data", "Cloud", "Security"])
        b = ParticipantScoringProfile(id="b", expertise_areas=["Security", "Cloud", "Data", "AI"])
        assert reasons_for(a, b) == ["Shared expertise: AI, Data, Cloud"]

    def test_expertise_interest_is_one_directional(self):
        a = ParticipantScoringProfile(id="a", full_name="Ana", interests=["AI"])
        b = ParticipantScoringProfile(id="b", full_name="Ben", expertise_areas=["AI"])
        assert reasons_for(a, b) == [FALLBACK_REASON]

    def test_needs_align_both_ways(self):
        a = ParticipantScoringProfile(id="a", full_name="Ana",
                                      looking_for="cloud hosting", offering="Seed funding")
        b = ParticipantScoringProfile(id="b", full_name="Ben",
                                      looking_for="funding", offering="Managed cloud services")
        assert reasons_for(a, b) == [
            "Ana's needs align with Ben's offerings",
            "Ben's needs align with Ana's offerings",
        ]

    def test_short_need_words_ignored(self):
        a = ParticipantScoringProfile(id="a", looking_for="AI", offering=None)
        b = ParticipantScoringProfile(id="b", offering="AI tooling")
        assert reasons_for(a, b) == [FALLBACK_REASON]

    @pytest.mark.parametrize("embedding,has_embeddings,expected", [
        (75, True, ["High AI profile similarity"]),
        (74, True, [FALLBACK_REASON]),
        (90, False, [FALLBACK_REASON]),
    ])
    def test_embedding(self, embedding, has_embeddings, expected):
        a = ParticipantScoringProfile(id="a")
        b = ParticipantScoringProfile(id="b")
        assert reasons_for(a, b, embedding=embedding, has_embeddings=has_embeddings) == expected

    def test_order(self):
        a = ParticipantScoringProfile(id="a", full_name="Ana", industry="Tech",
                                      expertise_areas=["AI"], looking_for="investors")
        b = ParticipantScoringProfile(id="b", full_name="Ben", industry="Tech",
                                      expertise_areas=["AI"], interests=["AI"],
                                      offering="Access to investors")
        reasons = reasons_for(a, b, one_hot("selling"), one_hot("investing"),
                              intent=60, industry=100, embedding=80, has_embeddings=True)
        assert reasons == [
            "Ana is selling, Ben is investing",
            "Both in Tech",
            "Shared expertise: AI",
            "Ana has expertise Ben is interested in",
            "Ana's needs align with Ben's offerings",
            "High AI profile similarity",
        ]
