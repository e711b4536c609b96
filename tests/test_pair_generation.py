"""Tests for pair generation."""

import pytest

from intent_matching.profiles import ParticipantScoringProfile
from intent_matching.pair_generation import (
    PairGenerator,
    canonical_order,
    canonical_pair_key,
    chunk_candidates,
    split_into_batches,
)


@pytest.fixture
def participants():
    """Five participants, two of them from the same company."""
    return [
        ParticipantScoringProfile(id="p4", company_name="Acme", role="attendee"),
        ParticipantScoringProfile(id="p2", company_name="Acme", role="sponsor"),
        ParticipantScoringProfile(id="p5", company_name="", role="attendee"),
        ParticipantScoringProfile(id="p1", role="speaker"),
        ParticipantScoringProfile(id="p3", company_name="Globex", role="attendee"),
    ]


class TestCanonicalOrdering:
    """Tests for canonical pair ordering."""

    def test_pair_key(self):
        assert canonical_pair_key("b", "a") == ("a", "b")
        assert canonical_pair_key("a", "b") == ("a", "b")

    def test_pair_key_compares_as_strings(self):
        assert canonical_pair_key(10, 9) == ("10", "9")

    def test_canonical_order(self):
        a = ParticipantScoringProfile(id="a")
        b = ParticipantScoringProfile(id="b")
        assert canonical_order(b, a) == (a, b)


class TestPairGenerator:
    """Tests for PairGenerator."""

    def test_all_pairs_without_exclusions(self, participants):
        pairs, excluded = PairGenerator(exclude_same_company=False).generate_pairs(participants)
        keys = [(a.id, b.id) for a, b in pairs]

        assert excluded == 0
        assert len(pairs) == 10
        assert len(set(keys)) == 10
        assert all(a_id < b_id for a_id, b_id in keys)

    def test_same_company_excluded(self, participants):
        pairs, excluded = PairGenerator().generate_pairs(participants)
        keys = {(a.id, b.id) for a, b in pairs}

        assert excluded == 1
        assert ("p2", "p4") not in keys
        assert len(pairs) == 9

    def test_empty_company_names_are_not_a_match(self):
        people = [
            ParticipantScoringProfile(id="a", company_name=""),
            ParticipantScoringProfile(id="b", company_name=""),
        ]
        pairs, excluded = PairGenerator().generate_pairs(people)
        assert len(pairs) == 1
        assert excluded == 0

    def test_same_role_excluded(self, participants):
        generator = PairGenerator(exclude_same_company=False, exclude_same_role=True)
        pairs, excluded = generator.generate_pairs(participants)
        # p3, p4, p5 are all attendees
        assert excluded == 3
        assert len(pairs) == 7

    def test_missing_roles_count_as_same_role(self):
        people = [ParticipantScoringProfile(id="a"), ParticipantScoringProfile(id="b")]
        pairs, excluded = PairGenerator(exclude_same_role=True).generate_pairs(people)
        assert pairs == []
        assert excluded == 1

    def test_duplicate_ids_rejected(self):
        people = [ParticipantScoringProfile(id="a"), ParticipantScoringProfile(id="a")]
        with pytest.raises(ValueError, match="Duplicate"):
            PairGenerator().generate_pairs(people)

    @pytest.mark.parametrize("n", [0, 1])
    def test_too_few_participants(self, n):
        people = [ParticipantScoringProfile(id=str(i)) for i in range(n)]
        assert PairGenerator().generate_pairs(people) == ([], 0)


class TestBatching:
    """Tests for batch helpers."""

    def test_split_into_batches(self):
        assert list(split_into_batches(list(range(5)), 2)) == [[0, 1], [2, 3], [4]]

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            list(split_into_batches([1, 2], 0))

    def test_chunk_candidates_default_size(self):
        chunks = list(chunk_candidates(list(range(1201))))
        assert [len(c) for c in chunks] == [500, 500, 201]

    def test_empty(self):
        assert list(chunk_candidates([])) == []
