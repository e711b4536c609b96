"""
Pair generation for match scoring.

This module enumerates the candidate (Participant A, Participant B) pairs
of one event.

Key Design Decisions:
- Pairs are unordered: (A, B) and (B, A) are the same pair, visited once (i < j)
- Self-pairs are never generated; duplicate ids in one run are a caller error
- Each pair is returned in canonical order: A.id < B.id, independent of scores
- Exclusion rules (same company, same role) drop a pair before it is scored
"""

import logging
from typing import Iterator, List, Sequence, Tuple, TypeVar

from ..profiles import ParticipantScoringProfile

logger = logging.getLogger(__name__)

T = TypeVar("T")

ParticipantPair = Tuple[ParticipantScoringProfile, ParticipantScoringProfile]


def canonical_pair_key(id_a: str, id_b: str) -> Tuple[str, str]:
    """Order two participant ids so the smaller comes first."""
    id_a, id_b = str(id_a), str(id_b)
    return (id_a, id_b) if id_a < id_b else (id_b, id_a)


def canonical_order(
    first: ParticipantScoringProfile,
    second: ParticipantScoringProfile
) -> ParticipantPair:
    """Return the pair with the smaller id first."""
    return (first, second) if first.id < second.id else (second, first)


def split_into_batches(items: Sequence[T], batch_size: int) -> Iterator[List[T]]:
    """
    Yield consecutive batches of at most batch_size items.

    Used both to spread pairs over workers and to chunk match records
    for batched writes.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    for start in range(0, len(items), batch_size):
        yield list(items[start:start + batch_size])


def chunk_candidates(candidates: Sequence[T], batch_size: int = 500) -> Iterator[List[T]]:
    """Chunk match candidates for replace-all batch inserts."""
    return split_into_batches(candidates, batch_size)


class PairGenerator:
    """
    Generator for candidate participant pairs.

    This class enumerates every unordered pair of a participant list and
    applies the configured exclusion rules. It ensures:
    - No self-pairs
    - No duplicate pairs in either orientation
    - Canonical (A.id < B.id) ordering of every returned pair

    Attributes:
        exclude_same_company: Skip pairs whose company names are equal and non-empty
        exclude_same_role: Skip pairs whose roles are equal
    """

    def __init__(self, exclude_same_company: bool = True, exclude_same_role: bool = False):
        """
        Initialize the pair generator.

        Args:
            exclude_same_company: Apply the same-company exclusion
            exclude_same_role: Apply the same-role exclusion
        """
        self.exclude_same_company = exclude_same_company
        self.exclude_same_role = exclude_same_role

    def is_excluded(self, a: ParticipantScoringProfile, b: ParticipantScoringProfile) -> bool:
        """Check whether the exclusion rules drop a pair."""
        if self.exclude_same_company and a.company_name and a.company_name == b.company_name:
            return True
        if self.exclude_same_role and a.role == b.role:
            return True
        return False

    def generate_pairs(
        self,
        participants: Sequence[ParticipantScoringProfile]
    ) -> Tuple[List[ParticipantPair], int]:
        """
        Enumerate all candidate pairs.

        The number of pairs returned is C(n, 2) minus the excluded pairs.

        Args:
            participants: Participants of one event

        Returns:
            Tuple of (canonically ordered pairs, number of excluded pairs)

        Raises:
            ValueError: If a participant id appears more than once
        """
        seen = set()
        for participant in participants:
            if participant.id in seen:
                raise ValueError(f"Duplicate participant id in scoring run: {participant.id}")
            seen.add(participant.id)

        n_persons = len(participants)
        max_possible = n_persons * (n_persons - 1) // 2
        logger.info(f"Enumerating {max_possible} pairs from {n_persons} participants")

        pairs = []
        excluded = 0
        for i in range(n_persons):
            for j in range(i + 1, n_persons):
                first, second = participants[i], participants[j]
                if self.is_excluded(first, second):
                    excluded += 1
                    continue
                pairs.append(canonical_order(first, second))

        logger.info(f"Generated {len(pairs)} candidate pairs ({excluded} excluded)")
        return pairs, excluded
