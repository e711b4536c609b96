"""
Composite match scorer.

Turns the participants of one event into ranked, reasoned match candidates.

Per unordered pair (visited once, canonical A.id < B.id):
1. exclusion rules (same company / same role) drop the pair
2. intent score = intent compatibility of the two fused vectors
3. industry, interest, complementarity, embedding sub-scores
4. composite = sum(weight_k * subscore_k), weights renormalized to 1,
   rounded to 2 decimals
5. candidates with composite < minimum_score are discarded
6. survivors get human-readable reasons

Key Design Decisions:
- Vectors are resolved once per run and shared read-only by all pair workers
- Pairs are split into batches; each joblib worker scores its own batch and
  the surviving candidates are concatenated afterwards
- The output is sorted by composite descending, then by ids, so reruns on
  the same input produce identical results
"""

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from joblib import Parallel, delayed

from ..intents import compute_intent_compatibility, round_half_up
from ..profiles import ParticipantScoringProfile
from ..fusion import FusionConfig, ParticipantVector, compute_participant_vectors
from ..pair_generation import PairGenerator, canonical_pair_key, split_into_batches
from ..explanation import generate_reasons
from .config import ScoringConfig
from .candidates import MatchCandidate, ScoringRunResult
from .subscores import (
    compute_industry_score,
    compute_interest_score,
    compute_complementarity_score,
    compute_embedding_score,
)

logger = logging.getLogger(__name__)

SimilarityMap = Mapping[Tuple[str, str], float]


def _score_pair(
    a: ParticipantScoringProfile,
    b: ParticipantScoringProfile,
    vector_a: ParticipantVector,
    vector_b: ParticipantVector,
    weights: Mapping[str, float],
    similarities: Optional[SimilarityMap]
) -> MatchCandidate:
    """Score one canonically ordered pair without applying the threshold."""
    intent = compute_intent_compatibility(
        vector_a.vector, vector_a.confidence,
        vector_b.vector, vector_b.confidence
    )

    similarity = None
    if similarities:
        similarity = similarities.get(canonical_pair_key(a.id, b.id))

    subscores = {
        "intent": intent.final,
        "industry": compute_industry_score(a, b),
        "interest": compute_interest_score(a, b),
        "complementarity": compute_complementarity_score(a, b),
        "embedding": compute_embedding_score(similarity),
    }
    composite = round_half_up(sum(weights[name] * subscores[name] for name in subscores), 2)

    return MatchCandidate(
        participant_a_id=a.id,
        participant_b_id=b.id,
        intent_score=subscores["intent"],
        industry_score=subscores["industry"],
        interest_score=subscores["interest"],
        complementarity_score=subscores["complementarity"],
        embedding_score=subscores["embedding"],
        score=composite,
    )


def _score_batch(
    pairs: Sequence[Tuple[ParticipantScoringProfile, ParticipantScoringProfile]],
    vectors: Mapping[str, ParticipantVector],
    weights: Mapping[str, float],
    similarities: Optional[SimilarityMap],
    has_embeddings: bool,
    minimum_score: float
) -> Tuple[List[MatchCandidate], int]:
    """
    Score a batch of pairs in one worker.

    Returns:
        Tuple of (surviving candidates with reasons, number below threshold)
    """
    survivors = []
    below = 0
    for a, b in pairs:
        vector_a, vector_b = vectors[a.id], vectors[b.id]
        candidate = _score_pair(a, b, vector_a, vector_b, weights, similarities)
        if candidate.score < minimum_score:
            below += 1
            continue
        candidate.reasons = generate_reasons(
            a, b, vector_a.vector, vector_b.vector,
            candidate.intent_score, candidate.industry_score,
            candidate.embedding_score, has_embeddings
        )
        survivors.append(candidate)
    return survivors, below


def rank_candidates(candidates: List[MatchCandidate]) -> List[MatchCandidate]:
    """Order candidates by composite score descending, then by pair ids."""
    return sorted(candidates, key=lambda c: (-c.score, c.participant_a_id, c.participant_b_id))


class CompositeMatchScorer:
    """
    Scorer producing ranked match candidates for one event.

    Attributes:
        config: Scoring weights, threshold and exclusion rules
        fusion_config: Source weights used when vectors must be recomputed
        n_jobs: Number of joblib workers (1 = in-process)
        batch_size: Pairs per worker batch
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        fusion_config: Optional[FusionConfig] = None,
        n_jobs: int = 1,
        batch_size: int = 500
    ):
        self.config = config or ScoringConfig()
        self.config.validate()
        self.fusion_config = fusion_config or FusionConfig()
        self.fusion_config.validate()
        self.n_jobs = n_jobs
        self.batch_size = batch_size

        self.pair_generator = PairGenerator(
            exclude_same_company=self.config.exclude_same_company,
            exclude_same_role=self.config.exclude_same_role
        )

    def score_pair(
        self,
        a: ParticipantScoringProfile,
        b: ParticipantScoringProfile,
        similarity: Optional[float] = None
    ) -> MatchCandidate:
        """
        Score a single pair, ignoring exclusions and the minimum score.

        The pair is put into canonical order first. Reasons are always
        generated. When similarity is None the run is treated as having no
        embedding data.
        """
        if a.id == b.id:
            raise ValueError(f"Cannot score a participant against itself: {a.id}")
        if b.id < a.id:
            a, b = b, a

        has_embeddings = similarity is not None
        weights = self.config.normalized_weights(has_embeddings)
        similarities = {canonical_pair_key(a.id, b.id): similarity} if has_embeddings else None

        vectors = compute_participant_vectors([a, b], self.fusion_config)
        candidate = _score_pair(a, b, vectors[a.id], vectors[b.id], weights, similarities)
        candidate.reasons = generate_reasons(
            a, b, vectors[a.id].vector, vectors[b.id].vector,
            candidate.intent_score, candidate.industry_score,
            candidate.embedding_score, has_embeddings
        )
        return candidate

    def score_event(
        self,
        participants: Sequence[ParticipantScoringProfile],
        similarities: Optional[SimilarityMap] = None
    ) -> ScoringRunResult:
        """
        Score every candidate pair of one event.

        Args:
            participants: Participants of the event (ids must be unique)
            similarities: Optional canonical pair -> similarity in [0, 1];
                when empty or None the embedding sub-score is disabled

        Returns:
            ScoringRunResult with ranked candidates and refreshed vectors

        Raises:
            ValueError: If the weights sum to zero or ids are duplicated
        """
        participants = list(participants)
        has_embeddings = bool(similarities)
        weights = self.config.normalized_weights(has_embeddings)

        logger.info(f"Scoring {len(participants)} participants "
                    f"(embeddings: {'yes' if has_embeddings else 'no'})")
        logger.info("Normalized weights: " + ", ".join(f"{k}={v:.3f}" for k, v in weights.items()))

        pairs, excluded = self.pair_generator.generate_pairs(participants)
        vectors = compute_participant_vectors(participants, self.fusion_config, n_jobs=self.n_jobs)

        batches = list(split_into_batches(pairs, self.batch_size))
        results = Parallel(n_jobs=self.n_jobs)(
            delayed(_score_batch)(
                batch, vectors, weights, similarities if has_embeddings else None,
                has_embeddings, self.config.minimum_score
            )
            for batch in batches
        )

        candidates = []
        below_threshold = 0
        for survivors, below in results:
            candidates.extend(survivors)
            below_threshold += below

        candidates = rank_candidates(candidates)
        logger.info(f"Evaluated {len(pairs)} pairs: {len(candidates)} candidates kept, "
                    f"{below_threshold} below minimum score {self.config.minimum_score}")

        return ScoringRunResult(
            candidates=candidates,
            vectors=vectors,
            participant_count=len(participants),
            pairs_evaluated=len(pairs),
            pairs_excluded=excluded,
            below_threshold=below_threshold,
            weights=weights,
            has_embeddings=has_embeddings,
        )
