"""
Embedding similarity map.

Derives the canonical pair -> similarity mapping consumed by the composite
scorer from raw per-participant profile embeddings.

Cosine similarity lies in [-1, 1]; the embedding sub-score expects [0, 1],
so negative similarities are clipped to 0. Rows with zero norm get
similarity 0 with every other participant (scikit-learn's convention).
"""

import logging
from typing import Dict, Sequence, Tuple

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

from ..pair_generation import canonical_pair_key

logger = logging.getLogger(__name__)


def compute_embedding_similarities(
    participant_ids: Sequence[str],
    embeddings: np.ndarray
) -> Dict[Tuple[str, str], float]:
    """
    Compute the cosine similarity of every unordered participant pair.

    Args:
        participant_ids: Ids in the same order as the embedding rows
        embeddings: Embedding matrix (N x D)

    Returns:
        Dictionary mapping (smaller id, larger id) -> similarity in [0, 1]

    Raises:
        ValueError: If the number of ids and embedding rows differ, or the
            embeddings are not a 2-D matrix
    """
    embeddings = np.asarray(embeddings, dtype=float)
    if embeddings.ndim != 2:
        raise ValueError(f"Embeddings must be a 2-D matrix, got shape {embeddings.shape}")
    if len(participant_ids) != embeddings.shape[0]:
        raise ValueError(
            f"Got {len(participant_ids)} participant ids but {embeddings.shape[0]} embedding rows"
        )

    n = len(participant_ids)
    if n < 2:
        return {}

    similarity = np.clip(cosine_similarity(embeddings), 0.0, 1.0)

    similarities = {}
    rows, cols = np.triu_indices(n, k=1)
    for i, j in zip(rows, cols):
        key = canonical_pair_key(participant_ids[i], participant_ids[j])
        similarities[key] = float(similarity[i, j])

    logger.info(f"Computed {len(similarities)} embedding similarities for {n} participants")
    return similarities
