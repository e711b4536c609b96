"""Tests for the embedding similarity map."""

import numpy as np
import pytest

from intent_matching.embeddings import compute_embedding_similarities


class TestEmbeddingSimilarities:
    """Tests for compute_embedding_similarities."""

    def test_pairs_and_clipping(self):
        embeddings = np.array([[1.0, 0.0], [2.0, 0.0], [-1.0, 0.0]])
        similarities = compute_embedding_similarities(["c", "a", "b"], embeddings)

        assert set(similarities) == {("a", "c"), ("b", "c"), ("a", "b")}
        assert similarities[("a", "c")] == pytest.approx(1.0)
        assert similarities[("b", "c")] == 0.0
        assert similarities[("a", "b")] == 0.0

    def test_values_in_unit_interval(self):
        rng = np.random.RandomState(3)
        similarities = compute_embedding_similarities(
            [f"p{i}" for i in range(8)], rng.normal(size=(8, 5))
        )
        assert len(similarities) == 28
        assert all(0.0 <= value <= 1.0 for value in similarities.values())

    def test_single_participant(self):
        assert compute_embedding_similarities(["a"], np.ones((1, 3))) == {}

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            compute_embedding_similarities(["a", "b"], np.ones((3, 2)))
        with pytest.raises(ValueError):
            compute_embedding_similarities(["a", "b"], np.ones(2))
