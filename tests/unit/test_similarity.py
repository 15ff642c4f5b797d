"""Unit tests for cosine similarity."""

import math

import pytest

from ssmgpt.core.similarity import WORST_SIMILARITY, cosine_similarity, is_vector


class TestCosineSimilarity:
    """Test cosine_similarity behaviour."""

    @pytest.mark.parametrize("vec", [[1.0, 2.0, 3.0], [0.5, -0.25], [7], (3, 4)])
    def test_self_similarity_is_one(self, vec):
        assert cosine_similarity(vec, vec) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        vec = [0.3, -1.2, 4.0]
        assert cosine_similarity(vec, [-x for x in vec]) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)

    def test_symmetry(self):
        a = [0.1, 0.9, -0.4, 2.0]
        b = [1.5, -0.2, 0.3, 0.7]
        assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_magnitude_independent(self):
        assert cosine_similarity([1, 1], [10, 10]) == pytest.approx(1.0)
        assert cosine_similarity([1, 0], [1, 1]) == pytest.approx(1 / math.sqrt(2))

    @pytest.mark.parametrize(
        "a,b",
        [
            (None, [1.0, 2.0]),
            ([1.0, 2.0], None),
            ("12", [1.0, 2.0]),
            ({"x": 1}, [1.0]),
            (42, [1.0]),
            ([1.0, "a"], [1.0, 2.0]),
        ],
    )
    def test_invalid_input_returns_sentinel(self, a, b):
        assert cosine_similarity(a, b) == WORST_SIMILARITY == -1

    def test_length_mismatch_returns_sentinel(self):
        assert cosine_similarity([1, 2, 3], [1, 2]) == -1

    def test_zero_vector_returns_sentinel(self):
        result = cosine_similarity([0.0, 0.0], [1.0, 2.0])
        assert result == -1
        assert not math.isnan(result)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_input_returns_sentinel(self, bad):
        assert cosine_similarity([bad, 0.0], [0.0, 1.0]) == WORST_SIMILARITY
        assert cosine_similarity([1.0, 0.0], [bad, 0.0]) == WORST_SIMILARITY

    def test_overflowing_magnitudes_return_sentinel(self):
        huge = [1e200, 1e200]
        assert cosine_similarity(huge, huge) == WORST_SIMILARITY

    def test_result_within_bounds(self):
        vec = [0.1] * 1536
        result = cosine_similarity(vec, vec)
        assert -1.0 <= result <= 1.0


class TestIsVector:
    """Test vector validation."""

    def test_accepts_lists_and_tuples(self):
        assert is_vector([1.0, 2])
        assert is_vector((0.5,))

    def test_rejects_empty_and_non_numeric(self):
        assert not is_vector([])
        assert not is_vector(None)
        assert not is_vector("abc")
        assert not is_vector([True, False])

    def test_rejects_non_finite(self):
        assert not is_vector([1.0, float("nan")])
        assert not is_vector([float("inf")])
