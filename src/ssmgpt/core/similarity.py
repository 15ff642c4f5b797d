"""Cosine similarity between embedding vectors.

Malformed input never raises: it scores as the worst possible match so
that ranking pushes it to the bottom instead of failing the request.
"""

import math
from collections.abc import Sequence
from numbers import Real
from typing import Any

WORST_SIMILARITY = -1.0


def is_vector(value: Any) -> bool:
    """Return True if value is a non-empty sequence of finite real numbers."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return False
    if len(value) == 0:
        return False
    return all(
        isinstance(x, Real) and not isinstance(x, bool) and math.isfinite(x) for x in value
    )


def cosine_similarity(vec1: Any, vec2: Any) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        dot(a, b) / (|a| * |b|), or -1.0 if either argument is not a
        finite numeric vector, the lengths differ, or either vector has
        zero norm
    """
    if not is_vector(vec1) or not is_vector(vec2):
        return WORST_SIMILARITY
    if len(vec1) != len(vec2):
        return WORST_SIMILARITY

    dot_product = sum(a * b for a, b in zip(vec1, vec2))
    magnitude1 = sum(a * a for a in vec1) ** 0.5
    magnitude2 = sum(b * b for b in vec2) ** 0.5

    if magnitude1 == 0 or magnitude2 == 0:
        return WORST_SIMILARITY

    # Huge components can overflow to inf, and inf / inf is nan
    similarity = dot_product / (magnitude1 * magnitude2)
    if math.isnan(similarity):
        return WORST_SIMILARITY

    # Clamp float drift, e.g. 1.0000000000000002 for identical vectors
    return max(-1.0, min(1.0, similarity))
