# src/travelmatch/features/similarity.py
"""
Similarity scorer (normalized vectors).

Two views of "how close is this destination to what the user asked for?":
- `cosine_similarity`: direction match over all dimensions at once (0..1)
- `factor_breakdown`: a per-dimension closeness score, `max(0, 1 - |u - d|)`

Both operate on vectors produced by `travelmatch.features.vectorize.normalize` and
never mutate their inputs.
"""

from __future__ import annotations

import math
from typing import Mapping

from travelmatch.domain.models import DIMENSIONS
from travelmatch.scoring.composite import clamp01


def cosine_similarity(user_vector: Mapping[str, float], dest_vector: Mapping[str, float]) -> float:
    """Cosine similarity of two dimension vectors, clamped to 0..1.

    A zero-magnitude vector on either side yields 0.0 instead of dividing by zero.
    """
    dot = 0.0
    norm_u = 0.0
    norm_d = 0.0
    for dim in DIMENSIONS:
        u = float(user_vector.get(dim, 0.0))
        d = float(dest_vector.get(dim, 0.0))
        dot += u * d
        norm_u += u * u
        norm_d += d * d

    if norm_u == 0 or norm_d == 0:
        return 0.0

    # Negative components (defaulted dimensions) can push the cosine below zero.
    return clamp01(dot / (math.sqrt(norm_u) * math.sqrt(norm_d)))


def factor_breakdown(user_vector: Mapping[str, float], dest_vector: Mapping[str, float]) -> dict[str, float]:
    """Per-dimension match strength: 1.0 for an exact match, decaying linearly, floored at 0."""
    return {
        dim: clamp01(1.0 - abs(float(user_vector.get(dim, 0.0)) - float(dest_vector.get(dim, 0.0))))
        for dim in DIMENSIONS
    }


def top_factors(breakdown: Mapping[str, float], *, count: int = 3) -> list[tuple[str, float]]:
    """Return the strongest factors (ties keep dimension order)."""
    return sorted(breakdown.items(), key=lambda kv: kv[1], reverse=True)[:count]
