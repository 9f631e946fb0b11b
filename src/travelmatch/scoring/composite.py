"""
Shared scoring utilities.

This module contains small, reusable helpers used across feature scorers:
- `clamp01`: keep values within 0..1 for stable UI/output (NaN becomes 0.0)
- `normalize_weights`: convert arbitrary non-negative weights into a 1.0-summing distribution
- `blend`: weighted sum of named component scores
"""

from __future__ import annotations

import math
from typing import Mapping


def clamp01(x: float) -> float:
    """Clamp a number into the [0.0, 1.0] range."""
    x = float(x)
    if math.isnan(x):
        return 0.0
    return max(0.0, min(1.0, x))


def normalize_weights(weights: Mapping[str, float]) -> dict[str, float]:
    """Normalize a dict of weights so they sum to 1.0 (non-negative)."""
    cleaned = {k: max(0.0, float(v)) for k, v in weights.items()}
    total = sum(cleaned.values())
    if total <= 0:
        return {k: 1.0 / len(weights) for k in weights}
    return {k: v / total for k, v in cleaned.items()}


def blend(scores: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Combine component scores with normalized weights; missing components count as 0."""
    normalized = normalize_weights(weights)
    return clamp01(sum(clamp01(scores.get(k, 0.0)) * w for k, w in normalized.items()))
