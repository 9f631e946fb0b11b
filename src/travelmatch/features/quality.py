# src/travelmatch/features/quality.py
"""
Quality signals (destination-level).

- Popularity: blends the average rating with a log-scaled review count.
  Review counts are heavy-tailed, so the log scale keeps a handful of mega-popular
  destinations from dominating every ranking. Counts at or above the cap score 1.0.
- Novelty: how far a destination's raw ratings sit from the user's raw ratings,
  as a share of the largest possible distance. Used as a light diversity nudge.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from travelmatch.config.settings import PopularitySettings
from travelmatch.domain.models import DIMENSIONS
from travelmatch.features.vectorize import RAW_SPAN, numeric_or_zero, read_field
from travelmatch.scoring.composite import clamp01


def popularity(destination: Any, *, settings: PopularitySettings | None = None) -> float:
    """Popularity score in 0..1 from `average_rating` and `total_reviews`."""
    if destination is None:
        return 0.0
    settings = settings or PopularitySettings()

    rating = numeric_or_zero(read_field(destination, "average_rating", "averageRating"))
    reviews = numeric_or_zero(read_field(destination, "total_reviews", "totalReviews"))

    rating_term = clamp01(min(max(rating, 0.0), settings.max_rating) / settings.max_rating)
    reviews_term = clamp01(math.log10(max(reviews, 0.0) + 1) / math.log10(settings.review_count_cap + 1))

    return clamp01(settings.rating_weight * rating_term + settings.reviews_weight * reviews_term)


def novelty(user_raw: Mapping[str, float], destination_raw: Mapping[str, float]) -> float:
    """Mean absolute raw-rating distance, scaled by the maximum (`len(DIMENSIONS) * 4`)."""
    total = sum(
        abs(numeric_or_zero(user_raw.get(d)) - numeric_or_zero(destination_raw.get(d))) for d in DIMENSIONS
    )
    return clamp01(total / (len(DIMENSIONS) * RAW_SPAN))
