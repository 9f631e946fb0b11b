"""
Explanation text for scored candidates.

Explanations are built from fixed score bands, so the same scores always yield the same
text (no timestamps, no randomness). `one_line_summary` is used by the CLI.
"""

from __future__ import annotations

from typing import Any, Mapping

from travelmatch.domain.models import ScoredCandidate
from travelmatch.features.similarity import top_factors
from travelmatch.features.vectorize import numeric_or_zero, read_field

# (lower bound, phrase); the first band whose bound is exceeded wins.
SIMILARITY_BANDS: tuple[tuple[float, str], ...] = (
    (0.8, "Excellent match with your preferences"),
    (0.6, "Good match with your preferences"),
    (0.4, "Moderate match with your preferences"),
)
SIMILARITY_FALLBACK = "Somewhat matches your preferences"

POPULARITY_BANDS: tuple[tuple[float, str], ...] = (
    (0.8, "Highly popular destination"),
    (0.6, "Popular destination"),
)

NOVELTY_BANDS: tuple[tuple[float, str], ...] = ((0.7, "Offers new experiences"),)

FACTOR_BANDS: tuple[tuple[float, str], ...] = (
    (0.8, "excellent"),
    (0.6, "good"),
    (0.4, "moderate"),
)

FACTOR_DISPLAY_NAMES: dict[str, str] = {
    "climate": "climate",
    "budget": "budget",
    "adventure": "adventure level",
    "culture": "cultural richness",
    "nature": "natural beauty",
    "nightlife": "nightlife scene",
}


def _band(value: float, bands: tuple[tuple[float, str], ...]) -> str | None:
    for threshold, phrase in bands:
        if value > threshold:
            return phrase
    return None


def _join(parts: list[str]) -> str:
    return ". ".join(parts) + "."


def similarity_phrase(similarity: float) -> str:
    return _band(similarity, SIMILARITY_BANDS) or SIMILARITY_FALLBACK


def hybrid_explanation(similarity: float, popularity: float, novelty: float) -> str:
    """Explanation for a blended (similarity + popularity + novelty) score."""
    parts = [similarity_phrase(similarity)]
    for value, bands in ((popularity, POPULARITY_BANDS), (novelty, NOVELTY_BANDS)):
        phrase = _band(value, bands)
        if phrase:
            parts.append(phrase)
    return _join(parts)


def cosine_explanation(similarity: float, breakdown: Mapping[str, float], destination: Any) -> str:
    """Explanation for a similarity-only score: strongest factors plus review highlights."""
    parts = [similarity_phrase(similarity)]

    strong_points = []
    for factor, score in top_factors(breakdown, count=3):
        level = _band(score, FACTOR_BANDS)
        if level:
            strong_points.append(f"{level} {FACTOR_DISPLAY_NAMES.get(factor, factor)} match")
    if strong_points:
        parts.append("Strong points: " + ", ".join(strong_points))

    rating = numeric_or_zero(read_field(destination, "average_rating", "averageRating"))
    reviews = numeric_or_zero(read_field(destination, "total_reviews", "totalReviews"))

    if rating > 4.5:
        parts.append("Highly rated by other travelers")
    elif rating > 4.0:
        parts.append("Well-rated by other travelers")
    if reviews > 1000:
        parts.append("Popular destination with many reviews")

    return _join(parts)


def one_line_summary(candidate: ScoredCandidate) -> str:
    """Render a compact single-line summary for a scored candidate."""
    parts = [
        f"final={candidate.final_score:.3f}",
        f"similarity={candidate.similarity:.3f}",
        f"popularity={candidate.popularity_score:.3f}",
        f"novelty={candidate.novelty_score:.3f}",
    ]
    return " | ".join(parts)
