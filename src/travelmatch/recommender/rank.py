"""
Hybrid ranker: the scoring core.

Pipeline per candidate (no cross-candidate dependency until the sort):
1. vectorize user + destination (raw 1..5 ratings and normalized 0..1 vectors)
2. similarity + per-dimension factor breakdown on the normalized vectors
3. popularity + novelty on the raw values (hybrid only)
4. blend into `final_score`, then explain

Ranking is a stable sort on `final_score` (descending), truncated to `limit` afterwards.
Scores within `SCORE_TIE_TOLERANCE` of each other are ties, and ties keep their input order
even at the cutoff.

Everything here is a pure function of its arguments: no I/O, no clock, no module state.
Bad data never raises; bad call shapes (a non-int `limit`, an unknown algorithm) do.
"""

from __future__ import annotations

import logging
import math
from functools import cmp_to_key
from typing import Any, Mapping, Sequence

from travelmatch.config.settings import ScoringSettings
from travelmatch.domain.models import DIMENSIONS, RecommendationInsights, ScoredCandidate
from travelmatch.features.quality import novelty, popularity
from travelmatch.features.similarity import cosine_similarity, factor_breakdown
from travelmatch.features.vectorize import missing_dimensions, normalize, raw_ratings, read_field
from travelmatch.scoring.composite import blend, clamp01
from travelmatch.scoring.explain import cosine_explanation, hybrid_explanation

logger = logging.getLogger(__name__)

ALGORITHMS = ("cosine", "hybrid")

DEFAULT_BLEND_WEIGHTS: dict[str, float] = {"similarity": 0.6, "popularity": 0.3, "novelty": 0.1}

# Final scores closer than this are ties (input order decides).
SCORE_TIE_TOLERANCE = 1e-12


def _check_algorithm(algorithm: str) -> None:
    if algorithm not in ALGORITHMS:
        raise ValueError(f"Invalid algorithm '{algorithm}'. Use one of: {', '.join(ALGORITHMS)}")


def _preference_source(preferences: Any) -> Any:
    # PreferenceProfile carries None for unset dimensions; read its set ratings only.
    ratings = getattr(preferences, "ratings", None)
    if callable(ratings):
        return ratings()
    return preferences


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _score(
    user_raw: Mapping[str, float],
    user_vector: Mapping[str, float],
    destination: Any,
    *,
    algorithm: str,
    scoring: ScoringSettings,
) -> ScoredCandidate:
    dest_raw = raw_ratings(destination)
    dest_vector = normalize(dest_raw)

    similarity = cosine_similarity(user_vector, dest_vector)
    breakdown = factor_breakdown(user_vector, dest_vector)

    if algorithm == "cosine":
        pop = 0.0
        nov = 0.0
        final = similarity
        explanation = cosine_explanation(similarity, breakdown, destination)
    else:
        pop = popularity(destination, settings=scoring.popularity)
        nov = novelty(user_raw, dest_raw)
        final = blend(
            {"similarity": similarity, "popularity": pop, "novelty": nov},
            scoring.blend_weights or DEFAULT_BLEND_WEIGHTS,
        )
        explanation = hybrid_explanation(similarity, pop, nov)

    return ScoredCandidate(
        destination_id=_text(read_field(destination, "id", "_id")),
        destination_name=_text(read_field(destination, "name")),
        destination_country=_text(read_field(destination, "country")),
        similarity=clamp01(similarity),
        factor_breakdown=breakdown,
        popularity_score=clamp01(pop),
        novelty_score=clamp01(nov),
        final_score=clamp01(final),
        explanation=explanation,
    )


def _by_final_score(a: ScoredCandidate, b: ScoredCandidate) -> int:
    if math.isclose(a.final_score, b.final_score, rel_tol=0.0, abs_tol=SCORE_TIE_TOLERANCE):
        return 0
    return -1 if a.final_score > b.final_score else 1


def sort_candidates(candidates: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Order by `final_score`, highest first; scores within tolerance keep input order."""
    # sorted() is stable, so a 0 from the comparator preserves input order.
    return sorted(candidates, key=cmp_to_key(_by_final_score))


def score_destination(
    preferences: Any,
    destination: Any,
    *,
    algorithm: str = "hybrid",
    scoring: ScoringSettings | None = None,
) -> ScoredCandidate:
    """Score a single destination for a user (the per-candidate step of `rank`)."""
    _check_algorithm(algorithm)
    scoring = scoring or ScoringSettings()
    user_raw = raw_ratings(_preference_source(preferences))
    return _score(user_raw, normalize(user_raw), destination, algorithm=algorithm, scoring=scoring)


def rank(
    preferences: Any,
    destinations: Sequence[Any] | None,
    limit: int,
    *,
    algorithm: str = "hybrid",
    scoring: ScoringSettings | None = None,
) -> list[ScoredCandidate]:
    """Score, sort and truncate candidates for one user.

    `preferences` may be a `PreferenceProfile` or a mapping of dimension -> 1..5 rating.
    `destinations` items may be `DestinationAttributes` models or plain mappings.
    Returns an empty list for no preferences, no destinations, or `limit <= 0`.
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError(f"limit must be an int, got {type(limit).__name__}")
    _check_algorithm(algorithm)

    if preferences is None or not destinations or limit <= 0:
        return []

    scoring = scoring or ScoringSettings()
    source = _preference_source(preferences)
    user_raw = raw_ratings(source)
    user_vector = normalize(user_raw)

    if logger.isEnabledFor(logging.DEBUG):
        defaulted = sum(1 for d in destinations if missing_dimensions(d))
        logger.debug(
            "Ranking %d candidates (algorithm=%s, limit=%d, user_defaulted=%s, destinations_defaulted=%d)",
            len(destinations),
            algorithm,
            limit,
            missing_dimensions(source),
            defaulted,
        )

    candidates = [
        _score(user_raw, user_vector, dest, algorithm=algorithm, scoring=scoring) for dest in destinations
    ]
    return sort_candidates(candidates)[:limit]


def summarize(candidates: Sequence[ScoredCandidate]) -> RecommendationInsights:
    """Aggregate a ranked list: mean similarity, mean factor strength, similarity spread."""
    if not candidates:
        return RecommendationInsights()

    count = len(candidates)
    average_similarity = sum(c.similarity for c in candidates) / count
    top_factors = {
        dim: clamp01(sum(c.factor_breakdown.get(dim, 0.0) for c in candidates) / count) for dim in DIMENSIONS
    }

    diversity = 0.0
    if count > 1:
        total_difference = 0.0
        comparisons = 0
        for i in range(count):
            for j in range(i + 1, count):
                total_difference += abs(candidates[i].similarity - candidates[j].similarity)
                comparisons += 1
        diversity = total_difference / comparisons

    return RecommendationInsights(
        average_similarity=clamp01(average_similarity),
        top_factors=top_factors,
        diversity_score=clamp01(diversity),
        total_recommendations=count,
    )
