from __future__ import annotations

# This module is the "orchestrator" for the recommendation pipeline.
# It wires together:
# - service input (RecommendationRequest: ratings and/or survey answers)
# - config (settings + safe per-request overrides)
# - the destination catalog
# - the scoring core (`travelmatch.recommender.rank`)
#
# The core itself is pure; timestamps, timings and catalog loading live here.

import logging
import time
from datetime import datetime, timezone
from functools import lru_cache

from travelmatch.catalog.loader import find_destination, load_destinations
from travelmatch.config.overrides import apply_settings_overrides
from travelmatch.config.settings import Settings, get_settings
from travelmatch.core.env import resolve_project_path
from travelmatch.domain.models import (
    AnalysisRequest,
    DestinationAttributes,
    PreferenceProfile,
    RecommendationRequest,
    RecommendationResult,
    ScoredCandidate,
    SurveyAnswers,
)
from travelmatch.features.preference_translator import merge_preferences
from travelmatch.recommender.rank import rank, score_destination, summarize

logger = logging.getLogger(__name__)


@lru_cache
def _cached_catalog(path: str, mtime_ns: int) -> tuple[DestinationAttributes, ...]:
    # Keyed on mtime so an edited catalog file is picked up without a restart.
    return tuple(load_destinations(path))


def load_catalog(settings: Settings) -> list[DestinationAttributes]:
    """Load the configured catalog (memoized per file version)."""
    resolved = resolve_project_path(settings.catalog.path)
    return list(_cached_catalog(str(resolved), resolved.stat().st_mtime_ns))


def resolve_preferences(
    preferences: PreferenceProfile | None, survey: SurveyAnswers | None, settings: Settings
) -> PreferenceProfile:
    """Merge survey-derived ratings with explicit ratings (explicit ratings win per dimension)."""
    profile = merge_preferences(preferences, survey, table=settings.preferences)
    if profile is None:
        raise ValueError("No usable preferences: provide ratings or survey answers.")
    return profile


def recommend(
    request: RecommendationRequest,
    *,
    settings: Settings | None = None,
    destinations: list[DestinationAttributes] | None = None,
) -> RecommendationResult:
    t0 = time.monotonic()
    timings_ms: dict[str, int] = {}

    # ---- Step 1: settings for THIS run (config defaults -> safe per-request overrides) ----
    settings = settings or get_settings()
    settings = apply_settings_overrides(settings, request.settings_overrides)

    algorithm = request.algorithm or settings.scoring.default_algorithm
    limit = request.limit if request.limit is not None else settings.scoring.top_n_default

    # ---- Step 2: preferences (survey answers are translated before the core sees them) ----
    profile = resolve_preferences(request.preferences, request.survey, settings)

    # ---- Step 3: catalog (unless tests/callers inject a list) ----
    if destinations is None:
        destinations = load_catalog(settings)
    timings_ms["load_catalog"] = int((time.monotonic() - t0) * 1000)

    # ---- Step 4: score + rank ----
    t_rank = time.monotonic()
    results = rank(profile, destinations, limit, algorithm=algorithm, scoring=settings.scoring)
    timings_ms["rank"] = int((time.monotonic() - t_rank) * 1000)

    if not results:
        logger.info("No recommendations produced (candidates=%d, limit=%d)", len(destinations), limit)

    meta = {
        "candidates_scored": len(destinations),
        "settings_snapshot": {
            "algorithm": algorithm,
            "limit": limit,
            "blend_weights": dict(settings.scoring.blend_weights),
            "overrides_enabled": bool(request.settings_overrides),
        },
        "timings_ms": timings_ms,
    }

    return RecommendationResult(
        generated_at=datetime.now(timezone.utc),
        algorithm=algorithm,
        limit=limit,
        preferences=profile.ratings(),
        results=results,
        insights=summarize(results),
        meta=meta,
    )


def analyze(
    request: AnalysisRequest,
    *,
    settings: Settings | None = None,
    destinations: list[DestinationAttributes] | None = None,
) -> ScoredCandidate | None:
    """Score one catalog destination for a user; None when the id is unknown."""
    settings = settings or get_settings()
    profile = resolve_preferences(request.preferences, request.survey, settings)
    if destinations is None:
        destinations = load_catalog(settings)

    destination = find_destination(destinations, request.destination_id)
    if destination is None:
        return None
    algorithm = request.algorithm or settings.scoring.default_algorithm
    return score_destination(profile, destination, algorithm=algorithm, scoring=settings.scoring)
