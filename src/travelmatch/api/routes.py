"""
API routes.

Endpoints:
- POST `/api/recommendations`: main recommender entrypoint.
- POST `/api/recommendations/analysis`: score one destination for a user.
- GET  `/api/destinations`: the destination catalog.
- GET  `/api/settings`: public scoring settings for clients.
"""

from __future__ import annotations

import time
import uuid

from fastapi import APIRouter, HTTPException

from travelmatch.config.settings import get_settings
from travelmatch.domain.models import (
    AnalysisRequest,
    DestinationAttributes,
    RecommendationRequest,
    RecommendationResult,
    ScoredCandidate,
)
from travelmatch.recommender.recommend import analyze, load_catalog, recommend

router = APIRouter()


def _catalog() -> list[DestinationAttributes]:
    return load_catalog(get_settings())


@router.post("/api/recommendations", response_model=RecommendationResult)
def post_recommendations(request: RecommendationRequest) -> RecommendationResult:
    """Rank the catalog for validated preferences and return Top-N results."""
    t0 = time.monotonic()
    request_id = uuid.uuid4().hex
    try:
        result = recommend(request, settings=get_settings(), destinations=_catalog())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    debug = {"request_id": request_id, "api_ms": int((time.monotonic() - t0) * 1000)}
    return result.model_copy(update={"meta": {**result.meta, "debug": debug}})


@router.post("/api/recommendations/analysis", response_model=ScoredCandidate)
def post_analysis(request: AnalysisRequest) -> ScoredCandidate:
    """Explain how one destination scores for the given preferences."""
    try:
        candidate = analyze(request, settings=get_settings(), destinations=_catalog())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if candidate is None:
        raise HTTPException(status_code=404, detail=f"Unknown destination '{request.destination_id}'")
    return candidate


@router.get("/api/destinations", response_model=list[DestinationAttributes])
def get_destinations() -> list[DestinationAttributes]:
    """Return the destination catalog."""
    return _catalog()


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return scoring settings and the accepted survey labels (no file paths)."""
    settings = get_settings()
    return {
        "app": {"name": settings.app.name},
        "scoring": settings.scoring.model_dump(mode="json"),
        "survey_options": {
            "budget": sorted(settings.preferences.budget_levels),
            "climate": sorted(settings.preferences.climate_levels),
            "styles_and_interests": sorted(settings.preferences.signal_bonuses),
        },
    }
