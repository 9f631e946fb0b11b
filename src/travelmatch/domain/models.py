"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- preference input (`PreferenceProfile`, or categorical `SurveyAnswers`)
- catalog entities (`DestinationAttributes`)
- explainable scoring output (`ScoredCandidate`, `RecommendationResult`)

Every preference and destination rating lives on the same fixed set of dimensions (`DIMENSIONS`).
"""

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Any, Literal, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

Dimension = Literal["climate", "budget", "adventure", "culture", "nature", "nightlife"]

DIMENSIONS: tuple[Dimension, ...] = ("climate", "budget", "adventure", "culture", "nature", "nightlife")

AlgorithmName = Literal["cosine", "hybrid"]


class PreferenceProfile(BaseModel):
    """A user's 1..5 rating on each dimension. Unset dimensions are left as None."""

    climate: int | None = Field(default=None, ge=1, le=5)
    budget: int | None = Field(default=None, ge=1, le=5)
    adventure: int | None = Field(default=None, ge=1, le=5)
    culture: int | None = Field(default=None, ge=1, le=5)
    nature: int | None = Field(default=None, ge=1, le=5)
    nightlife: int | None = Field(default=None, ge=1, le=5)

    def ratings(self) -> dict[str, int]:
        """Return only the dimensions that were set."""
        return {d: getattr(self, d) for d in DIMENSIONS if getattr(self, d) is not None}


class SurveyAnswers(BaseModel):
    """Categorical preference answers as collected by a preferences form."""

    model_config = ConfigDict(populate_by_name=True)

    budget: str | None = None
    travel_style: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("travel_style", "travelStyle")
    )
    interests: list[str] = Field(default_factory=list)
    preferred_climate: str | None = Field(
        default=None, validation_alias=AliasChoices("preferred_climate", "preferredClimate")
    )


class DestinationAttributes(BaseModel):
    """A catalog destination: identity, six 1..5 ratings and aggregate review stats."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    name: str
    country: str = ""
    city: str | None = None
    description: str | None = None

    climate: int | None = Field(default=None, ge=1, le=5)
    budget: int | None = Field(default=None, ge=1, le=5)
    adventure: int | None = Field(default=None, ge=1, le=5)
    culture: int | None = Field(default=None, ge=1, le=5)
    nature: int | None = Field(default=None, ge=1, le=5)
    nightlife: int | None = Field(default=None, ge=1, le=5)

    average_rating: float = Field(
        default=0.0, ge=0, le=5, validation_alias=AliasChoices("average_rating", "averageRating")
    )
    total_reviews: int = Field(default=0, ge=0, validation_alias=AliasChoices("total_reviews", "totalReviews"))


class ScoredCandidate(BaseModel):
    """One destination's scoring result. Frozen once built, including `factor_breakdown`."""

    model_config = ConfigDict(frozen=True)

    destination_id: str
    destination_name: str
    destination_country: str = ""
    similarity: float = Field(..., ge=0, le=1)
    factor_breakdown: Mapping[str, float] = Field(default_factory=dict, validate_default=True)
    popularity_score: float = Field(..., ge=0, le=1)
    novelty_score: float = Field(..., ge=0, le=1)
    final_score: float = Field(..., ge=0, le=1)
    explanation: str = ""

    @field_validator("factor_breakdown", mode="after")
    @classmethod
    def _freeze_breakdown(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(value))

    @field_serializer("factor_breakdown")
    def _dump_breakdown(self, value: Mapping[str, float]) -> dict[str, float]:
        return dict(value)


class RecommendationInsights(BaseModel):
    """Aggregate view over one ranked list."""

    average_similarity: float = Field(0.0, ge=0, le=1)
    top_factors: dict[str, float] = Field(default_factory=dict)
    diversity_score: float = Field(0.0, ge=0, le=1)
    total_recommendations: int = Field(0, ge=0)


class RecommendationRequest(BaseModel):
    """Service-layer request: explicit ratings and/or survey answers plus ranking options."""

    preferences: PreferenceProfile | None = None
    survey: SurveyAnswers | None = None
    algorithm: AlgorithmName | None = None
    limit: int | None = Field(default=None, ge=0, le=50)
    settings_overrides: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _require_some_preferences(self) -> "RecommendationRequest":
        if self.preferences is None and self.survey is None:
            raise ValueError("either 'preferences' or 'survey' must be provided")
        return self


class AnalysisRequest(BaseModel):
    """Score a single destination for a user (no ranking)."""

    destination_id: str
    preferences: PreferenceProfile | None = None
    survey: SurveyAnswers | None = None
    algorithm: AlgorithmName | None = None

    @model_validator(mode="after")
    def _require_some_preferences(self) -> "AnalysisRequest":
        if self.preferences is None and self.survey is None:
            raise ValueError("either 'preferences' or 'survey' must be provided")
        return self


class RecommendationResult(BaseModel):
    """Top-N recommendations plus the resolved inputs used to produce them."""

    generated_at: datetime
    algorithm: AlgorithmName
    limit: int
    preferences: dict[str, int]
    results: list[ScoredCandidate]
    insights: RecommendationInsights
    meta: dict[str, Any] = Field(default_factory=dict)
