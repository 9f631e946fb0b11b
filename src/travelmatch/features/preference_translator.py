# src/travelmatch/features/preference_translator.py
"""
Preference translator (categorical answers -> 1..5 ratings).

The scoring core only understands the fixed six-dimension rating shape. Users often
describe themselves through a form instead (a budget label, travel-style and interest
checkboxes, a climate label). This module turns those answers into ratings using
lookup tables from settings (`preferences:` in `defaults.yaml`), so the policy can be
swapped without touching the scoring math.

Rules:
- `budget` and `climate` come from label tables; an unset or unknown label gets `neutral_rating`.
- `adventure`, `culture`, `nature`, `nightlife` start at `base_rating` and gain the bonuses
  of every selected style/interest, capped at 5.
- When explicit ratings and survey answers arrive together, explicit ratings win per dimension
  (`merge_preferences`). The orchestrator and `to_preference_profile` both go through it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from travelmatch.config.settings import PreferenceTranslationSettings
from travelmatch.domain.models import DIMENSIONS, PreferenceProfile, SurveyAnswers
from travelmatch.features.vectorize import numeric_or_zero

logger = logging.getLogger(__name__)

MAX_RATING = 5
MIN_RATING = 1
SIGNAL_DIMENSIONS = ("adventure", "culture", "nature", "nightlife")
SURVEY_KEYS = ("budget", "travel_style", "travelStyle", "interests", "preferred_climate", "preferredClimate")


def _bounded(value: int) -> int:
    return max(MIN_RATING, min(MAX_RATING, int(value)))


def translate_survey(answers: SurveyAnswers, *, table: PreferenceTranslationSettings) -> PreferenceProfile:
    """Translate categorical survey answers into a full six-dimension profile."""
    ratings: dict[str, int] = {}

    ratings["budget"] = _bounded(table.budget_levels.get(answers.budget or "", table.neutral_rating))
    ratings["climate"] = _bounded(table.climate_levels.get(answers.preferred_climate or "", table.neutral_rating))

    scores = {dim: table.base_rating for dim in SIGNAL_DIMENSIONS}
    unknown: list[str] = []
    # dict.fromkeys de-duplicates a label ticked as both a style and an interest.
    for label in dict.fromkeys([*answers.travel_style, *answers.interests]):
        bonuses = table.signal_bonuses.get(label)
        if bonuses is None:
            unknown.append(label)
            continue
        for dim, bonus in bonuses.items():
            if dim in scores:
                scores[dim] += int(bonus)
    if unknown:
        logger.debug("Ignoring unknown preference labels: %s", ", ".join(unknown))

    ratings.update({dim: _bounded(v) for dim, v in scores.items()})
    return PreferenceProfile(**ratings)


def _has_answers(survey: SurveyAnswers) -> bool:
    return bool(survey.budget or survey.travel_style or survey.interests or survey.preferred_climate)


def merge_preferences(
    preferences: PreferenceProfile | None,
    survey: SurveyAnswers | None,
    *,
    table: PreferenceTranslationSettings,
) -> PreferenceProfile | None:
    """Combine explicit ratings with translated survey answers, per dimension.

    Survey answers fill every dimension first; each explicitly rated dimension then
    replaces the translated value. Returns None when neither side carries anything.
    """
    ratings: dict[str, int] = {}
    if survey is not None and _has_answers(survey):
        ratings.update(translate_survey(survey, table=table).ratings())
    if preferences is not None:
        ratings.update(preferences.ratings())
    return PreferenceProfile(**ratings) if ratings else None


def _explicit_ratings(record: Mapping[str, Any]) -> PreferenceProfile:
    ratings = {}
    for d in DIMENSIONS:
        value = numeric_or_zero(record.get(d))
        if value:
            ratings[d] = _bounded(round(value))
    return PreferenceProfile(**ratings)


def _survey_answers(record: Mapping[str, Any]) -> SurveyAnswers:
    # `budget` is both a rating and a survey label; only a string is a label.
    payload = {}
    for k in SURVEY_KEYS:
        if k not in record or (k in DIMENSIONS and not isinstance(record[k], str)):
            continue
        payload[k] = record[k]
    return SurveyAnswers.model_validate(payload)


def to_preference_profile(record: Any, *, table: PreferenceTranslationSettings) -> PreferenceProfile | None:
    """Resolve a stored preference record of any shape into a profile.

    Accepts a `PreferenceProfile`, a `SurveyAnswers`, or a loose mapping that may mix
    numeric ratings with categorical survey fields. Mixed records follow `merge_preferences`:
    numeric ratings win per dimension, survey answers fill the rest.
    Returns None when the record carries no usable preferences.
    """
    if isinstance(record, PreferenceProfile):
        return merge_preferences(record, None, table=table)
    if isinstance(record, SurveyAnswers):
        return merge_preferences(None, record, table=table)
    if not isinstance(record, Mapping):
        return None
    return merge_preferences(_explicit_ratings(record), _survey_answers(record), table=table)
