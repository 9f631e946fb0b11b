import pytest

from travelmatch.config.settings import PreferenceTranslationSettings, get_settings
from travelmatch.domain.models import PreferenceProfile, SurveyAnswers
from travelmatch.features.preference_translator import merge_preferences, to_preference_profile, translate_survey


@pytest.fixture()
def table() -> PreferenceTranslationSettings:
    # Use the packaged tables so the test tracks the shipped policy.
    return get_settings().preferences


def test_labels_map_through_the_tables(table):
    answers = SurveyAnswers(budget="Luxury", preferred_climate="Tropical")

    profile = translate_survey(answers, table=table)

    assert profile.budget == 4
    assert profile.climate == 5
    # Nothing selected: signal dimensions stay at the base rating.
    assert (profile.adventure, profile.culture, profile.nature, profile.nightlife) == (1, 1, 1, 1)


def test_unset_or_unknown_labels_fall_back_to_neutral(table):
    profile = translate_survey(SurveyAnswers(budget="Shoestring"), table=table)

    assert profile.budget == table.neutral_rating
    assert profile.climate == table.neutral_rating


def test_styles_and_interests_add_bonuses_capped_at_five(table):
    answers = SurveyAnswers(
        travelStyle=["Adventure", "Cultural", "Historical"],
        interests=["Hiking", "Sports", "Museums", "Made Up Interest"],
    )

    profile = translate_survey(answers, table=table)

    # base 1 + Adventure 3 + Hiking 2 + Sports 2 -> capped at 5
    assert profile.adventure == 5
    # base 1 + Cultural 3 + Historical 2 + Museums 2 -> capped at 5
    assert profile.culture == 5
    # base 1 + Hiking 1
    assert profile.nature == 2
    assert profile.nightlife == 1


def test_a_label_ticked_twice_counts_once(table):
    once = translate_survey(SurveyAnswers(travel_style=["Nature"]), table=table)
    twice = translate_survey(SurveyAnswers(travel_style=["Nature"], interests=["Nature"]), table=table)

    assert once.nature == twice.nature == 4


def test_translation_table_is_swappable():
    table = PreferenceTranslationSettings(
        base_rating=2,
        neutral_rating=2,
        budget_levels={"Budget": 5},
        signal_bonuses={"Nightlife": {"nightlife": 1}},
    )

    profile = translate_survey(SurveyAnswers(budget="Budget", interests=["Nightlife"]), table=table)

    assert profile.budget == 5
    assert profile.climate == 2
    assert profile.nightlife == 3


def test_loose_records_prefer_explicit_ratings(table):
    record = {"budget": "Luxury", "climate": 2, "culture": 4.6, "nature": "lots", "groupSize": "Solo"}

    profile = to_preference_profile(record, table=table)

    # Numeric ratings win per dimension; the budget label still fills budget.
    assert profile.ratings() == {"climate": 2, "budget": 4, "adventure": 1, "culture": 5, "nature": 1, "nightlife": 1}


def test_mixed_records_merge_ratings_and_survey_answers_per_dimension(table):
    record = {"culture": 5, "budget": "Luxury", "interests": ["Nature", "Hiking"]}

    profile = to_preference_profile(record, table=table)

    assert profile.ratings() == {"climate": 3, "budget": 4, "adventure": 3, "culture": 5, "nature": 5, "nightlife": 1}
    assert profile == merge_preferences(
        PreferenceProfile(culture=5),
        SurveyAnswers(budget="Luxury", interests=["Nature", "Hiking"]),
        table=table,
    )


def test_numeric_budget_is_a_rating_not_a_label(table):
    profile = to_preference_profile({"budget": 2, "travelStyle": ["Cultural"]}, table=table)

    assert profile.budget == 2
    assert profile.culture == 4


def test_empty_survey_answers_add_nothing(table):
    assert merge_preferences(None, SurveyAnswers(), table=table) is None
    assert merge_preferences(PreferenceProfile(nature=4), SurveyAnswers(), table=table).ratings() == {"nature": 4}


def test_loose_categorical_records_are_translated(table):
    record = {"budget": "Budget", "travelStyle": ["Urban"], "preferredClimate": "Cold", "accommodationType": "Hostel"}

    profile = to_preference_profile(record, table=table)

    assert profile.budget == 1
    assert profile.climate == 1
    assert profile.nightlife == 3


def test_records_without_preferences_resolve_to_none(table):
    assert to_preference_profile(None, table=table) is None
    assert to_preference_profile({"groupSize": "Solo"}, table=table) is None
    assert to_preference_profile("culture", table=table) is None


def test_models_pass_through(table):
    profile = PreferenceProfile(culture=5)

    assert to_preference_profile(profile, table=table) == profile
    assert to_preference_profile(PreferenceProfile(), table=table) is None
    assert to_preference_profile(SurveyAnswers(budget="Moderate"), table=table).budget == 3
