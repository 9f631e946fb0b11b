"""
TravelMatch CLI entrypoint.

This CLI is intended for quick local demos and debugging without an HTTP client.
It delegates all recommendation logic to `travelmatch.recommender.recommend`.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from travelmatch.catalog.loader import load_destinations
from travelmatch.config.settings import get_settings
from travelmatch.core.logging import configure_logging
from travelmatch.domain.models import (
    DIMENSIONS,
    AnalysisRequest,
    PreferenceProfile,
    RecommendationRequest,
    SurveyAnswers,
)
from travelmatch.recommender.recommend import analyze, recommend
from travelmatch.scoring.explain import one_line_summary


def _preference_inputs(args: argparse.Namespace) -> tuple[PreferenceProfile | None, SurveyAnswers | None]:
    """Build explicit ratings and/or survey answers from CLI flags (None when not given)."""
    ratings = {d: getattr(args, d) for d in DIMENSIONS if getattr(args, d) is not None}
    preferences = PreferenceProfile(**ratings) if ratings else None

    survey = None
    if args.budget_level or args.travel_style or args.interest or args.climate_preference:
        survey = SurveyAnswers(
            budget=args.budget_level,
            travel_style=args.travel_style or [],
            interests=args.interest or [],
            preferred_climate=args.climate_preference,
        )
    return preferences, survey


def _destinations(args: argparse.Namespace):
    return load_destinations(args.catalog) if args.catalog else None


def _cmd_recommend(args: argparse.Namespace) -> int:
    """Handle the `recommend` subcommand."""
    preferences, survey = _preference_inputs(args)
    if preferences is None and survey is None:
        args.parser.error("provide rating flags (e.g. --culture 5) or survey flags (e.g. --interest Museums)")

    try:
        request = RecommendationRequest(
            preferences=preferences,
            survey=survey,
            algorithm=args.algorithm,
            limit=args.limit,
        )
        result = recommend(request, settings=get_settings(), destinations=_destinations(args))
    except ValueError as e:
        args.parser.error(str(e))

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"Algorithm: {result.algorithm}  preferences: {result.preferences}")
    if not result.results:
        print("No recommendations yet.")
        return 0
    print("Top results:")
    for i, item in enumerate(result.results, start=1):
        print(f"{i:>2}. {item.destination_name} ({item.destination_country})  {one_line_summary(item)}")
        print(f"    {item.explanation}")
    return 0


def _cmd_analyze(args: argparse.Namespace) -> int:
    """Handle the `analyze` subcommand."""
    preferences, survey = _preference_inputs(args)
    if preferences is None and survey is None:
        args.parser.error("provide rating flags (e.g. --culture 5) or survey flags (e.g. --interest Museums)")

    try:
        request = AnalysisRequest(
            destination_id=args.destination_id,
            preferences=preferences,
            survey=survey,
            algorithm=args.algorithm,
        )
        candidate = analyze(request, settings=get_settings(), destinations=_destinations(args))
    except ValueError as e:
        args.parser.error(str(e))
    if candidate is None:
        args.parser.error(f"unknown destination id '{args.destination_id}'")

    if args.json:
        print(json.dumps(candidate.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"{candidate.destination_name} ({candidate.destination_country})  {one_line_summary(candidate)}")
    for dim, score in candidate.factor_breakdown.items():
        print(f"    - {dim}: {score:.3f}")
    print(f"    {candidate.explanation}")
    return 0


def _add_preference_arguments(p: argparse.ArgumentParser) -> None:
    for dim in DIMENSIONS:
        p.add_argument(f"--{dim}", type=int, choices=range(1, 6), default=None, help=f"1..5 {dim} rating")
    p.add_argument("--budget-level", type=str, default=None, help="Survey budget label (e.g. Moderate)")
    p.add_argument("--travel-style", action="append", default=[], help="Repeatable survey travel style")
    p.add_argument("--interest", action="append", default=[], help="Repeatable survey interest")
    p.add_argument("--climate-preference", type=str, default=None, help="Survey climate label (e.g. Tropical)")
    p.add_argument("--algorithm", choices=["cosine", "hybrid"], default=None)
    p.add_argument("--catalog", type=str, default=None, help="Catalog JSON path (defaults to settings)")
    p.add_argument("--json", action="store_true", help="Output machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the TravelMatch CLI."""
    parser = argparse.ArgumentParser(prog="travelmatch")
    sub = parser.add_subparsers(dest="command", required=True)

    rec = sub.add_parser("recommend", help="Rank catalog destinations for the given preferences.")
    _add_preference_arguments(rec)
    rec.add_argument("--limit", type=int, default=None)
    rec.set_defaults(func=_cmd_recommend, parser=rec)

    an = sub.add_parser("analyze", help="Score one destination for the given preferences.")
    an.add_argument("--destination-id", required=True)
    _add_preference_arguments(an)
    an.set_defaults(func=_cmd_analyze, parser=an)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m travelmatch.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
