# src/travelmatch/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/travelmatch/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `TRAVELMATCH_LOG_LEVEL`, `TRAVELMATCH_CATALOG_PATH`)
- an external YAML file via `TRAVELMATCH_CONFIG_PATH`

Design rule:
- Tuning knobs live in YAML, not hard-coded in business logic.
  The model defaults mirror `defaults.yaml` so the scoring core can run without reading files.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from travelmatch.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `travelmatch.config`."""
    text = resources.files("travelmatch.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "TravelMatch"
    log_level: str = "INFO"


class CatalogSettings(BaseModel):
    path: str = "data/catalogs/destinations.json"


class PopularitySettings(BaseModel):
    rating_weight: float = Field(0.7, ge=0)
    reviews_weight: float = Field(0.3, ge=0)
    max_rating: float = Field(5.0, gt=0)
    review_count_cap: int = Field(1000, ge=1)


AlgorithmName = Literal["cosine", "hybrid"]
BlendComponent = Literal["similarity", "popularity", "novelty"]


class ScoringSettings(BaseModel):
    default_algorithm: AlgorithmName = "hybrid"
    top_n_default: int = Field(10, ge=1)
    blend_weights: dict[BlendComponent, float] = Field(
        default_factory=lambda: {"similarity": 0.6, "popularity": 0.3, "novelty": 0.1}
    )
    popularity: PopularitySettings = Field(default_factory=PopularitySettings)


class PreferenceTranslationSettings(BaseModel):
    """Lookup tables that turn categorical survey answers into 1..5 ratings."""

    base_rating: int = Field(1, ge=1, le=5)
    neutral_rating: int = Field(3, ge=1, le=5)
    budget_levels: dict[str, int] = Field(default_factory=dict)
    climate_levels: dict[str, int] = Field(default_factory=dict)
    signal_bonuses: dict[str, dict[str, int]] = Field(default_factory=dict)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    preferences: PreferenceTranslationSettings = Field(default_factory=PreferenceTranslationSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)
    log_level = os.getenv("TRAVELMATCH_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    catalog_path = os.getenv("TRAVELMATCH_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("TRAVELMATCH_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
