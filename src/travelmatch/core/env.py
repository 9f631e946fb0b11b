"""
Project-root and `.env` helpers for TravelMatch.

`catalog.path` in settings is relative (`data/catalogs/destinations.json`), and the CLI,
uvicorn and pytest are all started from different directories. Relative paths are therefore
resolved against the TravelMatch checkout, found by walking up to a directory that holds
`pyproject.toml` or the `data/catalogs` folder. `TRAVELMATCH_PROJECT_ROOT` pins it explicitly.

A repo-local `.env` (or the file named by `TRAVELMATCH_ENV_FILE`) is loaded once, before
settings read `TRAVELMATCH_*` variables. Variables already set in the process win.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from dotenv import load_dotenv

ROOT_ENV_VAR = "TRAVELMATCH_PROJECT_ROOT"
ENV_FILE_VAR = "TRAVELMATCH_ENV_FILE"


def _explicit_env_file() -> Path | None:
    value = os.getenv(ENV_FILE_VAR)
    return Path(value).expanduser().resolve() if value else None


def _is_checkout(path: Path) -> bool:
    return (path / "pyproject.toml").is_file() or (path / "data" / "catalogs").is_dir()


def _search_starts() -> Iterator[Path]:
    # The working directory first; then this module's own location for installed console scripts.
    yield Path.cwd().resolve()
    yield Path(__file__).resolve().parent


@lru_cache
def get_project_root() -> Path:
    """Return the TravelMatch checkout that relative catalog paths resolve against (cached)."""
    pinned = os.getenv(ROOT_ENV_VAR)
    if pinned:
        return Path(pinned).expanduser().resolve()

    env_file = _explicit_env_file()
    if env_file is not None:
        return env_file.parent

    for start in _search_starts():
        for candidate in (start, *start.parents):
            if _is_checkout(candidate):
                return candidate
    return Path.cwd().resolve()


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the `.env` file once; return its path, or None when there is none."""
    env_path = _explicit_env_file() or get_project_root() / ".env"
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a settings path; relative paths are taken from the project root."""
    p = Path(path).expanduser()
    return p if p.is_absolute() else (get_project_root() / p).resolve()
