"""
Destination catalog loader.

The catalog is a local JSON file (default: `data/catalogs/destinations.json`) that
contains destinations with their six 1..5 ratings and review stats. We validate it into
typed Pydantic models so downstream scoring code can assume a consistent shape.
Both snake_case (`average_rating`) and camelCase (`averageRating`) keys are accepted.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter

from travelmatch.core.env import resolve_project_path
from travelmatch.domain.models import DestinationAttributes


_DESTINATIONS_ADAPTER = TypeAdapter(list[DestinationAttributes])


def load_destinations(path: str | Path) -> list[DestinationAttributes]:
    """Load and validate a destination catalog JSON file."""
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    destinations = _DESTINATIONS_ADAPTER.validate_python(payload)

    seen: set[str] = set()
    for d in destinations:
        if d.id in seen:
            raise ValueError(f"Duplicate destination id '{d.id}' in {resolved}")
        seen.add(d.id)
    return destinations


def find_destination(destinations: list[DestinationAttributes], destination_id: str) -> DestinationAttributes | None:
    """Return the destination with `destination_id`, or None."""
    for d in destinations:
        if d.id == destination_id:
            return d
    return None
