import json

import pytest

from travelmatch.catalog.loader import find_destination, load_destinations
from travelmatch.config.settings import get_settings


def test_packaged_catalog_loads():
    destinations = load_destinations(get_settings().catalog.path)

    assert len(destinations) == 10
    bali = find_destination(destinations, "bali")
    assert bali is not None
    assert (bali.climate, bali.budget, bali.nightlife) == (5, 2, 4)
    assert bali.average_rating == 4.5
    assert bali.total_reviews == 1250


def test_loader_accepts_snake_and_camel_case(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            [
                {"_id": "a", "name": "A", "country": "X", "culture": 5, "averageRating": 4.1, "totalReviews": 3},
                {"id": "b", "name": "B", "country": "Y", "culture": 2, "average_rating": 3.0, "total_reviews": 9},
            ]
        ),
        encoding="utf-8",
    )

    a, b = load_destinations(path)

    assert (a.id, a.average_rating, a.total_reviews) == ("a", 4.1, 3)
    assert (b.id, b.average_rating, b.total_reviews) == ("b", 3.0, 9)
    assert a.climate is None


def test_loader_rejects_out_of_range_ratings(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{"id": "a", "name": "A", "climate": 9}]), encoding="utf-8")

    with pytest.raises(ValueError):
        load_destinations(path)


def test_loader_rejects_duplicate_ids(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{"id": "a", "name": "A"}, {"id": "a", "name": "A again"}]), encoding="utf-8")

    with pytest.raises(ValueError, match="Duplicate destination id 'a'"):
        load_destinations(path)


def test_find_destination_returns_none_for_unknown_ids():
    assert find_destination([], "nowhere") is None
