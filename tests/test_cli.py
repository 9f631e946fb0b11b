import json

import pytest

from travelmatch.cli import main


@pytest.fixture()
def catalog_path(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            [
                {"id": "museum-city", "name": "Museum City", "country": "A", "culture": 5, "nightlife": 2,
                 "averageRating": 4.2, "totalReviews": 300},
                {"id": "party-island", "name": "Party Island", "country": "B", "culture": 1, "nightlife": 5,
                 "averageRating": 4.2, "totalReviews": 300},
            ]
        ),
        encoding="utf-8",
    )
    return str(path)


def test_cli_recommend_json(catalog_path, capsys):
    code = main(["recommend", "--culture", "5", "--nightlife", "1", "--limit", "1", "--catalog", catalog_path, "--json"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["limit"] == 1
    assert [r["destination_id"] for r in data["results"]] == ["museum-city"]


def test_cli_recommend_text_output_with_survey_flags(catalog_path, capsys):
    code = main(["recommend", "--interest", "Nightlife", "--interest", "Shopping", "--catalog", catalog_path])

    assert code == 0
    out = capsys.readouterr().out
    assert "Top results:" in out
    assert out.index("Party Island") < out.index("Museum City")


def test_cli_analyze_json(catalog_path, capsys):
    code = main(["analyze", "--destination-id", "party-island", "--nightlife", "5", "--catalog", catalog_path, "--json"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["destination_id"] == "party-island"
    assert data["factor_breakdown"]["nightlife"] == 1.0


def test_cli_analyze_unknown_destination_exits_with_usage_error(catalog_path):
    with pytest.raises(SystemExit) as exc:
        main(["analyze", "--destination-id", "atlantis", "--culture", "3", "--catalog", catalog_path])
    assert exc.value.code == 2


def test_cli_requires_some_preference_flag(catalog_path):
    with pytest.raises(SystemExit) as exc:
        main(["recommend", "--catalog", catalog_path])
    assert exc.value.code == 2
