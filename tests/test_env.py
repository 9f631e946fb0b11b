import os

import pytest

from travelmatch.core.env import get_project_root, load_dotenv_if_present, resolve_project_path


@pytest.fixture()
def fresh_env_cache():
    get_project_root.cache_clear()
    load_dotenv_if_present.cache_clear()
    yield
    get_project_root.cache_clear()
    load_dotenv_if_present.cache_clear()


def test_relative_catalog_paths_resolve_against_pinned_root(tmp_path, monkeypatch, fresh_env_cache):
    monkeypatch.setenv("TRAVELMATCH_PROJECT_ROOT", str(tmp_path))

    assert get_project_root() == tmp_path.resolve()
    expected = tmp_path.resolve() / "data" / "catalogs" / "destinations.json"
    assert resolve_project_path("data/catalogs/destinations.json") == expected


def test_absolute_paths_are_left_alone(tmp_path):
    target = tmp_path / "catalog.json"

    assert resolve_project_path(target) == target


def test_root_is_found_from_a_nested_working_directory(tmp_path, monkeypatch, fresh_env_cache):
    (tmp_path / "data" / "catalogs").mkdir(parents=True)
    nested = tmp_path / "notebooks" / "scratch"
    nested.mkdir(parents=True)
    monkeypatch.delenv("TRAVELMATCH_PROJECT_ROOT", raising=False)
    monkeypatch.delenv("TRAVELMATCH_ENV_FILE", raising=False)
    monkeypatch.chdir(nested)

    assert get_project_root() == tmp_path.resolve()


def test_env_file_is_loaded_without_overriding_process_values(tmp_path, monkeypatch, fresh_env_cache):
    env_file = tmp_path / "local.env"
    env_file.write_text("TRAVELMATCH_TEST_ONLY_A=from-file\nTRAVELMATCH_TEST_ONLY_B=from-file\n", encoding="utf-8")
    monkeypatch.setenv("TRAVELMATCH_ENV_FILE", str(env_file))
    monkeypatch.setenv("TRAVELMATCH_TEST_ONLY_B", "from-process")
    monkeypatch.delenv("TRAVELMATCH_TEST_ONLY_A", raising=False)

    assert load_dotenv_if_present() == env_file.resolve()

    assert os.environ["TRAVELMATCH_TEST_ONLY_A"] == "from-file"
    assert os.environ["TRAVELMATCH_TEST_ONLY_B"] == "from-process"
    monkeypatch.delenv("TRAVELMATCH_TEST_ONLY_A")
