"""CLI tests for the filter, search and catalog commands."""

import pytest
from sqlalchemy import text

from pokefilter.cli.app import app
from pokefilter.core.pokemon import Pokemon


def test_filter_by_type(cli_runner, catalog_db):
    """`pokefilter filter --type electric` lists only electric Pokemon."""
    result = cli_runner.invoke(app, ["filter", "--type", "electric"])

    assert result.exit_code == 0
    assert "Pikachu" in result.output
    assert "Pichu" in result.output
    assert "Bulbasaur" not in result.output
    assert "Matches: 2" in result.output


def test_filter_all_types(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["pokemon", "filter", "-t", "water", "-t", "flying", "--all-types"])

    assert result.exit_code == 0
    assert "Gyarados" in result.output
    assert "Squirtle" not in result.output


def test_filter_stat_bound_and_count(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["filter", "--min-stat", "speed=100", "--count"])

    assert result.exit_code == 0
    assert "2 Pokemon match." in result.output


def test_filter_rarity_flags(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["filter", "--legendary"])

    assert result.exit_code == 0
    assert "Mewtwo" in result.output
    assert "Matches: 1" in result.output


def test_filter_height_in_metres(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["filter", "--min-height", "2", "--count"])

    assert result.exit_code == 0
    assert "2 Pokemon match." in result.output


def test_filter_pagination(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["filter", "--limit", "3", "--page", "2"])

    assert result.exit_code == 0
    assert "(Page 2/3)" in result.output
    assert "Pikachu" in result.output
    assert "Bulbasaur" not in result.output


def test_filter_with_no_matches(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["filter", "--type", "dragon"])

    assert result.exit_code == 0
    assert "No results" in result.output
    assert "Matches: 0" in result.output


def test_filter_rejects_malformed_stat_bound(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["filter", "--min-stat", "speed"])

    assert result.exit_code == 1
    assert "NAME=VALUE" in result.output


def test_filter_unknown_ability_matches_nothing(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["filter", "--ability", "Levitate", "--count"])

    assert result.exit_code == 0
    assert "0 Pokemon match." in result.output


def test_search_command(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["search", "char"])

    assert result.exit_code == 0
    assert "Charmander" in result.output


def test_info_command(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["info", "1"])

    assert result.exit_code == 0
    assert "Bulbasaur" in result.output
    assert "chlorophyll (hidden)" in result.output


def test_info_for_missing_pokemon(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["info", "999"])

    assert result.exit_code == 1
    assert "not in the catalog" in result.output


def test_options_command(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["options"])

    assert result.exit_code == 0
    assert "Filter Options" in result.output
    assert "Generations: 1, 2" in result.output
    assert "13 available" in result.output


def test_catalog_stats(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["catalog", "stats"])

    assert result.exit_code == 0
    assert "Pokemon: 8" in result.output


def test_catalog_clear(cli_runner, catalog_db):
    result = cli_runner.invoke(app, ["catalog", "clear", "--yes"])

    assert result.exit_code == 0
    assert catalog_db.get_info().pokemon_count == 0


def test_catalog_load_saves_fetched_pokemon(cli_runner, isolated_db, monkeypatch, bulbasaur):
    calls = []

    def fake_load_range(start_id, end_id, on_progress=None) -> list[Pokemon]:
        calls.append((start_id, end_id))
        return [bulbasaur]

    monkeypatch.setattr("pokefilter.cli.commands.catalog.load_range_sync", fake_load_range)

    result = cli_runner.invoke(app, ["catalog", "load", "--gen", "2"])

    assert result.exit_code == 0
    assert calls == [(152, 251)]
    assert isolated_db.get_pokemon(1) is not None
    assert "only 1/100" in result.output


def test_catalog_load_rejects_unknown_generation(cli_runner, isolated_db):
    result = cli_runner.invoke(app, ["catalog", "load", "--gen", "12"])

    assert result.exit_code == 1
    assert "Unknown generation" in result.output


def test_version(cli_runner):
    result = cli_runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "pokefilter v0.1.0" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["filter", "--limit", "0"],
        ["filter", "--limit", "-5"],
        ["pokemon", "filter", "--page", "0"],
        ["search", "pi", "--limit", "0"],
    ],
)
def test_page_size_and_page_must_be_positive(cli_runner, catalog_db, args):
    result = cli_runner.invoke(app, args)

    assert result.exit_code == 2


@pytest.fixture
def broken_catalog(catalog_db):
    """Catalog whose sprite and ability tables have gone missing."""
    with catalog_db.engine.begin() as conn:
        conn.execute(text("DROP TABLE pokemon_sprites"))
        conn.execute(text("DROP TABLE abilities"))
    return catalog_db


@pytest.mark.parametrize(
    "args,message",
    [
        (["info", "1"], "Could not read the catalog"),
        (["search", "bulba"], "Could not read the catalog"),
        (["filter"], "Could not read the catalog"),
        (["options"], "Could not read the catalog"),
        (["catalog", "stats"], "Could not read the catalog"),
        (["catalog", "clear", "--yes"], "Could not clear the catalog"),
    ],
)
def test_store_failures_exit_cleanly(cli_runner, broken_catalog, args, message):
    result = cli_runner.invoke(app, args)

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert message in result.output


def test_catalog_load_reports_write_failure(cli_runner, broken_catalog, monkeypatch, bulbasaur):
    monkeypatch.setattr(
        "pokefilter.cli.commands.catalog.load_range_sync",
        lambda start_id, end_id, on_progress=None: [bulbasaur],
    )

    result = cli_runner.invoke(app, ["catalog", "load", "--quick"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Could not write the catalog" in result.output
