"""Shared fixtures for pokefilter tests."""

import importlib

import pytest
from typer.testing import CliRunner

from pokefilter.core.filter_engine import FilterEngine
from pokefilter.core.pokemon import AbilitySlot, BaseStat, Pokemon, PokemonType, Sprites, TypeSlot
from pokefilter.data.database import Database
from pokefilter.utils import config as config_module

STAT_ORDER = ["hp", "attack", "defense", "special-attack", "special-defense", "speed"]


def make_pokemon(
    pokemon_id: int,
    name: str,
    types: list[str],
    stats: list[int] | None = None,
    abilities: list[str] | None = None,
    hidden_ability: str | None = None,
    **fields,
) -> Pokemon:
    """Build a catalog Pokemon with compact arguments."""
    ability_slots = [AbilitySlot(name=a, slot=i + 1) for i, a in enumerate(abilities or [])]
    if hidden_ability:
        ability_slots.append(AbilitySlot(name=hidden_ability, slot=3, is_hidden=True))
    return Pokemon(
        id=pokemon_id,
        name=name,
        types=[TypeSlot(slot=i + 1, type=PokemonType(t)) for i, t in enumerate(types)],
        stats=[BaseStat(name=n, base_stat=v) for n, v in zip(STAT_ORDER, stats or [])],
        abilities=ability_slots,
        sprites=Sprites(front_default=f"https://example.test/sprites/{pokemon_id}.png"),
        **fields,
    )


@pytest.fixture
def pokemon_factory():
    """Expose the Pokemon builder to tests."""
    return make_pokemon


# Pokemon fixtures
@pytest.fixture
def bulbasaur():
    """Create Bulbasaur."""
    return make_pokemon(
        1, "bulbasaur", ["grass", "poison"],
        stats=[45, 49, 49, 65, 65, 45],
        abilities=["overgrow"], hidden_ability="chlorophyll",
        height=7, weight=69,
    )


@pytest.fixture
def charmander():
    """Create Charmander."""
    return make_pokemon(
        4, "charmander", ["fire"],
        stats=[39, 52, 43, 60, 50, 65],
        abilities=["blaze"], hidden_ability="solar-power",
        height=6, weight=85,
    )


@pytest.fixture
def squirtle():
    """Create Squirtle."""
    return make_pokemon(
        7, "squirtle", ["water"],
        stats=[44, 48, 65, 50, 64, 43],
        abilities=["torrent"], hidden_ability="rain-dish",
        height=5, weight=90,
    )


@pytest.fixture
def catalog_pokemon(bulbasaur, charmander, squirtle):
    """A small catalog spanning types, generations and rarity flags."""
    return [
        bulbasaur,
        charmander,
        squirtle,
        make_pokemon(
            25, "pikachu", ["electric"],
            stats=[35, 55, 40, 50, 50, 90],
            abilities=["static"], hidden_ability="lightning-rod",
            height=4, weight=60,
        ),
        make_pokemon(
            130, "gyarados", ["water", "flying"],
            stats=[95, 125, 79, 60, 100, 81],
            abilities=["intimidate"], hidden_ability="moxie",
            height=65, weight=2350,
        ),
        make_pokemon(
            150, "mewtwo", ["psychic"],
            stats=[106, 110, 90, 154, 90, 130],
            abilities=["pressure"], hidden_ability="unnerve",
            height=20, weight=1220, is_legendary=True,
        ),
        make_pokemon(
            151, "mew", ["psychic"],
            stats=[100, 100, 100, 100, 100, 100],
            abilities=["synchronize"],
            height=4, weight=40, is_mythical=True,
        ),
        make_pokemon(
            172, "pichu", ["electric"],
            stats=[20, 40, 15, 35, 35, 60],
            abilities=["static"], hidden_ability="lightning-rod",
            height=3, weight=20, is_baby=True,
        ),
    ]


# Database fixtures
@pytest.fixture
def isolated_db(tmp_path, monkeypatch) -> Database:
    """Provide a database instance isolated to a temporary directory."""
    data_dir = tmp_path / "data"
    cache_dir = data_dir / "cache"
    db_path = data_dir / "catalog.db"

    for attr, value in (
        ("data_dir", data_dir),
        ("cache_dir", cache_dir),
        ("db_path", db_path),
    ):
        monkeypatch.setattr(config_module.config, attr, value)

    test_db = Database(db_path=db_path)

    modules_to_patch = [
        "pokefilter.data.database",
        "pokefilter.cli.commands.pokemon",
        "pokefilter.cli.commands.catalog",
        "pokefilter.server",
    ]
    for module_name in modules_to_patch:
        module = importlib.import_module(module_name)
        monkeypatch.setattr(module, "db", test_db)

    return test_db


@pytest.fixture
def catalog_db(isolated_db, catalog_pokemon) -> Database:
    """Isolated database loaded with the sample catalog."""
    isolated_db.save_many(catalog_pokemon)
    return isolated_db


@pytest.fixture
def engine(catalog_db) -> FilterEngine:
    """Filter engine over the sample catalog."""
    return FilterEngine(catalog_db)


@pytest.fixture
def fail_open(monkeypatch):
    """Treat unresolved ability and stat names as no constraint."""
    monkeypatch.setattr(config_module.config, "fail_open_unresolved", True)


# Utility fixtures
@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI runner for command tests."""
    return CliRunner()
