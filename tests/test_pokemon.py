"""Tests for the Pokemon catalog model."""

import pytest
from pydantic import ValidationError

from pokefilter.core.pokemon import (
    STAT_NAMES,
    TYPE_IDS,
    BaseStat,
    Pokemon,
    PokemonType,
    TypeSlot,
)


class TestPokemonType:
    def test_eighteen_types(self):
        assert len(PokemonType) == 18

    def test_type_ids_are_unique_and_contiguous(self):
        assert sorted(TYPE_IDS.values()) == list(range(1, 19))

    @pytest.mark.parametrize("ptype", list(PokemonType))
    def test_type_id_round_trip(self, ptype):
        assert PokemonType.from_id(ptype.type_id) is ptype

    def test_known_ids(self):
        assert PokemonType.NORMAL.type_id == 1
        assert PokemonType.FAIRY.type_id == 18

    def test_unknown_id(self):
        with pytest.raises(ValueError, match="Unknown type id"):
            PokemonType.from_id(10001)


class TestPokemon:
    def test_display_name(self):
        assert Pokemon(id=122, name="mr-mime").display_name == "Mr Mime"

    def test_measurements(self, bulbasaur):
        assert bulbasaur.height_m == pytest.approx(0.7)
        assert bulbasaur.weight_kg == pytest.approx(6.9)

    def test_types_display(self, bulbasaur, charmander):
        assert bulbasaur.types_display == "Grass/Poison"
        assert charmander.types_display == "Fire"

    def test_stat_lookup(self, charmander):
        assert charmander.stat("speed") == 65
        assert charmander.stat("luck") is None

    def test_base_stat_total(self, squirtle):
        assert squirtle.base_stat_total == 314

    def test_has_type(self, bulbasaur):
        assert bulbasaur.has_type(PokemonType.POISON)
        assert not bulbasaur.has_type(PokemonType.FIRE)

    def test_defaults(self):
        pokemon = Pokemon(id=1, name="bulbasaur")
        assert pokemon.types == []
        assert pokemon.generation is None
        assert pokemon.is_legendary is False
        assert pokemon.sprites.front_default is None

    def test_at_most_two_types(self):
        with pytest.raises(ValidationError):
            Pokemon(
                id=1,
                name="tri",
                types=[
                    TypeSlot(slot=1, type=PokemonType.FIRE),
                    TypeSlot(slot=2, type=PokemonType.WATER),
                    TypeSlot(slot=2, type=PokemonType.GRASS),
                ],
            )

    def test_type_slot_range(self):
        with pytest.raises(ValidationError):
            TypeSlot(slot=3, type=PokemonType.FIRE)

    def test_base_stat_range(self):
        with pytest.raises(ValidationError):
            BaseStat(name="hp", base_stat=256)

    def test_stat_names_cover_the_six_stats(self):
        assert len(STAT_NAMES) == 6
        assert "special-attack" in STAT_NAMES
