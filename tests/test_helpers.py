"""Tests for helper utilities."""

import pytest

from pokefilter.utils import config as config_module
from pokefilter.utils.helpers import (
    from_stored_measure,
    generation_for_id,
    parse_stat_bounds,
    roman_to_int,
    to_stored_measure,
)


class TestGenerationForId:
    @pytest.mark.parametrize(
        "pokemon_id,expected",
        [(1, 1), (151, 1), (152, 2), (386, 3), (387, 4), (649, 5), (721, 6), (809, 7), (810, 8), (1025, 9)],
    )
    def test_boundaries(self, pokemon_id, expected):
        assert generation_for_id(pokemon_id) == expected

    def test_out_of_range(self):
        assert generation_for_id(0) is None
        assert generation_for_id(10001) is None


class TestMeasures:
    def test_to_stored(self):
        assert to_stored_measure(1.0) == 10
        assert to_stored_measure(0.5) == 5

    def test_from_stored(self):
        assert from_stored_measure(69) == pytest.approx(6.9)

    def test_scale_comes_from_config(self, monkeypatch):
        monkeypatch.setattr(config_module.config, "measurement_scale", 100)
        assert to_stored_measure(1.5) == 150


class TestParseStatBounds:
    def test_pairs(self):
        assert parse_stat_bounds(["speed=100", " Attack = 80 "]) == {"speed": 100, "attack": 80}

    def test_none_and_empty(self):
        assert parse_stat_bounds(None) == {}
        assert parse_stat_bounds([]) == {}

    def test_later_duplicates_win(self):
        assert parse_stat_bounds(["hp=10", "hp=20"]) == {"hp": 20}

    @pytest.mark.parametrize("raw", ["speed", "=10", "speed=fast", "speed="])
    def test_malformed(self, raw):
        with pytest.raises(ValueError):
            parse_stat_bounds([raw])


class TestRomanToInt:
    @pytest.mark.parametrize(
        "numeral,expected",
        [("i", 1), ("ii", 2), ("iv", 4), ("v", 5), ("vi", 6), ("ix", 9), ("IX", 9)],
    )
    def test_generation_numerals(self, numeral, expected):
        assert roman_to_int(numeral) == expected

    def test_empty(self):
        assert roman_to_int("") == 0

    def test_invalid(self):
        with pytest.raises(KeyError):
            roman_to_int("abc")
