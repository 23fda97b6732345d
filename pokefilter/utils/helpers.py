"""Helper utilities for pokefilter."""

from pokefilter.utils.config import config


def generation_for_id(pokemon_id: int) -> int | None:
    """Get the generation a national dex id belongs to, or None if out of range."""
    for generation, (start_id, end_id) in config.generation_ranges.items():
        if start_id <= pokemon_id <= end_id:
            return generation
    return None


def to_stored_measure(value: float) -> float:
    """Convert metres/kilograms into the stored decimetres/hectograms."""
    return value * config.measurement_scale


def from_stored_measure(value: int) -> float:
    """Convert stored decimetres/hectograms into metres/kilograms."""
    return value / config.measurement_scale


def parse_stat_bounds(values: list[str] | None) -> dict[str, int]:
    """Parse ``NAME=VALUE`` pairs into a stat bound mapping.

    Args:
        values: Strings such as ``["speed=100", "attack=80"]``.

    Returns:
        Dict of {stat_name: bound}. Later duplicates win.

    Raises:
        ValueError: If a pair is malformed or the value is not an integer.
    """
    bounds: dict[str, int] = {}
    for raw in values or []:
        name, sep, number = raw.partition("=")
        name = name.strip().lower()
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got '{raw}'")
        try:
            bounds[name] = int(number.strip())
        except ValueError:
            raise ValueError(f"Stat bound for '{name}' must be an integer, got '{number}'") from None
    return bounds


def roman_to_int(numeral: str) -> int:
    """Convert a roman numeral (as used in PokeAPI generation names) to int."""
    values = {"i": 1, "v": 5, "x": 10, "l": 50}
    total = 0
    previous = 0
    for char in reversed(numeral.lower()):
        value = values[char]
        if value < previous:
            total -= value
        else:
            total += value
            previous = value
    return total
