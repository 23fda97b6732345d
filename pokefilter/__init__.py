"""pokefilter - Pokedex catalog filtering."""

__version__ = "0.1.0"
