"""Configuration management for pokefilter."""

import os
from pathlib import Path

from pydantic import BaseModel

_DEFAULT_DATA_DIR = Path(os.getenv("POKEFILTER_DATA_DIR", str(Path.home() / ".pokefilter")))


class Config(BaseModel):
    """Application configuration."""

    # Paths
    data_dir: Path = _DEFAULT_DATA_DIR
    db_path: Path = _DEFAULT_DATA_DIR / "catalog.db"
    cache_dir: Path = _DEFAULT_DATA_DIR / "cache"

    # PokeAPI settings
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    pokeapi_timeout: float = 10.0
    max_pokemon_id: int = 1025  # All Pokemon through Gen 9

    # Generation ranges (national dex ids)
    generation_ranges: dict = {
        1: (1, 151),  # Kanto
        2: (152, 251),  # Johto
        3: (252, 386),  # Hoenn
        4: (387, 493),  # Sinnoh
        5: (494, 649),  # Unova
        6: (650, 721),  # Kalos
        7: (722, 809),  # Alola
        8: (810, 905),  # Galar
        9: (906, 1025),  # Paldea
    }

    # Filter settings
    measurement_scale: int = 10  # metres -> decimetres, kilograms -> hectograms
    fail_open_unresolved: bool = False

    # Logging
    log_level: str = os.getenv("POKEFILTER_LOG_LEVEL", "WARNING")

    def ensure_dirs(self) -> None:
        """Create necessary directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)


# Global config instance
config = Config()
