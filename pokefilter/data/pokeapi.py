"""PokeAPI client for populating the local catalog."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Callable, Optional

import httpx

from pokefilter.core.pokemon import AbilitySlot, BaseStat, Pokemon, PokemonType, Sprites, TypeSlot
from pokefilter.utils.config import config
from pokefilter.utils.helpers import generation_for_id, roman_to_int

logger = logging.getLogger(__name__)


def _id_from_url(url: str) -> int:
    """Extract the trailing numeric id from a PokeAPI resource URL."""
    return int(url.rstrip("/").split("/")[-1])


def parse_generation(species_data: Optional[dict], pokemon_id: int) -> Optional[int]:
    """Get the generation from species data, falling back to the id ranges."""
    if species_data and species_data.get("generation"):
        generation_name = species_data["generation"].get("name", "")
        _, _, numeral = generation_name.partition("-")
        try:
            generation = roman_to_int(numeral)
        except KeyError:
            generation = 0
        if generation:
            return generation
        logger.debug("Unrecognized generation name '%s'", generation_name)
    return generation_for_id(pokemon_id)


def build_pokemon(pokemon_data: dict, species_data: Optional[dict] = None) -> Pokemon:
    """Build a catalog Pokemon from PokeAPI ``/pokemon`` and ``/pokemon-species`` payloads."""
    pokemon_id = pokemon_data["id"]

    types = []
    for entry in pokemon_data.get("types", []):
        try:
            ptype = PokemonType(entry["type"]["name"])
        except ValueError:
            # "unknown"/"shadow" are not part of the catalog's type table
            logger.debug("Skipping type '%s' on #%d", entry["type"]["name"], pokemon_id)
            continue
        types.append(TypeSlot(slot=entry["slot"], type=ptype))

    stats = [
        BaseStat(
            name=entry["stat"]["name"],
            base_stat=entry["base_stat"],
            effort=entry.get("effort", 0),
        )
        for entry in pokemon_data.get("stats", [])
    ]

    abilities = [
        AbilitySlot(
            name=entry["ability"]["name"],
            slot=entry.get("slot", 1),
            is_hidden=entry.get("is_hidden", False),
        )
        for entry in pokemon_data.get("abilities", [])
    ]

    sprite_data = pokemon_data.get("sprites") or {}
    artwork = (sprite_data.get("other") or {}).get("official-artwork") or {}
    sprites = Sprites(
        front_default=sprite_data.get("front_default"),
        front_shiny=sprite_data.get("front_shiny"),
        back_default=sprite_data.get("back_default"),
        back_shiny=sprite_data.get("back_shiny"),
        official_artwork=artwork.get("front_default"),
    )

    species_data = species_data or {}
    return Pokemon(
        id=pokemon_id,
        name=pokemon_data["name"],
        height=pokemon_data.get("height", 0),
        weight=pokemon_data.get("weight", 0),
        base_experience=pokemon_data.get("base_experience"),
        order=pokemon_data.get("order", 0),
        is_default=pokemon_data.get("is_default", True),
        generation=parse_generation(species_data, pokemon_id),
        is_legendary=species_data.get("is_legendary", False),
        is_mythical=species_data.get("is_mythical", False),
        is_baby=species_data.get("is_baby", False),
        types=types,
        stats=stats,
        abilities=abilities,
        sprites=sprites,
    )


class PokeAPIClient:
    """Client for interacting with PokeAPI."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        cache_dir: Optional[Path] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.pokeapi_base_url).rstrip("/")
        self.cache_dir = Path(cache_dir or config.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._transport = transport
        self._pokemon_cache: dict[int, dict] = {}
        self._species_cache: dict[int, dict] = {}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=config.pokeapi_timeout)

    async def _get_cached(self, resource: str, pokemon_id: int, memory: dict[int, dict]) -> Optional[dict]:
        """Fetch a resource from memory, disk cache or the API."""
        if pokemon_id in memory:
            return memory[pokemon_id]

        cache_file = self.cache_dir / f"{resource}_{pokemon_id}.json"
        if cache_file.exists():
            with open(cache_file, "r") as f:
                data = json.load(f)
                memory[pokemon_id] = data
                return data

        async with self._client() as client:
            try:
                response = await client.get(f"{self.base_url}/{resource}/{pokemon_id}")
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPError as exc:
                logger.warning("Could not fetch %s/%d: %s", resource, pokemon_id, exc)
                return None

        with open(cache_file, "w") as f:
            json.dump(data, f)
        memory[pokemon_id] = data
        return data

    async def get_pokemon(self, pokemon_id: int) -> Optional[dict]:
        """Fetch Pokemon data from API or cache."""
        return await self._get_cached("pokemon", pokemon_id, self._pokemon_cache)

    async def get_species(self, pokemon_id: int) -> Optional[dict]:
        """Fetch Pokemon species data (generation and rarity flags)."""
        return await self._get_cached("pokemon-species", pokemon_id, self._species_cache)

    async def create_pokemon(self, pokemon_id: int) -> Optional[Pokemon]:
        """Create a catalog Pokemon from API data."""
        pokemon_data = await self.get_pokemon(pokemon_id)
        if not pokemon_data:
            return None
        species_data = await self.get_species(pokemon_id)
        return build_pokemon(pokemon_data, species_data)

    async def load_range(
        self,
        start_id: int,
        end_id: int,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> list[Pokemon]:
        """Fetch every Pokemon with ``start_id <= id <= end_id``.

        Ids the API cannot serve are skipped. ``on_progress`` receives
        (loaded, total) after each id.
        """
        total = end_id - start_id + 1
        loaded: list[Pokemon] = []
        for pokemon_id in range(start_id, end_id + 1):
            pokemon = await self.create_pokemon(pokemon_id)
            if pokemon:
                loaded.append(pokemon)
            if on_progress:
                on_progress(len(loaded), total)
        logger.info("Loaded %d/%d Pokemon from %s", len(loaded), total, self.base_url)
        return loaded


# Synchronous wrapper for CLI usage
def load_range_sync(
    start_id: int,
    end_id: int,
    on_progress: Optional[Callable[[int, int], None]] = None,
) -> list[Pokemon]:
    """Synchronous wrapper for loading a range of Pokemon."""
    client = PokeAPIClient()
    return asyncio.run(client.load_range(start_id, end_id, on_progress))
