"""Pokemon catalog model and type table."""

from enum import Enum

from pydantic import BaseModel, Field

from pokefilter.utils.helpers import from_stored_measure


class PokemonType(str, Enum):
    """The eighteen Pokemon types."""

    NORMAL = "normal"
    FIGHTING = "fighting"
    FLYING = "flying"
    POISON = "poison"
    GROUND = "ground"
    ROCK = "rock"
    BUG = "bug"
    GHOST = "ghost"
    STEEL = "steel"
    FIRE = "fire"
    WATER = "water"
    GRASS = "grass"
    ELECTRIC = "electric"
    PSYCHIC = "psychic"
    ICE = "ice"
    DRAGON = "dragon"
    DARK = "dark"
    FAIRY = "fairy"

    @property
    def type_id(self) -> int:
        """Stable database id of this type."""
        return TYPE_IDS[self]

    @classmethod
    def from_id(cls, type_id: int) -> "PokemonType":
        """Look up a type by database id."""
        try:
            return TYPES_BY_ID[type_id]
        except KeyError:
            raise ValueError(f"Unknown type id: {type_id}") from None


# Same ids as PokeAPI; shared by the filter queries, hydration and table seeding
TYPE_IDS: dict[PokemonType, int] = {
    PokemonType.NORMAL: 1,
    PokemonType.FIGHTING: 2,
    PokemonType.FLYING: 3,
    PokemonType.POISON: 4,
    PokemonType.GROUND: 5,
    PokemonType.ROCK: 6,
    PokemonType.BUG: 7,
    PokemonType.GHOST: 8,
    PokemonType.STEEL: 9,
    PokemonType.FIRE: 10,
    PokemonType.WATER: 11,
    PokemonType.GRASS: 12,
    PokemonType.ELECTRIC: 13,
    PokemonType.PSYCHIC: 14,
    PokemonType.ICE: 15,
    PokemonType.DRAGON: 16,
    PokemonType.DARK: 17,
    PokemonType.FAIRY: 18,
}

TYPES_BY_ID: dict[int, PokemonType] = {type_id: ptype for ptype, type_id in TYPE_IDS.items()}

STAT_NAMES = ["hp", "attack", "defense", "special-attack", "special-defense", "speed"]


class TypeSlot(BaseModel):
    """A type assigned to a Pokemon in slot 1 (primary) or 2 (secondary)."""

    slot: int = Field(ge=1, le=2)
    type: PokemonType


class BaseStat(BaseModel):
    """A base stat value."""

    name: str
    base_stat: int = Field(ge=0, le=255)
    effort: int = 0


class AbilitySlot(BaseModel):
    """An ability a Pokemon can have."""

    name: str
    slot: int = 1
    is_hidden: bool = False


class Sprites(BaseModel):
    """Sprite URLs."""

    front_default: str | None = None
    front_shiny: str | None = None
    back_default: str | None = None
    back_shiny: str | None = None
    official_artwork: str | None = None


class Pokemon(BaseModel):
    """A Pokemon species entry in the catalog."""

    id: int  # National Pokedex number
    name: str

    # Measurements as stored by PokeAPI
    height: int = 0  # decimetres
    weight: int = 0  # hectograms

    base_experience: int | None = None
    order: int = 0
    is_default: bool = True
    generation: int | None = None

    # Rarity flags
    is_legendary: bool = False
    is_mythical: bool = False
    is_baby: bool = False

    types: list[TypeSlot] = Field(default_factory=list, max_length=2)
    stats: list[BaseStat] = Field(default_factory=list)
    abilities: list[AbilitySlot] = Field(default_factory=list)
    sprites: Sprites = Field(default_factory=Sprites)

    @property
    def display_name(self) -> str:
        """Get display name."""
        return self.name.replace("-", " ").title()

    @property
    def type_names(self) -> list[str]:
        """Type names ordered by slot."""
        return [t.type.value for t in sorted(self.types, key=lambda t: t.slot)]

    @property
    def types_display(self) -> str:
        """Get formatted type display."""
        return "/".join(name.capitalize() for name in self.type_names)

    @property
    def height_m(self) -> float:
        """Height in metres."""
        return from_stored_measure(self.height)

    @property
    def weight_kg(self) -> float:
        """Weight in kilograms."""
        return from_stored_measure(self.weight)

    @property
    def base_stat_total(self) -> int:
        """Sum of all base stats."""
        return sum(s.base_stat for s in self.stats)

    def stat(self, name: str) -> int | None:
        """Get a base stat by name, or None if missing."""
        for s in self.stats:
            if s.name == name:
                return s.base_stat
        return None

    def has_type(self, ptype: PokemonType) -> bool:
        """Check whether the Pokemon has the given type."""
        return any(t.type == ptype for t in self.types)
