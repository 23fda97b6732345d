"""Filter criteria and filter option models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from pokefilter.core.pokemon import PokemonType


class TypeFilterLogic(str, Enum):
    """How multiple selected types combine."""

    ANY = "any"
    ALL = "all"


class FilterCriteria(BaseModel):
    """A query over the catalog.

    Every field left empty (or None) imposes no constraint. Types combine
    according to ``type_logic``; all other dimensions are ANDed together.
    Heights are in metres and weights in kilograms.
    """

    model_config = ConfigDict(frozen=True)

    types: set[PokemonType] = Field(default_factory=set)
    type_logic: TypeFilterLogic = TypeFilterLogic.ANY
    generations: set[int] = Field(default_factory=set)
    min_stats: dict[str, int] = Field(default_factory=dict)
    max_stats: dict[str, int] = Field(default_factory=dict)
    min_height: float | None = None
    max_height: float | None = None
    min_weight: float | None = None
    max_weight: float | None = None
    is_legendary: bool | None = None
    is_mythical: bool | None = None
    is_baby: bool | None = None
    abilities: set[str] = Field(default_factory=set)
    search_text: str = ""

    @property
    def active_filter_count(self) -> int:
        """Number of constrained dimensions."""
        flags = (self.is_legendary, self.is_mythical, self.is_baby)
        bounds = (self.min_height, self.max_height, self.min_weight, self.max_weight)
        return (
            int(bool(self.types))
            + int(bool(self.generations))
            + len(self.min_stats)
            + len(self.max_stats)
            + sum(1 for b in bounds if b is not None)
            + sum(1 for f in flags if f is not None)
            + int(bool(self.abilities))
            + int(bool(self.search_text.strip()))
        )

    @property
    def is_empty(self) -> bool:
        """True when the criteria match every Pokemon."""
        return self.active_filter_count == 0

    def with_type_toggled(self, ptype: PokemonType) -> "FilterCriteria":
        """Return a copy with ``ptype`` added to or removed from the selection."""
        return self.model_copy(update={"types": self.types ^ {ptype}})

    def with_generation_toggled(self, generation: int) -> "FilterCriteria":
        """Return a copy with ``generation`` added to or removed from the selection."""
        return self.model_copy(update={"generations": self.generations ^ {generation}})

    def reset(self) -> "FilterCriteria":
        """Return an unconstrained criteria."""
        return FilterCriteria()


class StatRange(BaseModel):
    """Observed min/max of a base stat."""

    min: int
    max: int


class FilterOptions(BaseModel):
    """Values a filter UI can offer."""

    available_types: list[PokemonType] = Field(default_factory=list)
    available_generations: list[int] = Field(default_factory=list)
    stat_ranges: dict[str, StatRange] = Field(default_factory=dict)
    available_abilities: list[str] = Field(default_factory=list)
