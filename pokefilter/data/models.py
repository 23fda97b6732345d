"""SQLModel table models for the local Pokemon catalog.

The catalog is one ``pokemon`` table plus relation tables for types, stats,
abilities and sprites. Display-name search goes through the ``pokemon_fts``
FTS5 index, which is created by ``Database`` rather than by these models.
"""

from __future__ import annotations

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


# ---------------------------------------------------------------------------
# Primary rows
# ---------------------------------------------------------------------------

class PokemonRecord(SQLModel, table=True):
    """One species row."""

    __tablename__ = "pokemon"  # type: ignore[assignment]

    id: int = Field(primary_key=True)  # National Pokedex number
    name: str = Field(index=True)
    height: int = 0  # decimetres
    weight: int = 0  # hectograms
    base_experience: int | None = None
    order_index: int = 0
    is_default: bool = True
    generation: int | None = Field(default=None, index=True)
    is_legendary: bool = Field(default=False, index=True)
    is_mythical: bool = Field(default=False, index=True)
    is_baby: bool = False


class TypeRecord(SQLModel, table=True):
    """A type, seeded from the static type table."""

    __tablename__ = "types"  # type: ignore[assignment]

    id: int = Field(primary_key=True)
    name: str = Field(unique=True)


class AbilityRecord(SQLModel, table=True):
    """An ability, created on demand when Pokemon are saved."""

    __tablename__ = "abilities"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

class PokemonTypeRecord(SQLModel, table=True):
    """Type membership with slot ordering."""

    __tablename__ = "pokemon_types"  # type: ignore[assignment]

    pokemon_id: int = Field(foreign_key="pokemon.id", primary_key=True)
    slot: int = Field(primary_key=True)
    type_id: int = Field(foreign_key="types.id", index=True)


class PokemonStatRecord(SQLModel, table=True):
    """A base stat value."""

    __tablename__ = "pokemon_stats"  # type: ignore[assignment]
    __table_args__ = (UniqueConstraint("pokemon_id", "stat_name"),)

    id: int | None = Field(default=None, primary_key=True)
    pokemon_id: int = Field(foreign_key="pokemon.id", index=True)
    stat_name: str = Field(index=True)
    base_stat: int
    effort: int = 0


class PokemonAbilityRecord(SQLModel, table=True):
    """Ability membership."""

    __tablename__ = "pokemon_abilities"  # type: ignore[assignment]

    pokemon_id: int = Field(foreign_key="pokemon.id", primary_key=True)
    slot: int = Field(primary_key=True)
    ability_id: int = Field(foreign_key="abilities.id", index=True)
    is_hidden: bool = False


class PokemonSpriteRecord(SQLModel, table=True):
    """Sprite URLs for display."""

    __tablename__ = "pokemon_sprites"  # type: ignore[assignment]

    pokemon_id: int = Field(foreign_key="pokemon.id", primary_key=True)
    front_default: str | None = None
    front_shiny: str | None = None
    back_default: str | None = None
    back_shiny: str | None = None
    official_artwork: str | None = None
