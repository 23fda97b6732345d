"""SQLite catalog store for pokefilter."""

import logging
from collections import defaultdict
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel
from sqlalchemy import delete, func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, col, create_engine, select

from pokefilter.core.pokemon import (
    TYPE_IDS,
    AbilitySlot,
    BaseStat,
    Pokemon,
    PokemonType,
    Sprites,
    TypeSlot,
)
from pokefilter.data.models import (
    AbilityRecord,
    PokemonAbilityRecord,
    PokemonRecord,
    PokemonSpriteRecord,
    PokemonStatRecord,
    PokemonTypeRecord,
    TypeRecord,
)
from pokefilter.utils.config import config
from pokefilter.utils.helpers import generation_for_id

logger = logging.getLogger(__name__)


class DataAccessError(Exception):
    """The catalog store could not complete a read or write."""


class DatabaseInfo(BaseModel):
    """Summary of the catalog contents."""

    pokemon_count: int = 0
    legendary_count: int = 0
    mythical_count: int = 0
    ability_count: int = 0
    type_count: int = 0
    database_size: int = 0
    database_path: str = ""


# External-content FTS5 index over pokemon.name, kept in sync by triggers
_FTS_SCHEMA = [
    """
    CREATE VIRTUAL TABLE IF NOT EXISTS pokemon_fts USING fts5(
        name,
        content='pokemon',
        content_rowid='id'
    )
    """,
    """
    CREATE TRIGGER IF NOT EXISTS pokemon_fts_insert AFTER INSERT ON pokemon BEGIN
        INSERT INTO pokemon_fts(rowid, name) VALUES (new.id, new.name);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS pokemon_fts_update AFTER UPDATE ON pokemon BEGIN
        INSERT INTO pokemon_fts(pokemon_fts, rowid, name) VALUES ('delete', old.id, old.name);
        INSERT INTO pokemon_fts(rowid, name) VALUES (new.id, new.name);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS pokemon_fts_delete AFTER DELETE ON pokemon BEGIN
        INSERT INTO pokemon_fts(pokemon_fts, rowid, name) VALUES ('delete', old.id, old.name);
    END
    """,
]


class Database:
    """SQLite catalog manager."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path or config.db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(f"sqlite:///{self.db_path}", echo=False)
        self._init_db()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Context manager for catalog sessions."""
        with Session(self.engine) as session:
            try:
                yield session
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("Catalog access failed: %s", exc)
                raise DataAccessError(str(exc)) from exc
            except Exception:
                session.rollback()
                raise

    def _init_db(self) -> None:
        """Initialize schema, the search index and the type table."""
        try:
            SQLModel.metadata.create_all(self.engine)
            with self.engine.begin() as conn:
                for statement in _FTS_SCHEMA:
                    conn.execute(text(statement))
        except SQLAlchemyError as exc:
            raise DataAccessError(f"Could not initialize catalog at {self.db_path}: {exc}") from exc

        with self.session() as session:
            for ptype, type_id in TYPE_IDS.items():
                session.merge(TypeRecord(id=type_id, name=ptype.value))

    # Write operations
    def save_pokemon(self, pokemon: Pokemon) -> Pokemon:
        """Insert or replace a Pokemon and all of its relations."""
        with self.session() as session:
            self._write_pokemon(session, pokemon)
        return pokemon

    def save_many(self, pokemon_list: Iterable[Pokemon]) -> int:
        """Save several Pokemon in one transaction. Returns how many were saved."""
        saved = 0
        with self.session() as session:
            for pokemon in pokemon_list:
                self._write_pokemon(session, pokemon)
                saved += 1
        logger.info("Saved %d Pokemon to %s", saved, self.db_path)
        return saved

    def _write_pokemon(self, session: Session, pokemon: Pokemon) -> None:
        generation = pokemon.generation or generation_for_id(pokemon.id)
        session.merge(PokemonRecord(
            id=pokemon.id,
            name=pokemon.name,
            height=pokemon.height,
            weight=pokemon.weight,
            base_experience=pokemon.base_experience,
            order_index=pokemon.order,
            is_default=pokemon.is_default,
            generation=generation,
            is_legendary=pokemon.is_legendary,
            is_mythical=pokemon.is_mythical,
            is_baby=pokemon.is_baby,
        ))

        for model in (PokemonTypeRecord, PokemonStatRecord, PokemonAbilityRecord):
            session.exec(delete(model).where(col(model.pokemon_id) == pokemon.id))

        for type_slot in pokemon.types:
            session.add(PokemonTypeRecord(
                pokemon_id=pokemon.id, slot=type_slot.slot, type_id=type_slot.type.type_id
            ))

        for stat in pokemon.stats:
            session.add(PokemonStatRecord(
                pokemon_id=pokemon.id,
                stat_name=stat.name,
                base_stat=stat.base_stat,
                effort=stat.effort,
            ))

        for ability in pokemon.abilities:
            session.add(PokemonAbilityRecord(
                pokemon_id=pokemon.id,
                slot=ability.slot,
                ability_id=self._ability_id(session, ability.name),
                is_hidden=ability.is_hidden,
            ))

        session.merge(PokemonSpriteRecord(pokemon_id=pokemon.id, **pokemon.sprites.model_dump()))

    def _ability_id(self, session: Session, name: str) -> int:
        """Get or create the id of an ability."""
        ability = session.exec(select(AbilityRecord).where(AbilityRecord.name == name)).first()
        if ability is None:
            ability = AbilityRecord(name=name)
            session.add(ability)
            session.flush()
        return ability.id

    def delete_pokemon(self, pokemon_id: int) -> None:
        """Remove a Pokemon and its relations."""
        with self.session() as session:
            for model in (PokemonTypeRecord, PokemonStatRecord, PokemonAbilityRecord, PokemonSpriteRecord):
                session.exec(delete(model).where(col(model.pokemon_id) == pokemon_id))
            session.exec(delete(PokemonRecord).where(col(PokemonRecord.id) == pokemon_id))

    def clear_all(self) -> None:
        """Remove every Pokemon and ability; the type table is kept."""
        with self.session() as session:
            for model in (
                PokemonTypeRecord,
                PokemonStatRecord,
                PokemonAbilityRecord,
                PokemonSpriteRecord,
                PokemonRecord,
                AbilityRecord,
            ):
                session.exec(delete(model))
        logger.info("Cleared catalog at %s", self.db_path)

    # Read operations
    def get_pokemon(self, pokemon_id: int) -> Optional[Pokemon]:
        """Get a Pokemon by national dex id."""
        with self.session() as session:
            record = session.get(PokemonRecord, pokemon_id)
            if record is None:
                return None
            return self.hydrate(session, [record], [pokemon_id])[0]

    def get_all_pokemon(self) -> list[Pokemon]:
        """Get every Pokemon ordered by id."""
        with self.session() as session:
            records = session.exec(select(PokemonRecord).order_by(PokemonRecord.id)).all()
            return self.hydrate(session, records, select(PokemonRecord.id))

    def get_info(self) -> DatabaseInfo:
        """Get catalog counts."""
        with self.session() as session:
            def count(statement) -> int:
                return session.exec(statement).one()

            return DatabaseInfo(
                pokemon_count=count(select(func.count()).select_from(PokemonRecord)),
                legendary_count=count(
                    select(func.count()).select_from(PokemonRecord).where(PokemonRecord.is_legendary == True)  # noqa: E712
                ),
                mythical_count=count(
                    select(func.count()).select_from(PokemonRecord).where(PokemonRecord.is_mythical == True)  # noqa: E712
                ),
                ability_count=count(select(func.count()).select_from(AbilityRecord)),
                type_count=count(select(func.count()).select_from(TypeRecord)),
                database_size=self.db_path.stat().st_size if self.db_path.exists() else 0,
                database_path=str(self.db_path),
            )

    def hydrate(self, session: Session, records, ids) -> list[Pokemon]:
        """Build full Pokemon models for ``records``.

        ``ids`` is anything usable in an ``IN`` clause (a list of ids or a
        select of ``PokemonRecord.id``) covering the same rows; each relation
        table is loaded in one query.
        """
        if not records:
            return []

        types_by_id: dict[int, list[TypeSlot]] = defaultdict(list)
        type_rows = session.exec(
            select(PokemonTypeRecord)
            .where(col(PokemonTypeRecord.pokemon_id).in_(ids))
            .order_by(PokemonTypeRecord.pokemon_id, PokemonTypeRecord.slot)
        )
        for row in type_rows:
            types_by_id[row.pokemon_id].append(
                TypeSlot(slot=row.slot, type=PokemonType.from_id(row.type_id))
            )

        stats_by_id: dict[int, list[BaseStat]] = defaultdict(list)
        stat_rows = session.exec(
            select(PokemonStatRecord)
            .where(col(PokemonStatRecord.pokemon_id).in_(ids))
            .order_by(PokemonStatRecord.id)
        )
        for row in stat_rows:
            stats_by_id[row.pokemon_id].append(
                BaseStat(name=row.stat_name, base_stat=row.base_stat, effort=row.effort)
            )

        abilities_by_id: dict[int, list[AbilitySlot]] = defaultdict(list)
        ability_rows = session.exec(
            select(PokemonAbilityRecord, AbilityRecord.name)
            .join(AbilityRecord, col(AbilityRecord.id) == col(PokemonAbilityRecord.ability_id))
            .where(col(PokemonAbilityRecord.pokemon_id).in_(ids))
            .order_by(PokemonAbilityRecord.pokemon_id, PokemonAbilityRecord.slot)
        )
        for row, name in ability_rows:
            abilities_by_id[row.pokemon_id].append(
                AbilitySlot(name=name, slot=row.slot, is_hidden=row.is_hidden)
            )

        sprites_by_id = {
            row.pokemon_id: row
            for row in session.exec(
                select(PokemonSpriteRecord).where(col(PokemonSpriteRecord.pokemon_id).in_(ids))
            )
        }

        return [
            self._record_to_pokemon(
                record,
                types_by_id[record.id],
                stats_by_id[record.id],
                abilities_by_id[record.id],
                sprites_by_id.get(record.id),
            )
            for record in records
        ]

    def _record_to_pokemon(
        self,
        record: PokemonRecord,
        types: list[TypeSlot],
        stats: list[BaseStat],
        abilities: list[AbilitySlot],
        sprite_row: Optional[PokemonSpriteRecord],
    ) -> Pokemon:
        """Convert a catalog row and its relations to a Pokemon model."""
        sprites = Sprites()
        if sprite_row is not None:
            sprites = Sprites(
                front_default=sprite_row.front_default,
                front_shiny=sprite_row.front_shiny,
                back_default=sprite_row.back_default,
                back_shiny=sprite_row.back_shiny,
                official_artwork=sprite_row.official_artwork,
            )
        return Pokemon(
            id=record.id,
            name=record.name,
            height=record.height,
            weight=record.weight,
            base_experience=record.base_experience,
            order=record.order_index,
            is_default=record.is_default,
            generation=record.generation,
            is_legendary=record.is_legendary,
            is_mythical=record.is_mythical,
            is_baby=record.is_baby,
            types=types,
            stats=stats,
            abilities=abilities,
            sprites=sprites,
        )


# Global database instance
db = Database()
