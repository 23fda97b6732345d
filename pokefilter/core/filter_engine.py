"""Filter engine: turns FilterCriteria into catalog queries."""

import logging
import re
from typing import Optional

from sqlalchemy import distinct, func, text
from sqlmodel import Session, col, select

from pokefilter.core.filters import FilterCriteria, FilterOptions, StatRange, TypeFilterLogic
from pokefilter.core.pokemon import STAT_NAMES, Pokemon, PokemonType
from pokefilter.data.database import Database
from pokefilter.data.models import (
    AbilityRecord,
    PokemonAbilityRecord,
    PokemonRecord,
    PokemonStatRecord,
    PokemonTypeRecord,
)
from pokefilter.utils.config import config
from pokefilter.utils.helpers import to_stored_measure

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


def build_match_query(search_text: str) -> str | None:
    """Build an FTS5 query that prefix-matches the words of ``search_text``.

    Every word must appear; the last one may be incomplete. Returns None when
    the text holds no searchable words.
    """
    tokens = _TOKEN_RE.findall(search_text.lower())
    if not tokens:
        return None
    quoted = [f'"{token}"' for token in tokens]
    quoted[-1] += "*"
    return " ".join(quoted)


class FilterEngine:
    """Read-only query layer over the catalog.

    Each call opens its own session and re-reads the store; nothing is cached
    between calls.
    """

    def __init__(self, database: Database):
        self.database = database

    def filter_pokemon(self, criteria: FilterCriteria) -> list[Pokemon]:
        """Get every Pokemon matching ``criteria``, ordered by national dex id."""
        with self.database.session() as session:
            clauses = self._build_clauses(session, criteria)
            records = session.exec(
                select(PokemonRecord).where(*clauses).order_by(PokemonRecord.id)
            ).all()
            ids = select(PokemonRecord.id).where(*clauses)
            result = self.database.hydrate(session, records, ids)
        logger.debug(
            "Filter matched %d Pokemon (%d active filters)",
            len(result),
            criteria.active_filter_count,
        )
        return result

    def count_pokemon(self, criteria: FilterCriteria) -> int:
        """Count Pokemon matching ``criteria``."""
        with self.database.session() as session:
            clauses = self._build_clauses(session, criteria)
            return session.exec(
                select(func.count()).select_from(PokemonRecord).where(*clauses)
            ).one()

    def available_filter_options(
        self, current_criteria: Optional[FilterCriteria] = None
    ) -> FilterOptions:
        """Get filter values present in the whole catalog.

        ``current_criteria`` does not narrow the result: options are always
        computed over the unfiltered catalog.
        """
        if current_criteria is not None and not current_criteria.is_empty:
            logger.debug(
                "Filter options are global; ignoring %d active filters",
                current_criteria.active_filter_count,
            )

        with self.database.session() as session:
            generations = session.exec(
                select(distinct(PokemonRecord.generation))
                .where(col(PokemonRecord.generation).is_not(None))
                .order_by(PokemonRecord.generation)
            ).all()

            stat_ranges: dict[str, StatRange] = {}
            for stat_name in STAT_NAMES:
                low, high = session.exec(
                    select(
                        func.min(PokemonStatRecord.base_stat),
                        func.max(PokemonStatRecord.base_stat),
                    )
                    .where(PokemonStatRecord.stat_name == stat_name)
                ).one()
                if low is not None and high is not None:
                    stat_ranges[stat_name] = StatRange(min=low, max=high)

            abilities = session.exec(
                select(distinct(AbilityRecord.name)).order_by(AbilityRecord.name)
            ).all()

        return FilterOptions(
            available_types=list(PokemonType),
            available_generations=list(generations),
            stat_ranges=stat_ranges,
            available_abilities=list(abilities),
        )

    def search_pokemon(self, query: str, limit: Optional[int] = None) -> list[Pokemon]:
        """Search Pokemon by name prefix."""
        if not query.strip():
            return []
        with self.database.session() as session:
            ids = self._search_ids(session, query)
            statement = (
                select(PokemonRecord)
                .where(col(PokemonRecord.id).in_(ids))
                .order_by(PokemonRecord.id)
            )
            if limit is not None:
                statement = statement.limit(limit)
            records = session.exec(statement).all()
            return self.database.hydrate(session, records, [r.id for r in records])

    def get_pokemon(self, pokemon_id: int) -> Optional[Pokemon]:
        """Get a single Pokemon by national dex id."""
        return self.database.get_pokemon(pokemon_id)

    def _search_ids(self, session: Session, search_text: str) -> list[int]:
        """Ids whose name matches ``search_text`` in the FTS index."""
        match_query = build_match_query(search_text)
        if match_query is None:
            return []
        rows = session.exec(
            text("SELECT rowid FROM pokemon_fts WHERE pokemon_fts MATCH :query"),
            params={"query": match_query},
        )
        return [row[0] for row in rows]

    def _build_clauses(self, session: Session, criteria: FilterCriteria) -> list:
        """Translate each populated dimension into one WHERE clause."""
        clauses = []
        pokemon_id = col(PokemonRecord.id)

        if criteria.search_text.strip():
            ids = self._search_ids(session, criteria.search_text)
            logger.debug("Search '%s' matched %d names", criteria.search_text, len(ids))
            clauses.append(pokemon_id.in_(ids))

        if criteria.types:
            type_ids = sorted(ptype.type_id for ptype in criteria.types)
            if criteria.type_logic == TypeFilterLogic.ALL:
                for type_id in type_ids:
                    clauses.append(pokemon_id.in_(
                        select(PokemonTypeRecord.pokemon_id)
                        .where(PokemonTypeRecord.type_id == type_id)
                    ))
            else:
                clauses.append(pokemon_id.in_(
                    select(PokemonTypeRecord.pokemon_id)
                    .where(col(PokemonTypeRecord.type_id).in_(type_ids))
                ))

        if criteria.generations:
            clauses.append(col(PokemonRecord.generation).in_(sorted(criteria.generations)))

        if criteria.min_stats or criteria.max_stats:
            known_stats = self._known_stat_names(session)
            for stat_name, minimum in criteria.min_stats.items():
                if self._skip_unresolved(stat_name, known_stats):
                    continue
                clauses.append(pokemon_id.in_(
                    select(PokemonStatRecord.pokemon_id).where(
                        PokemonStatRecord.stat_name == stat_name,
                        PokemonStatRecord.base_stat >= minimum,
                    )
                ))
            for stat_name, maximum in criteria.max_stats.items():
                if self._skip_unresolved(stat_name, known_stats):
                    continue
                clauses.append(pokemon_id.in_(
                    select(PokemonStatRecord.pokemon_id).where(
                        PokemonStatRecord.stat_name == stat_name,
                        PokemonStatRecord.base_stat <= maximum,
                    )
                ))

        if criteria.min_height is not None:
            clauses.append(col(PokemonRecord.height) >= to_stored_measure(criteria.min_height))
        if criteria.max_height is not None:
            clauses.append(col(PokemonRecord.height) <= to_stored_measure(criteria.max_height))
        if criteria.min_weight is not None:
            clauses.append(col(PokemonRecord.weight) >= to_stored_measure(criteria.min_weight))
        if criteria.max_weight is not None:
            clauses.append(col(PokemonRecord.weight) <= to_stored_measure(criteria.max_weight))

        if criteria.is_legendary is not None:
            clauses.append(col(PokemonRecord.is_legendary) == criteria.is_legendary)
        if criteria.is_mythical is not None:
            clauses.append(col(PokemonRecord.is_mythical) == criteria.is_mythical)
        if criteria.is_baby is not None:
            clauses.append(col(PokemonRecord.is_baby) == criteria.is_baby)

        if criteria.abilities:
            ability_ids = session.exec(
                select(AbilityRecord.id)
                .where(col(AbilityRecord.name).in_(sorted(criteria.abilities)))
            ).all()
            if ability_ids or not config.fail_open_unresolved:
                clauses.append(pokemon_id.in_(
                    select(PokemonAbilityRecord.pokemon_id).where(
                        col(PokemonAbilityRecord.ability_id).in_(ability_ids)
                    )
                ))
            else:
                logger.debug(
                    "No abilities matched %s; ability filter skipped",
                    sorted(criteria.abilities),
                )

        return clauses

    def _known_stat_names(self, session: Session) -> set[str]:
        return set(session.exec(select(distinct(PokemonStatRecord.stat_name))).all())

    def _skip_unresolved(self, stat_name: str, known_stats: set[str]) -> bool:
        """True when an unknown stat name should impose no constraint."""
        if stat_name in known_stats:
            return False
        if config.fail_open_unresolved:
            logger.debug("Unknown stat '%s'; stat filter skipped", stat_name)
            return True
        return False
