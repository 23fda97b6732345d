"""Pokemon filtering and lookup CLI commands."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from pokefilter.cli.ui.displays import (
    display_criteria,
    display_filter_options,
    display_pokemon,
    display_pokemon_list,
)
from pokefilter.core.filter_engine import FilterEngine
from pokefilter.core.filters import FilterCriteria, TypeFilterLogic
from pokefilter.core.pokemon import PokemonType
from pokefilter.data.database import DataAccessError, db
from pokefilter.utils.helpers import parse_stat_bounds

app = typer.Typer(help="Pokemon filtering commands")
console = Console()


def build_criteria(
    types: Optional[List[PokemonType]] = None,
    all_types: bool = False,
    generations: Optional[List[int]] = None,
    min_stats: Optional[List[str]] = None,
    max_stats: Optional[List[str]] = None,
    min_height: Optional[float] = None,
    max_height: Optional[float] = None,
    min_weight: Optional[float] = None,
    max_weight: Optional[float] = None,
    legendary: Optional[bool] = None,
    mythical: Optional[bool] = None,
    baby: Optional[bool] = None,
    abilities: Optional[List[str]] = None,
    search: str = "",
) -> FilterCriteria:
    """Build FilterCriteria from command-line values."""
    return FilterCriteria(
        types=set(types or []),
        type_logic=TypeFilterLogic.ALL if all_types else TypeFilterLogic.ANY,
        generations=set(generations or []),
        min_stats=parse_stat_bounds(min_stats),
        max_stats=parse_stat_bounds(max_stats),
        min_height=min_height,
        max_height=max_height,
        min_weight=min_weight,
        max_weight=max_weight,
        is_legendary=legendary,
        is_mythical=mythical,
        is_baby=baby,
        abilities={a.strip().lower() for a in abilities or [] if a.strip()},
        search_text=search,
    )


@app.command("filter")
def filter_pokemon(
    types: Optional[List[PokemonType]] = typer.Option(None, "--type", "-t", help="Type to match (repeatable)"),
    all_types: bool = typer.Option(False, "--all-types", help="Require every selected type"),
    generations: Optional[List[int]] = typer.Option(None, "--gen", "-g", help="Generation (repeatable)"),
    min_stats: Optional[List[str]] = typer.Option(None, "--min-stat", help="Minimum base stat, e.g. speed=100"),
    max_stats: Optional[List[str]] = typer.Option(None, "--max-stat", help="Maximum base stat, e.g. hp=50"),
    min_height: Optional[float] = typer.Option(None, "--min-height", help="Minimum height in metres"),
    max_height: Optional[float] = typer.Option(None, "--max-height", help="Maximum height in metres"),
    min_weight: Optional[float] = typer.Option(None, "--min-weight", help="Minimum weight in kilograms"),
    max_weight: Optional[float] = typer.Option(None, "--max-weight", help="Maximum weight in kilograms"),
    legendary: Optional[bool] = typer.Option(None, "--legendary/--not-legendary"),
    mythical: Optional[bool] = typer.Option(None, "--mythical/--not-mythical"),
    baby: Optional[bool] = typer.Option(None, "--baby/--not-baby"),
    abilities: Optional[List[str]] = typer.Option(None, "--ability", "-a", help="Ability name (repeatable)"),
    search: str = typer.Option("", "--search", "-s", help="Name prefix search"),
    count_only: bool = typer.Option(False, "--count", "-c", help="Only print the number of matches"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    per_page: int = typer.Option(20, "--limit", "-l", min=1, help="Pokemon per page"),
) -> None:
    """Filter the catalog."""
    try:
        criteria = build_criteria(
            types, all_types, generations, min_stats, max_stats,
            min_height, max_height, min_weight, max_weight,
            legendary, mythical, baby, abilities, search,
        )
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    engine = FilterEngine(db)
    try:
        if count_only:
            console.print(f"{engine.count_pokemon(criteria)} Pokemon match.")
            return
        results = engine.filter_pokemon(criteria)
    except DataAccessError as e:
        console.print(f"[red]Could not read the catalog: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    # Pagination
    start = (page - 1) * per_page
    end = start + per_page
    total_pages = max(1, (len(results) + per_page - 1) // per_page)

    display_criteria(criteria)
    display_pokemon_list(results[start:end], f"Results (Page {page}/{total_pages})")
    console.print(f"\n[dim]Matches: {len(results)}[/dim]")


@app.command("options")
def show_options() -> None:
    """Show the filter values available in the catalog."""
    try:
        options = FilterEngine(db).available_filter_options()
    except DataAccessError as e:
        console.print(f"[red]Could not read the catalog: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    display_filter_options(options)


@app.command("search")
def search_pokemon(
    query: str = typer.Argument(..., help="Name or name prefix"),
    limit: int = typer.Option(20, "--limit", "-l", min=1, help="Maximum results"),
) -> None:
    """Search Pokemon by name."""
    try:
        results = FilterEngine(db).search_pokemon(query, limit=limit)
    except DataAccessError as e:
        console.print(f"[red]Could not read the catalog: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    display_pokemon_list(results, f"Search: {query}")


@app.command("info")
def pokemon_info(
    pokemon_id: int = typer.Argument(..., help="National Pokedex number")
) -> None:
    """Show detailed Pokemon information."""
    try:
        pokemon = FilterEngine(db).get_pokemon(pokemon_id)
    except DataAccessError as e:
        console.print(f"[red]Could not read the catalog: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    if not pokemon:
        console.print(f"[red]Pokemon #{pokemon_id} is not in the catalog.[/red]")
        raise typer.Exit(1)

    display_pokemon(pokemon)
