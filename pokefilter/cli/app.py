"""Main CLI application for pokefilter."""

from typing import List, Optional

import typer
from rich.console import Console

from pokefilter import __version__
from pokefilter.cli.commands import catalog, pokemon
from pokefilter.core.pokemon import PokemonType
from pokefilter.utils.logging import setup_logging

# Create main app
app = typer.Typer(
    name="pokefilter",
    help="pokefilter - Browse and filter a local Pokedex catalog",
    no_args_is_help=True,
)

# Register sub-commands
app.add_typer(catalog.app, name="catalog", help="Catalog management")
app.add_typer(pokemon.app, name="pokemon", help="Pokemon filtering")

console = Console()


# Direct commands (shortcuts)
@app.command("filter")
def filter_shortcut(
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
    pokemon.filter_pokemon(
        types, all_types, generations, min_stats, max_stats,
        min_height, max_height, min_weight, max_weight,
        legendary, mythical, baby, abilities, search,
        count_only, page, per_page,
    )


@app.command("options")
def options_shortcut() -> None:
    """Show available filter values."""
    pokemon.show_options()


@app.command("search")
def search_shortcut(
    query: str = typer.Argument(..., help="Name or name prefix"),
    limit: int = typer.Option(20, "--limit", "-l", min=1, help="Maximum results"),
) -> None:
    """Search Pokemon by name."""
    pokemon.search_pokemon(query, limit)


@app.command("info")
def info_shortcut(
    pokemon_id: int = typer.Argument(..., help="National Pokedex number")
) -> None:
    """Show Pokemon details."""
    pokemon.pokemon_info(pokemon_id)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    console.print(f"pokefilter v{__version__}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """pokefilter - Find Pokemon by type, stats, size and more."""
    setup_logging("DEBUG" if verbose else None)


if __name__ == "__main__":
    app()
