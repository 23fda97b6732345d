"""Catalog management CLI commands."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from pokefilter.cli.ui.displays import display_database_info
from pokefilter.data.database import DataAccessError, db
from pokefilter.data.pokeapi import load_range_sync
from pokefilter.utils.config import config

app = typer.Typer(help="Catalog management commands")
console = Console()


@app.command("load")
def load_catalog(
    quick: bool = typer.Option(False, "--quick", "-q", help="Quick load (Gen 1 only)"),
    gen: int = typer.Option(0, "--gen", "-g", help="Load a specific generation (1-9, 0=all)"),
) -> None:
    """Load Pokemon from PokeAPI into the local catalog."""
    if quick:
        start_id, end_id = 1, 151
        gen_label = "Gen 1"
    elif gen > 0 and gen in config.generation_ranges:
        start_id, end_id = config.generation_ranges[gen]
        gen_label = f"Gen {gen}"
    elif gen > 0:
        console.print(f"[red]Unknown generation: {gen}[/red]")
        raise typer.Exit(1)
    else:
        start_id, end_id = 1, config.max_pokemon_id
        gen_label = "all generations"

    config.ensure_dirs()
    total = end_id - start_id + 1
    console.print(f"[dim]Loading catalog from PokeAPI ({gen_label}: {total} Pokemon)...[/dim]")
    console.print("[dim]This may take a few minutes for the first run.[/dim]")

    def report(loaded: int, _total: int) -> None:
        if loaded and loaded % 50 == 0:
            console.print(f"[dim]  Loaded {loaded}/{total} Pokemon...[/dim]")

    pokemon_list = load_range_sync(start_id, end_id, on_progress=report)
    try:
        saved = db.save_many(pokemon_list)
    except DataAccessError as e:
        console.print(f"[red]Could not write the catalog: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if saved < total:
        console.print(f"[yellow]Warning: only {saved}/{total} Pokemon could be loaded.[/yellow]")
    console.print(f"[green]+ Catalog holds {saved} Pokemon from {gen_label}[/green]")


@app.command("stats")
def show_stats() -> None:
    """Show catalog counts."""
    try:
        info = db.get_info()
    except DataAccessError as e:
        console.print(f"[red]Could not read the catalog: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    display_database_info(info)


@app.command("clear")
def clear_catalog(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove every Pokemon from the catalog."""
    if not yes and not Confirm.ask("Remove all Pokemon from the catalog?"):
        raise typer.Exit(0)
    try:
        db.clear_all()
    except DataAccessError as e:
        console.print(f"[red]Could not clear the catalog: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    console.print("[green]Catalog cleared.[/green]")
