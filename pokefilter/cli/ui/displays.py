"""Rich display components for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pokefilter.core.filters import FilterCriteria, FilterOptions
from pokefilter.core.pokemon import Pokemon
from pokefilter.data.database import DatabaseInfo

console = Console()


# Color mappings
TYPE_COLORS = {
    "normal": "white",
    "fire": "red",
    "water": "blue",
    "electric": "yellow",
    "grass": "green",
    "ice": "cyan",
    "fighting": "red",
    "poison": "magenta",
    "ground": "yellow",
    "flying": "cyan",
    "psychic": "magenta",
    "bug": "green",
    "rock": "yellow",
    "ghost": "magenta",
    "dragon": "blue",
    "dark": "white",
    "steel": "white",
    "fairy": "magenta",
}

STAT_LABELS = {
    "hp": "HP",
    "attack": "Atk",
    "defense": "Def",
    "special-attack": "SpA",
    "special-defense": "SpD",
    "speed": "Spe",
}


def _colored_types(pokemon: Pokemon) -> str:
    parts = []
    for name in pokemon.type_names:
        color = TYPE_COLORS.get(name, "white")
        parts.append(f"[{color}]{name.capitalize()}[/{color}]")
    return "/".join(parts) or "[dim]-[/dim]"


def _rarity_marker(pokemon: Pokemon) -> str:
    if pokemon.is_mythical:
        return "[magenta]Mythical[/magenta]"
    if pokemon.is_legendary:
        return "[yellow]Legendary[/yellow]"
    if pokemon.is_baby:
        return "[cyan]Baby[/cyan]"
    return ""


def display_pokemon(pokemon: Pokemon) -> None:
    """Display a Pokemon with its stats and abilities."""
    content = f"""[bold]{pokemon.display_name}[/bold] {_rarity_marker(pokemon)}
[dim]#{pokemon.id:04d}  Gen {pokemon.generation or '?'}[/dim]

[dim]Type:[/dim] {_colored_types(pokemon)}
[dim]Height:[/dim] {pokemon.height_m:.1f} m
[dim]Weight:[/dim] {pokemon.weight_kg:.1f} kg"""

    if pokemon.abilities:
        names = [
            f"{a.name}{' (hidden)' if a.is_hidden else ''}"
            for a in sorted(pokemon.abilities, key=lambda a: a.slot)
        ]
        content += f"\n[dim]Abilities:[/dim] {', '.join(names)}"

    if pokemon.stats:
        content += "\n"
        for stat in pokemon.stats:
            label = STAT_LABELS.get(stat.name, stat.name)
            bar = "#" * (stat.base_stat // 10)
            content += f"\n[dim]{label:>4}[/dim] {stat.base_stat:>3} [green]{bar}[/green]"
        content += f"\n[dim]Total[/dim] {pokemon.base_stat_total}"

    console.print(Panel(content, box=box.ROUNDED))


def display_pokemon_list(pokemon_list: list[Pokemon], title: str = "Pokemon") -> None:
    """Display a list of Pokemon in a table."""
    if not pokemon_list:
        console.print(f"[dim]No {title.lower()} found.[/dim]")
        return

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("#", style="dim", width=5)
    table.add_column("Name", min_width=12)
    table.add_column("Type", width=17)
    table.add_column("Gen", width=3)
    table.add_column("BST", width=4)
    table.add_column("Rarity", width=10)

    for p in pokemon_list:
        table.add_row(
            f"{p.id:04d}",
            p.display_name,
            _colored_types(p),
            str(p.generation or "-"),
            str(p.base_stat_total),
            _rarity_marker(p),
        )

    console.print(table)


def display_criteria(criteria: FilterCriteria) -> None:
    """Print a one-line summary of active filters."""
    if criteria.is_empty:
        console.print("[dim]No filters applied.[/dim]")
        return

    parts = []
    if criteria.types:
        joiner = " & " if criteria.type_logic.value == "all" else " | "
        parts.append("types: " + joiner.join(sorted(t.value for t in criteria.types)))
    if criteria.generations:
        parts.append("gen: " + ",".join(str(g) for g in sorted(criteria.generations)))
    for name, value in criteria.min_stats.items():
        parts.append(f"{name}>={value}")
    for name, value in criteria.max_stats.items():
        parts.append(f"{name}<={value}")
    if criteria.search_text.strip():
        parts.append(f"search: '{criteria.search_text}'")
    if criteria.abilities:
        parts.append("abilities: " + ",".join(sorted(criteria.abilities)))
    console.print(f"[dim]Filters ({criteria.active_filter_count}): {'; '.join(parts)}[/dim]")


def display_filter_options(options: FilterOptions) -> None:
    """Display available filter values."""
    types_line = " ".join(
        f"[{TYPE_COLORS.get(t.value, 'white')}]{t.value}[/{TYPE_COLORS.get(t.value, 'white')}]"
        for t in options.available_types
    )
    gens_line = ", ".join(str(g) for g in options.available_generations) or "-"
    console.print(Panel(f"[dim]Types:[/dim] {types_line}\n[dim]Generations:[/dim] {gens_line}", title="Filter Options", box=box.ROUNDED))

    if options.stat_ranges:
        table = Table(title="Stat Ranges", box=box.ROUNDED)
        table.add_column("Stat", min_width=16)
        table.add_column("Min", width=5)
        table.add_column("Max", width=5)
        for name, stat_range in options.stat_ranges.items():
            table.add_row(name, str(stat_range.min), str(stat_range.max))
        console.print(table)

    console.print(f"[dim]Abilities:[/dim] {len(options.available_abilities)} available")


def display_database_info(info: DatabaseInfo) -> None:
    """Display catalog summary."""
    content = f"""[dim]Pokemon:[/dim] {info.pokemon_count}
[dim]Legendary:[/dim] {info.legendary_count}
[dim]Mythical:[/dim] {info.mythical_count}
[dim]Abilities:[/dim] {info.ability_count}
[dim]Types:[/dim] {info.type_count}

[dim]Size:[/dim] {info.database_size / 1024:.1f} KB
[dim]Path:[/dim] {info.database_path}"""
    console.print(Panel(content, title="Catalog", box=box.ROUNDED))
