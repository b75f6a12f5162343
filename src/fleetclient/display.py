"""Terminal display using Rich."""
from typing import Optional

from rich.console import Console
from rich.table import Table

from .commands import CommandDefinition

console = Console()


def configure_console(colorize: bool) -> None:
    console.no_color = not colorize


def mask_secret(value: Optional[str]) -> str:
    """Mask all but the first 8 characters of a secret."""
    if not value:
        return "-"
    return value[:8] + "..." if len(value) > 8 else "***"


def _value(value) -> str:
    return "[dim]not set[/dim]" if value is None else str(value)


def render_status(store) -> None:
    """Render the current target, deployment and login."""
    table = Table(title="Status", show_header=False)
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")

    target = store.target
    table.add_row("Config", str(store.filename))
    table.add_row("Target", _value(target))
    table.add_row("Name", _value(store.target_name))
    table.add_row("Version", _value(store.target_version))
    table.add_row("UUID", _value(store.target_uuid))
    table.add_row("Release", _value(store.release))

    if target is not None:
        table.add_row("Deployment", _value(store.deployment()))
        username = store.username(target)
        if username:
            table.add_row("User", f"{username} [dim]({mask_secret(store.password(target))})[/dim]")
        else:
            table.add_row("User", "[dim]not logged in[/dim]")

    console.print(table)


def render_aliases(category: str, aliases: Optional[dict]) -> None:
    if not aliases:
        console.print(f"[yellow]No {category} aliases[/yellow]")
        return

    table = Table(title=f"{category.capitalize()} aliases", show_header=True, header_style="bold cyan")
    table.add_column("Alias")
    table.add_column("Value")
    for name in sorted(aliases):
        table.add_row(name, _value(aliases[name]))
    console.print(table)


def render_commands(definitions: list[CommandDefinition]) -> None:
    for definition in definitions:
        console.print(f"  [bold]{definition.usage:<20}[/bold] {definition.description}")
