"""Configuration CLI commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from showmore.core.config import load_config

console = Console()
config_app = typer.Typer(name="config", help="Show the effective configuration.")


@config_app.command("show")
def show_config(
    path: Optional[str] = typer.Option(None, "--path", help="YAML file to load instead of config/default.yaml"),
) -> None:
    """List the widget defaults after YAML and environment overrides."""
    cfg = load_config(path)

    table = Table(title="Widget Defaults")
    table.add_column("Option", style="cyan")
    table.add_column("Value", style="white")

    for key, value in cfg.more.model_dump(by_alias=True).items():
        if isinstance(value, frozenset):
            value = ", ".join(sorted(value))
        table.add_row(key, repr(value) if isinstance(value, str) else str(value))

    console.print(table)
    sanitize = "[green]Yes[/green]" if cfg.render.sanitize else "[red]No[/red]"
    markdown = "[green]Yes[/green]" if cfg.render.markdown else "[red]No[/red]"
    console.print(f"Sanitize input: {sanitize}  Markdown input: {markdown}")
