"""Root CLI application with truncate, render and serve commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from showmore.cli.config_cmd import config_app
from showmore.content.tokenizer import text_length, tokenize
from showmore.content.truncator import truncate
from showmore.core.config import load_config
from showmore.core.exceptions import ShowMoreError
from showmore.core.models import AppConfig
from showmore.delivery.templates import render_more, render_page
from showmore.web.sanitize import prepare_content
from showmore.widget.controller import ToggleController

console = Console()
app = typer.Typer(
    name="showmore",
    help="Show more: markup-aware text truncation with an expand/collapse control.",
    no_args_is_help=True,
)

# Register sub-command groups
app.add_typer(config_app)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """Markup-aware text truncation."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        console.print(f"[red]File not found:[/red] {source}")
        raise typer.Exit(1)
    return path.read_text()


def _overrides(
    length: Optional[int], leeway: Optional[int], word_break: Optional[bool],
    ellipsis: Optional[str], ignore: Optional[str],
) -> dict:
    overrides: dict = {}
    if length is not None:
        overrides["length"] = length
    if leeway is not None:
        overrides["leeway"] = leeway
    if word_break is not None:
        overrides["wordBreak"] = word_break
    if ellipsis is not None:
        overrides["ellipsisText"] = ellipsis
    if ignore is not None:
        overrides["ignoreTags"] = ignore
    return overrides


def _prepare(cfg: AppConfig, source: str, markdown: Optional[bool], sanitize: Optional[bool]) -> str:
    raw = _read_source(source)
    from_markdown = cfg.render.markdown if markdown is None else markdown
    clean = cfg.render.sanitize if sanitize is None else sanitize
    return prepare_content(raw, from_markdown=from_markdown, sanitize=clean)


@app.command("truncate")
def truncate_cmd(
    source: str = typer.Argument("-", help="File to read, or - for stdin"),
    length: Optional[int] = typer.Option(None, "-l", "--length", help="Truncation length"),
    leeway: Optional[int] = typer.Option(None, help="Overrun allowed without truncation"),
    word_break: Optional[bool] = typer.Option(None, "--word-break/--no-word-break", help="Break between words"),
    ellipsis: Optional[str] = typer.Option(None, help="Ellipsis text"),
    ignore: Optional[str] = typer.Option(None, help="Comma-separated tags that never need closing"),
    markdown: Optional[bool] = typer.Option(None, "--markdown/--no-markdown", help="Treat input as Markdown"),
    sanitize: Optional[bool] = typer.Option(None, "--sanitize/--no-sanitize", help="Sanitize input HTML"),
    raw: bool = typer.Option(False, "--raw", help="Print visible markup and ellipsis only"),
) -> None:
    """Truncate markup and show both fragments."""
    cfg = load_config()
    content = _prepare(cfg, source, markdown, sanitize)
    options = cfg.more.merge(_overrides(length, leeway, word_break, ellipsis, ignore))
    result = truncate(content, options)

    if raw:
        typer.echo(result.visible_prefix + result.ellipsis if result.truncated else content)
        return

    total = text_length(tokenize(content, options.ignore_tags))
    if not result.truncated:
        console.print(f"[green]Not truncated[/green] ({total} characters, limit {options.length} + {options.leeway})")
        console.print(content, markup=False, highlight=False)
        return

    table = Table(title="Truncation")
    table.add_column("Part", style="cyan")
    table.add_column("Markup", style="white")
    table.add_row("Visible", Text(result.visible_prefix))
    table.add_row("Ellipsis", Text(result.ellipsis))
    table.add_row("Hidden", Text(result.hidden_remainder))
    console.print(table)
    console.print(f"[dim]{total} characters, cut at {options.length}[/dim]")


@app.command("render")
def render_cmd(
    source: str = typer.Argument("-", help="File to read, or - for stdin"),
    length: Optional[int] = typer.Option(None, "-l", "--length", help="Truncation length"),
    leeway: Optional[int] = typer.Option(None, help="Overrun allowed without truncation"),
    word_break: Optional[bool] = typer.Option(None, "--word-break/--no-word-break", help="Break between words"),
    ellipsis: Optional[str] = typer.Option(None, help="Ellipsis text"),
    ignore: Optional[str] = typer.Option(None, help="Comma-separated tags that never need closing"),
    markdown: Optional[bool] = typer.Option(None, "--markdown/--no-markdown", help="Treat input as Markdown"),
    sanitize: Optional[bool] = typer.Option(None, "--sanitize/--no-sanitize", help="Sanitize input HTML"),
    expanded: bool = typer.Option(False, "--expanded", help="Render the expanded view"),
    page: bool = typer.Option(False, "--page", help="Wrap the output in a full HTML page"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write HTML to this file"),
) -> None:
    """Render the widget markup for a piece of content."""
    cfg = load_config()
    content = _prepare(cfg, source, markdown, sanitize)
    controller = ToggleController(defaults=cfg.more)
    view = controller.attach("cli", content, _overrides(length, leeway, word_break, ellipsis, ignore))
    if expanded:
        view = controller.toggle("cli") or view

    html = render_more(view)
    if page:
        html = render_page(html)
    if output:
        output.write_text(html)
        console.print(f"Wrote [cyan]{output}[/cyan] ({view.state.value})")
    else:
        typer.echo(html)


@app.command("command")
def command_cmd(
    name: str = typer.Argument(..., help="Command name (toggle, destroy, settings ...)"),
    source: str = typer.Argument("-", help="File to read, or - for stdin"),
) -> None:
    """Attach content, run one named command and print the outcome."""
    cfg = load_config()
    content = _prepare(cfg, source, None, None)
    controller = ToggleController(defaults=cfg.more)
    controller.attach("cli", content)
    try:
        result = controller.command(name, "cli")
    except ShowMoreError as exc:
        console.print(f"[red]Failed:[/red] {exc.message}")
        raise typer.Exit(1)
    if result is None:
        console.print("[dim]Nothing happened.[/dim]")
    elif hasattr(result, "model_dump"):
        console.print(Panel(Text(str(result.model_dump())), title=name, border_style="cyan"))
    else:
        console.print(Panel(Text(str(result)), title=name, border_style="cyan"))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Enable auto-reload for development"),
    log_level: str = typer.Option("info", help="Uvicorn log level"),
) -> None:
    """Start the web host."""
    import uvicorn

    console.print(f"\n[bold]Show More[/bold]")
    console.print(f"Starting at [cyan]http://{host}:{port}[/cyan]\n")
    uvicorn.run(
        "showmore.web.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
        log_level=log_level,
    )
