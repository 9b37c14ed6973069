"""Typer-based CLI for jsprobe structural checks."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from . import __version__, config
from .ancestry import find_ancestor
from .comment_scanner import has_todo_comments, scan_comments
from .config_manager import ProbeSettings, load_settings, save_settings
from .console_detector import detect_console_log
from .errors import ConfigError, ParserUnavailableError
from .loader import load_source_unit
from .models import SourceUnit
from .onload_validator import detect_load_registration
from .parser import node_text
from .report import run_all
from .walker import iter_with_lineage

console = Console()

app = typer.Typer(
    help="🔎 jsprobe — structural checks over JavaScript syntax trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    help="⚙️  Configuration — show or initialise config.toml.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"jsprobe v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log detector activity."),
):
    """jsprobe: verify structural properties of JavaScript source."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _settings() -> ProbeSettings:
    try:
        return load_settings()
    except ConfigError as exc:
        raise typer.BadParameter(str(exc))


def _load(path: Path, settings: ProbeSettings, parse: bool = True) -> SourceUnit:
    try:
        return load_source_unit(path, parse=parse, tolerate_errors=settings.tolerate_errors)
    except ParserUnavailableError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1)
    except UnicodeDecodeError:
        raise typer.BadParameter(f"{path} is not valid UTF-8")
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}")


def _mark(ok: bool) -> str:
    return "[green]✓ pass[/green]" if ok else "[red]✗ fail[/red]"


def _warn_unparsed(unit: SourceUnit) -> None:
    if not unit.parsed:
        console.print(f"[yellow]⚠️  did not parse, tree checks report nothing: {unit.path}[/yellow]")


@app.command("check")
def check(
    path: Path = typer.Argument(..., exists=True, help="JavaScript file or directory with index.js."),
    functions: Optional[List[str]] = typer.Option(
        None, "--function", "-f", help="Function that must not call console.log (repeatable)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON."),
):
    """Run every detector on one file.

    Example:
      jsprobe check app.js -f init -f render
    """
    settings = _settings()
    unit = _load(path, settings)
    report = run_all(unit, functions or [], settings)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
        return

    _warn_unparsed(unit)
    table = Table(title=f"\njsprobe: {unit.path}", show_header=True)
    table.add_column("Check", style="cyan")
    table.add_column("Result", width=10)
    table.add_column("Details")

    load = report.load_event
    table.add_row(
        "load handler",
        _mark(load.passed),
        f"registered={load.registered}, misuse={load.misuse}",
    )
    for name, verdict in report.debug.items():
        table.add_row(
            f"console.log in {name}",
            _mark(not verdict.found),
            f"{verdict.calls} call(s)",
        )
    comments = report.comments
    table.add_row(
        "commented-out code",
        _mark(not comments.found),
        f"line {comments.line}: {escape(comments.text)}" if comments.found else "none",
    )
    table.add_row("TODO comments", _mark(not report.has_todos), "present" if report.has_todos else "none")
    console.print(table)


@app.command("onload")
def onload(
    path: Path = typer.Argument(..., exists=True, help="JavaScript file or directory with index.js."),
):
    """Check that a load handler is registered on window and passed by reference."""
    settings = _settings()
    unit = _load(path, settings)
    _warn_unparsed(unit)
    verdict = detect_load_registration(unit.root, events=settings.load_events)

    if not verdict.registered:
        console.print("[red]✗[/red] No window load handler registered.")
        raise typer.Exit(1)
    if verdict.misuse:
        console.print("[red]✗[/red] Load handler is called instead of passed as a reference.")
        raise typer.Exit(1)
    console.print("[green]✓[/green] Load handler registered correctly.")


@app.command("console-log")
def console_log(
    path: Path = typer.Argument(..., exists=True, help="JavaScript file or directory with index.js."),
    function_name: str = typer.Argument(..., help="Function to inspect."),
):
    """Check that a named function contains no console.log calls."""
    settings = _settings()
    unit = _load(path, settings)
    _warn_unparsed(unit)
    verdict = detect_console_log(
        unit.root,
        function_name,
        object_name=settings.debug_object,
        method=settings.debug_method,
    )

    if verdict.found:
        console.print(
            f"[red]✗[/red] `{function_name}` contains {verdict.calls} "
            f"{settings.debug_object}.{settings.debug_method} call(s)."
        )
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] `{function_name}` has no {settings.debug_object}.{settings.debug_method} calls.")


@app.command("comments")
def comments(
    path: Path = typer.Argument(..., exists=True, help="JavaScript file or directory with index.js."),
):
    """Check for code hidden behind // comments."""
    settings = _settings()
    unit = _load(path, settings, parse=False)
    verdict = scan_comments(unit.source, settings.annotations)

    if verdict.found:
        console.print(f"[red]✗[/red] Commented-out code at line {verdict.line}: {escape(verdict.text)}")
        raise typer.Exit(1)
    console.print("[green]✓[/green] No commented-out code found.")


@app.command("todos")
def todos(
    path: Path = typer.Argument(..., exists=True, help="JavaScript file or directory with index.js."),
):
    """Check that all TODO comments have been removed."""
    unit = _load(path, _settings(), parse=False)
    if has_todo_comments(unit.source):
        console.print("[red]✗[/red] TODO comments remain.")
        raise typer.Exit(1)
    console.print("[green]✓[/green] No TODO comments.")


def _innermost_at_line(root: Any, line: int):
    best = None
    for node, lineage in iter_with_lineage(root):
        if node.start_point[0] != line - 1:
            continue
        if best is None or len(lineage) > len(best[1]):
            best = (node, lineage)
    return best


def _describe(node: Any) -> str:
    snippet = node_text(node).splitlines()[0] if node_text(node) else ""
    if len(snippet) > 40:
        snippet = snippet[:37] + "..."
    return f"[cyan]{node.type}[/cyan] (line {node.start_point[0] + 1}) {escape(snippet)}"


@app.command("ancestors")
def ancestors(
    path: Path = typer.Argument(..., exists=True, help="JavaScript file or directory with index.js."),
    line: int = typer.Argument(..., min=1, help="1-based line number."),
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="Show only the nearest ancestor of this kind."),
):
    """Show the lineage of the innermost node starting on LINE."""
    settings = _settings()
    unit = _load(path, settings)
    if unit.root is None:
        console.print(f"[red]✗[/red] {unit.path} did not parse.")
        raise typer.Exit(1)

    found = _innermost_at_line(unit.root, line)
    if found is None:
        console.print(f"[red]✗[/red] No node starts on line {line}.")
        raise typer.Exit(1)
    node, lineage = found

    if kind:
        ancestor = find_ancestor(kind, lineage)
        if ancestor is None:
            console.print(f"[yellow]No enclosing {kind} for {node.type} on line {line}.[/yellow]")
            raise typer.Exit(1)
        console.print(_describe(ancestor))
        return

    tree = Tree(_describe(lineage[0]) if lineage else _describe(node))
    branch = tree
    for ancestor in lineage[1:]:
        branch = branch.add(_describe(ancestor))
    if lineage:
        branch.add(f"[bold]{_describe(node)}[/bold]")
    console.print(tree)


@config_app.command("show")
def config_show():
    """Show the active detector settings."""
    settings = _settings()
    body = "\n".join(
        [
            f"File:            {config.CONFIG_FILE}",
            f"Tolerate errors: {settings.tolerate_errors}",
            f"Load events:     {', '.join(settings.load_events)}",
            f"Debug call:      {settings.debug_object}.{settings.debug_method}",
            f"Annotations:     {', '.join(settings.annotations)}",
        ]
    )
    console.print(Panel(body, title="[bold]jsprobe settings[/bold]", border_style="cyan"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file."),
):
    """Write a config.toml holding the default settings."""
    if config.CONFIG_FILE.exists() and not force:
        console.print(f"[yellow]Config already exists at {config.CONFIG_FILE}; use --force to overwrite.[/yellow]")
        raise typer.Exit(1)
    try:
        written = save_settings(ProbeSettings())
    except ConfigError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Wrote {written}")


if __name__ == "__main__":
    app()
