"""errwire CLI — Typer app for browsing and checking error registries."""

from __future__ import annotations

import builtins
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from errwire import __version__
from errwire.classifier import classify
from errwire.exceptions import RegistryError
from errwire.registry import GROUPS, Registry, load_registry

console = Console()
app = typer.Typer(
    name="errwire",
    help="errwire — error taxonomy and response envelopes",
    no_args_is_help=True,
)


def _load(file: Optional[Path]) -> Registry:
    try:
        return load_registry(file)
    except RegistryError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


# --- Version ---

def _version_callback(value: bool):
    if value:
        console.print(f"errwire {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", "-v", callback=_version_callback, is_eager=True),
):
    pass


# --- Registry commands ---

@app.command("list")
def list_errors(
    group: Optional[str] = typer.Option(None, "--group", "-g", help=f"One of: {', '.join(GROUPS)}"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Registry JSON (default: bundled)"),
):
    """List error definitions."""
    registry = _load(file)
    definitions = registry.by_group(group) if group else list(registry.values())
    if not definitions:
        console.print(f"No definitions in group {group!r}.")
        return

    table = Table(title=f"Error registry v{registry.version}")
    table.add_column("Key", style="bold")
    table.add_column("Status", justify="right")
    table.add_column("Code")
    table.add_column("Group")
    table.add_column("Default message")
    for d in definitions:
        table.add_row(d.key, str(d.http_status), d.stable_code, d.group, d.default_message)
    console.print(table)


@app.command("show")
def show_error(
    code: str = typer.Argument(..., help="Stable error code"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Registry JSON (default: bundled)"),
):
    """Show one definition as JSON."""
    registry = _load(file)
    definition = registry.by_code(code)
    if definition is None:
        console.print(f"[red]Unknown error code: {escape(code)}[/red]")
        raise typer.Exit(1)
    typer.echo(json.dumps(definition.model_dump(), indent=2))


@app.command("check")
def check_registry(
    file: Path = typer.Argument(..., help="Registry JSON to validate"),
):
    """Validate a registry file (unique codes, valid statuses)."""
    registry = _load(file)
    console.print(f"[green]OK[/green] {len(registry)} definitions, version {registry.version}")


@app.command("classify")
def classify_kind(
    kind: str = typer.Argument(..., help="Built-in exception name, e.g. TypeError"),
    message: str = typer.Argument("", help="Exception message"),
):
    """Show how a built-in exception would be answered."""
    cls = getattr(builtins, kind, None)
    if not (isinstance(cls, type) and issubclass(cls, BaseException)):
        console.print(f"[red]Not a built-in exception: {kind}[/red]")
        raise typer.Exit(1)
    try:
        error = cls(message)
    except TypeError:
        console.print(f"[red]{kind} cannot be built from a message alone[/red]")
        raise typer.Exit(1)
    outcome = classify(error)
    console.print(f"rule:    {outcome.rule}")
    console.print(f"status:  {outcome.status_code}")
    console.print(f"message: {outcome.message}", markup=False)
    if outcome.error_code:
        console.print(f"code:    {outcome.error_code}")
