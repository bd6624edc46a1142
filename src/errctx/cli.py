"""CLI interface for errctx using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from errctx import __description__, __version__
from errctx.config import ErrctxConfig, LogLevel, load_config
from errctx.diagnostics import NotErrorContext, decode_record
from symname import SymbolParser, is_import_host_pattern

app = typer.Typer(
    name="errctx",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def configure_logging(config: ErrctxConfig) -> None:
    """Configure root logging from the logging section."""
    logging.basicConfig(
        level=_LOG_LEVELS[LogLevel(config.logging.level)],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(config_path: Optional[Path]) -> ErrctxConfig:
    try:
        config = load_config(config_path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(config)
    return config


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"errctx version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """errctx - Error context capture and qualified symbol diagnostics."""


@app.command("symbol")
def symbol_command(
    name: Annotated[str, typer.Argument(help="Fully-qualified function name to parse")],
    json: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
    config_path: Annotated[
        Optional[Path], typer.Option("--config", "-c", help="Path to .errctx.json")
    ] = None,
) -> None:
    """Parse a qualified symbol name into its parts."""
    config = _load(config_path)
    symbol = SymbolParser(config.parser.to_parser_config()).parse(name)

    if json:
        print(jsonlib.dumps(symbol.to_dict(), indent=2))
        return

    table = Table(title=f"Symbol: {escape(name)}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Package path", escape(symbol.package_path))
    table.add_row("Qualifier", escape(symbol.qualifier))
    table.add_row("Pointer receiver", "yes" if symbol.receiver_is_pointer else "no")
    table.add_row("Type generics", escape(symbol.type_generic_args))
    table.add_row("Func generics", escape(symbol.func_generic_args))
    table.add_row("Function", escape(symbol.func_name))
    table.add_row("Notice", escape(symbol.notice))
    console.print(table)

    for warning in symbol.warnings:
        console.print(f"[yellow]⚠ {escape(warning)}[/yellow]")


@app.command("decode")
def decode_command(
    record: Annotated[str, typer.Argument(help="Pipe-delimited error context record")],
    json: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
    config_path: Annotated[
        Optional[Path], typer.Option("--config", "-c", help="Path to .errctx.json")
    ] = None,
) -> None:
    """Decode an error context record taken from a log line."""
    _load(config_path)
    try:
        fields = decode_record(record)
    except NotErrorContext as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if json:
        print(jsonlib.dumps(fields._asdict(), indent=2))
        return

    table = Table(title="Error context")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    for field_name, value in zip(fields._fields, fields):
        table.add_row(field_name, escape(str(value)))
    console.print(table)


@app.command("host")
def host_command(
    value: Annotated[str, typer.Argument(help="Import path to check")],
) -> None:
    """Check whether an import path starts with a DNS-style host."""
    if is_import_host_pattern(value):
        console.print(f"[green]✓[/green] {escape(value)} starts with an import host")
    else:
        console.print(f"[yellow]✗[/yellow] {escape(value)} does not start with an import host")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
