"""
Reusable Typer Options Module

Typer options shared by the main callback and the commands. Use them as
``Annotated[<type>, <option>] = <default>`` in command signatures.
"""

from __future__ import annotations

import typer

from taxaoverlap import __version__
from taxaoverlap.shared.constants import Application


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(f"{Application.NAME} {__version__}")
        raise typer.Exit


# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: from configuration.",
)

# JSON output option - flag-based
json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)

# Version option - for main app only
version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    callback=version_callback,
    is_eager=True,
)

config_option = typer.Option(
    "--config",
    help="Path of a TOML configuration file.",
)

media_kind_option = typer.Option(
    "--type",
    "-t",
    case_sensitive=False,
    help="Kind of title: series or movie.",
)

sort_mode_option = typer.Option(
    "--sort",
    "-s",
    case_sensitive=False,
    help="Ranking: reference (TAXA episodes first), here (this title first) or name.",
)
