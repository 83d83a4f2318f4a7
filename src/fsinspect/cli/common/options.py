"""
Reusable Typer Options Module

Option definitions shared by the main callback and the commands, kept in
one place so flags read the same everywhere.
"""

from __future__ import annotations

import typer

verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)

log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to the configured level.",
)

config_option = typer.Option(
    "--config",
    "-c",
    exists=True,
    dir_okay=False,
    help="Path of a TOML configuration file.",
)

json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)

version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
)
