"""Human and machine output helpers for CLI commands."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.table import Table

from fsinspect.cli.json_formatter import format_json_output
from fsinspect.shared.constants import BYTES_PER_KIB, CLIFormatting


def format_size(num_bytes: float) -> str:
    """Render a byte count with a binary unit, e.g. ``1.5 MB``."""
    value = float(num_bytes)
    for unit in CLIFormatting.SIZE_UNITS[:-1]:
        if abs(value) < BYTES_PER_KIB:
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= BYTES_PER_KIB
    return f"{value:.1f} {CLIFormatting.SIZE_UNITS[-1]}"


def print_path_table(
    console: Console,
    title: str,
    rows: Iterable[tuple[str, str]],
    value_column: str = CLIFormatting.TABLE_SIZE_COLUMN,
) -> None:
    table = Table(title=title, show_lines=False)
    table.add_column(CLIFormatting.TABLE_PATH_COLUMN, overflow="fold")
    table.add_column(value_column, justify="right", no_wrap=True)
    for path, value in rows:
        table.add_row(path, value)
    console.print(table)


def write_json_output(
    command: str,
    data: Any,
    warnings: list[str] | None = None,
) -> None:
    """Write a successful JSON envelope to stdout."""
    output = format_json_output(
        success=True,
        command=command,
        data=data,
        warnings=warnings,
    )
    sys.stdout.buffer.write(output)
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()
