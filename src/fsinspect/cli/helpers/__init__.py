"""Rendering and run-control helpers shared by CLI command handlers."""

from .display import format_size, print_path_table, write_json_output
from .run_control import cancel_on_interrupt, print_scan_policy

__all__ = [
    "cancel_on_interrupt",
    "format_size",
    "print_path_table",
    "print_scan_policy",
    "write_json_output",
]
