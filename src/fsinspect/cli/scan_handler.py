"""Scan command handler for fsinspect CLI."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console

from fsinspect.cli.common.context import ScanPreset
from fsinspect.cli.helpers import (
    cancel_on_interrupt,
    format_size,
    print_path_table,
    print_scan_policy,
    write_json_output,
)
from fsinspect.cli.progress import ScanProgressDisplay
from fsinspect.config import ScanConfiguration, get_config
from fsinspect.core.pipeline import DirectoryScanner, UpdateThrottle
from fsinspect.core.pipeline.walker import FileMetadata
from fsinspect.shared.constants import CLICommands, CLIDefaults

logger = logging.getLogger(__name__)


def build_scan_configuration(
    preset: ScanPreset,
    *,
    min_size: int | None = None,
    include_hidden: bool | None = None,
    excludes: Sequence[str] = (),
) -> ScanConfiguration:
    """Resolve a preset plus command-line overrides into a scan policy.

    The default preset starts from the configured scan settings; the named
    presets start from their fixed policies. Exclusions are added to the
    preset's own.
    """
    if preset is ScanPreset.DEFAULT:
        base = get_config().scan.to_configuration()
    else:
        base = preset.base_configuration()

    values = base.model_dump()
    if min_size is not None:
        values["min_file_size"] = min_size
    if include_hidden is not None:
        values["include_hidden"] = include_hidden
    if excludes:
        values["excluded_prefixes"] = base.excluded_prefixes | frozenset(excludes)
    return ScanConfiguration(**values)


def _to_item(path: Path, metadata: FileMetadata) -> dict[str, Any]:
    return {
        "path": str(path),
        "size": metadata.size,
        "modified_time": metadata.modified_time.isoformat(),
    }


def handle_scan_command(
    roots: Sequence[Path],
    config: ScanConfiguration,
    *,
    json_output: bool = False,
) -> int:
    """Scan ``roots`` and report surviving files, largest first.

    Returns:
        Exit code
    """
    logger.debug("Command started: %s", CLICommands.SCAN)
    settings = get_config()

    console = Console()
    if not json_output:
        print_scan_policy(console, config)

    with (
        cancel_on_interrupt() as cancel_token,
        ScanProgressDisplay(disabled=json_output) as display,
        UpdateThrottle(settings.scan.throttle_interval) as throttle,
    ):
        scanner: DirectoryScanner[dict[str, Any]] = DirectoryScanner(
            config,
            throttle=throttle,
            on_progress=display.update,
            cancel_token=cancel_token,
        )
        result = scanner.collect(roots, _to_item)

    items = sorted(result.items, key=lambda item: (-item["size"], item["path"]))

    if json_output:
        write_json_output(
            CLICommands.SCAN,
            {
                "roots": [str(root) for root in roots],
                "files": items,
                "file_count": len(items),
                "total_size": result.total_size,
                "processed_count": result.processed_count,
                "cancelled": result.cancelled,
            },
            warnings=[] if items else ["No files matched the scan policy"],
        )
    else:
        if items:
            print_path_table(
                console,
                "Scan results",
                ((item["path"], format_size(item["size"])) for item in items),
            )
        else:
            console.print("[yellow]No files matched the scan policy[/yellow]")
        console.print(
            f"Total: {len(items)} files, {format_size(result.total_size)} "
            f"({result.processed_count} examined)",
        )

    logger.debug("Command completed: %s", CLICommands.SCAN)
    return CLIDefaults.EXIT_SUCCESS
