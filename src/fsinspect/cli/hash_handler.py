"""Hash and duplicate-search command handlers for fsinspect CLI."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from fsinspect.cli.helpers import (
    cancel_on_interrupt,
    format_size,
    print_path_table,
    print_scan_policy,
    write_json_output,
)
from fsinspect.config import ScanConfiguration, get_config
from fsinspect.core.pipeline import DirectoryScanner, HashComputer, find_duplicates
from fsinspect.core.pipeline.utils import CancelToken
from fsinspect.core.pipeline.walker import file_size
from fsinspect.shared.constants import CLICommands, CLIDefaults, CLIFormatting

logger = logging.getLogger(__name__)


def _create_hasher(cancel_token: CancelToken) -> HashComputer:
    settings = get_config().scan
    return HashComputer(
        algorithm=settings.hash_algorithm,
        read_chunk_size=settings.hash_read_chunk_size,
        cancel_token=cancel_token,
    )


def handle_hash_command(
    paths: Sequence[Path],
    *,
    max_concurrency: int | None = None,
    json_output: bool = False,
) -> int:
    """Print the content digest of each readable file.

    Returns:
        Exit code
    """
    logger.debug("Command started: %s", CLICommands.HASH)
    concurrency = max_concurrency or get_config().scan.max_concurrency
    with cancel_on_interrupt() as cancel_token:
        hasher = _create_hasher(cancel_token)
        hashes = hasher.compute_hashes(paths, concurrency)
    unreadable = [str(path) for path in paths if Path(path) not in hashes]

    if json_output:
        write_json_output(
            CLICommands.HASH,
            {
                "algorithm": hasher.algorithm,
                "hashes": {str(path): digest for path, digest in hashes.items()},
                "unreadable": unreadable,
            },
            warnings=[f"Could not read {path}" for path in unreadable],
        )
    else:
        console = Console()
        print_path_table(
            console,
            f"{hasher.algorithm} digests",
            sorted((str(path), digest) for path, digest in hashes.items()),
            value_column=CLIFormatting.TABLE_DIGEST_COLUMN,
        )
        for path in unreadable:
            console.print(f"[yellow]Could not read {path}[/yellow]")

    logger.debug("Command completed: %s", CLICommands.HASH)
    return CLIDefaults.EXIT_SUCCESS


def handle_dups_command(
    roots: Sequence[Path],
    *,
    min_size: int = 0,
    max_concurrency: int | None = None,
    json_output: bool = False,
) -> int:
    """Scan ``roots`` and report groups of files with identical content.

    Empty files are never reported as duplicates of each other.

    Returns:
        Exit code
    """
    logger.debug("Command started: %s", CLICommands.DUPS)
    settings = get_config().scan
    config = ScanConfiguration(
        max_concurrency=settings.max_concurrency,
        notify_interval=settings.notify_interval,
        min_file_size=max(min_size, 1),
        include_hidden=settings.include_hidden,
        excluded_prefixes=frozenset(settings.excluded_prefixes),
    )
    console = Console()
    if not json_output:
        print_scan_policy(console, config)

    with cancel_on_interrupt() as cancel_token:
        scanner: DirectoryScanner[Path] = DirectoryScanner(config, cancel_token=cancel_token)
        files = scanner.scan(roots, lambda path, _meta: path)
        groups = find_duplicates(
            files,
            max_concurrency or settings.max_concurrency,
            hasher=_create_hasher(cancel_token),
        )

    ordered = sorted(groups.items(), key=lambda item: (-file_size(item[1][0]), item[0]))

    if json_output:
        write_json_output(
            CLICommands.DUPS,
            {
                "roots": [str(root) for root in roots],
                "files_scanned": len(files),
                "groups": [
                    {
                        "digest": digest,
                        "size": file_size(group[0]),
                        "paths": [str(path) for path in group],
                    }
                    for digest, group in ordered
                ],
            },
        )
    else:
        if not ordered:
            console.print("[green]No duplicate files found[/green]")
        for digest, group in ordered:
            print_path_table(
                console,
                f"{digest[:12]} ({len(group)} copies)",
                ((str(path), format_size(file_size(path))) for path in group),
            )

    logger.debug("Command completed: %s", CLICommands.DUPS)
    return CLIDefaults.EXIT_SUCCESS
