"""
fsinspect Typer CLI Application

Entry point of the ``fsinspect`` command. The main callback loads the
configuration, sets up logging and stores the global options in the CLI
context; each command delegates to a handler and maps failures to exit
codes through ``handle_cli_error``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fsinspect.cli.common.context import (
    CliContext,
    LogLevel,
    ScanPreset,
    clear_cli_context,
    set_cli_context,
)
from fsinspect.cli.common.error_handler import handle_cli_error
from fsinspect.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from fsinspect.cli.hash_handler import handle_dups_command, handle_hash_command
from fsinspect.cli.scan_handler import build_scan_configuration, handle_scan_command
from fsinspect.cli.size_handler import handle_size_command
from fsinspect.config import get_config, reload_config
from fsinspect.shared.constants import CLICommands, CLIDefaults, CLIHelp
from fsinspect.shared.logging import setup_structured_logger

__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def main_callback(
    verbose: int,
    log_level: LogLevel | None,
    config: Path | None,
    version: bool,
) -> None:
    """
    Process the global options before any command runs.

    Args:
        verbose: Verbosity level (count-based)
        log_level: Explicit logging level
        config: Explicit configuration file
        version: Whether to show version information
    """
    if version:
        version_callback(value=True)

    context = CliContext(verbose=verbose, log_level=log_level, config_path=config)
    settings = reload_config(config) if config else get_config()
    setup_structured_logger(
        level=context.get_effective_log_level(settings.logging.level),
        log_file=settings.logging.file,
        use_rich_console=settings.logging.use_rich_console,
    )
    set_cli_context(context)


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=True,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel | None, log_level_option] = None,
    config: Annotated[Path | None, config_option] = None,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Concurrent filesystem inspection."""
    try:
        main_callback(verbose, log_level, config, version)
    except typer.Exit:
        raise
    except Exception as e:
        exit_code = handle_cli_error(e, "main-callback")
        raise typer.Exit(exit_code) from e


def _run(command: str, json_output: bool, handler, *args, **kwargs) -> None:
    try:
        exit_code = handler(*args, **kwargs)
    except (Exception, KeyboardInterrupt) as e:
        exit_code = handle_cli_error(e, command, json_output=json_output)
        raise typer.Exit(exit_code) from e
    finally:
        clear_cli_context()
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)


@app.command(CLICommands.SCAN)
def scan_command(
    roots: Annotated[
        list[Path],
        typer.Argument(
            help=CLIHelp.SCAN_ROOTS_HELP,
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ],
    preset: Annotated[
        ScanPreset,
        typer.Option("--preset", "-p", case_sensitive=False, help=CLIHelp.SCAN_PRESET_HELP),
    ] = ScanPreset.DEFAULT,
    min_size: Annotated[
        int | None,
        typer.Option("--min-size", min=0, help=CLIHelp.SCAN_MIN_SIZE_HELP),
    ] = None,
    include_hidden: Annotated[
        bool | None,
        typer.Option("--include-hidden/--skip-hidden", help=CLIHelp.SCAN_INCLUDE_HIDDEN_HELP),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", "-e", help=CLIHelp.SCAN_EXCLUDE_HELP),
    ] = None,
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """
    Scan directory trees and list the files that pass the scan policy.

    Roots are walked in parallel. Hidden entries and excluded prefixes are
    pruned before descending; files below the minimum size are dropped.

    Examples:
        # Files of 50 MB and more under the home directory
        fsinspect scan ~ --preset large

        # Everything, hidden files included, except the cache directory
        fsinspect scan . --preset junk --exclude cache/
    """

    def _scan() -> int:
        config = build_scan_configuration(
            preset,
            min_size=min_size,
            include_hidden=include_hidden,
            excludes=exclude or (),
        )
        return handle_scan_command(roots, config, json_output=json_output)

    _run(CLICommands.SCAN, json_output, _scan)


@app.command(CLICommands.SIZE)
def size_command(
    path: Annotated[
        Path,
        typer.Argument(help=CLIHelp.SIZE_PATH_HELP, exists=True),
    ],
    estimate: Annotated[
        bool,
        typer.Option("--estimate", help=CLIHelp.SIZE_ESTIMATE_HELP),
    ] = False,
    sample_rate: Annotated[
        float | None,
        typer.Option("--sample-rate", help=CLIHelp.SIZE_SAMPLE_RATE_HELP),
    ] = None,
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """
    Compute the total size of a file or directory tree.

    Hidden entries are not counted. With --estimate, only a random sample
    of files is measured and the total is extrapolated.
    """
    _run(
        CLICommands.SIZE,
        json_output,
        handle_size_command,
        path,
        estimate=estimate,
        sample_rate=sample_rate,
        json_output=json_output,
    )


@app.command(CLICommands.HASH)
def hash_command(
    paths: Annotated[
        list[Path],
        typer.Argument(help=CLIHelp.HASH_PATHS_HELP, exists=True, dir_okay=False),
    ],
    max_concurrency: Annotated[
        int | None,
        typer.Option("--max-concurrency", "-j", min=1, help=CLIHelp.HASH_CONCURRENCY_HELP),
    ] = None,
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """Compute content digests of files with bounded concurrency."""
    _run(
        CLICommands.HASH,
        json_output,
        handle_hash_command,
        paths,
        max_concurrency=max_concurrency,
        json_output=json_output,
    )


@app.command(CLICommands.DUPS)
def dups_command(
    roots: Annotated[
        list[Path],
        typer.Argument(
            help=CLIHelp.DUPS_ROOTS_HELP,
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ],
    min_size: Annotated[
        int,
        typer.Option("--min-size", min=0, help=CLIHelp.DUPS_MIN_SIZE_HELP),
    ] = 0,
    max_concurrency: Annotated[
        int | None,
        typer.Option("--max-concurrency", "-j", min=1, help=CLIHelp.HASH_CONCURRENCY_HELP),
    ] = None,
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """
    Find files with identical content.

    Files are grouped by size first; only same-size files are hashed.
    """
    _run(
        CLICommands.DUPS,
        json_output,
        handle_dups_command,
        roots,
        min_size=min_size,
        max_concurrency=max_concurrency,
        json_output=json_output,
    )


def run() -> None:
    """Console script entry point."""
    app()
