"""Cancellation and verbose-reporting helpers for command handlers."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from fsinspect.cli.common.context import get_cli_context
from fsinspect.cli.helpers.display import format_size
from fsinspect.config import ScanConfiguration
from fsinspect.core.pipeline.utils import CancelToken

logger = logging.getLogger(__name__)


@contextmanager
def cancel_on_interrupt() -> Iterator[CancelToken]:
    """Yield a token for the command's workers, cancelled on Ctrl-C.

    Example:
        >>> with cancel_on_interrupt() as token:
        ...     DirectoryScanner(config, cancel_token=token).scan(roots, transform)
    """
    token = CancelToken()
    try:
        yield token
    except KeyboardInterrupt:
        token.cancel()
        logger.debug("Interrupted by user, cancelling workers")
        raise


def print_scan_policy(console: Console, config: ScanConfiguration) -> None:
    """Print the configuration source and scan policy in verbose mode."""
    context = get_cli_context()
    if not context.is_verbose():
        return

    source = str(context.config_path) if context.config_path else "defaults"
    excluded = ", ".join(sorted(config.excluded_prefixes)) or "none"
    hidden = "included" if config.include_hidden else "skipped"
    console.print(f"Configuration: {source}", markup=False)
    console.print(
        f"Policy: min size {format_size(config.min_file_size)}, "
        f"hidden {hidden}, excluded {excluded}, "
        f"concurrency {config.max_concurrency}",
        markup=False,
    )
