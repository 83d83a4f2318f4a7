"""Size command handler for fsinspect CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from fsinspect.cli.helpers import cancel_on_interrupt, format_size, write_json_output
from fsinspect.config import get_config
from fsinspect.core.pipeline import SizeComputer
from fsinspect.shared.constants import CLICommands, CLIDefaults

logger = logging.getLogger(__name__)


def handle_size_command(
    path: Path,
    *,
    estimate: bool = False,
    sample_rate: float | None = None,
    json_output: bool = False,
) -> int:
    """Print the exact or estimated size of ``path``.

    Returns:
        Exit code
    """
    logger.debug("Command started: %s", CLICommands.SIZE)
    settings = get_config().scan
    rate = sample_rate if sample_rate is not None else settings.sample_rate

    with cancel_on_interrupt() as cancel_token:
        computer = SizeComputer(max_workers=settings.size_workers, cancel_token=cancel_token)
        if estimate:
            total = computer.estimate_size(path, rate)
        else:
            total = computer.exact_size(path)

    if json_output:
        write_json_output(
            CLICommands.SIZE,
            {
                "path": str(path),
                "total_size": total,
                "estimated": estimate,
                "sample_rate": rate if estimate else None,
            },
        )
    else:
        label = "Estimated size" if estimate else "Size"
        Console().print(f"{label} of {path}: {format_size(total)} ({total} bytes)")

    logger.debug("Command completed: %s", CLICommands.SIZE)
    return CLIDefaults.EXIT_SUCCESS
