"""
Progress Display Utility Module

Renders scanner progress with Rich. ScanProgressDisplay is used as the
scanner's ``on_progress`` observer; snapshots arrive on the throttle's
delivery thread, which Rich's Progress tolerates since it locks internally.
"""

from __future__ import annotations

import types

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from typing_extensions import Self

from fsinspect.core.pipeline.utils import ProgressSnapshot


class ScanProgressDisplay:
    """
    Rich progress bar over completed roots, with the current path as text.

    Args:
        description: Label shown before the bar.
        disabled: Skip all rendering, e.g. for JSON output.
    """

    def __init__(self, description: str = "Scanning...", *, disabled: bool = False) -> None:
        self.disabled = disabled
        self._description = description
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("{task.fields[current]}", style="dim"),
            console=Console(stderr=True),
            disable=disabled,
            transient=True,
        )
        self._task_id = self._progress.add_task(description, total=None, current="")

    def update(self, snapshot: ProgressSnapshot) -> None:
        """Apply a progress snapshot to the bar."""
        if self.disabled:
            return
        self._progress.update(
            self._task_id,
            total=snapshot.total_units or None,
            completed=snapshot.completed_units,
            current=snapshot.current_path or "",
        )

    def __enter__(self) -> Self:
        if not self.disabled:
            self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        if not self.disabled:
            self._progress.stop()
