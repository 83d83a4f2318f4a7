"""Thread-safe progress tracking for scans."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from fsinspect.shared.errors import create_validation_error


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time copy of a ProgressTracker."""

    total_units: int
    completed_units: int
    current_path: str

    @property
    def fraction(self) -> float:
        if self.total_units <= 0:
            return 0.0
        return self.completed_units / self.total_units


class ProgressTracker:
    """Counter of completed vs. total units of work plus the current path.

    All access goes through a lock so workers and the observer may call
    in concurrently.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_units = 0
        self._completed_units = 0
        self._current_path = ""

    def set_total_units(self, count: int) -> None:
        if count < 0:
            raise create_validation_error(
                f"Total units must not be negative: {count}",
                field="count",
                operation="progress_set_total",
            )
        with self._lock:
            self._total_units = count

    def complete_unit(self, count: int = 1) -> None:
        """Mark units of work as completed."""
        if count < 0:
            raise create_validation_error(
                f"Completed units must not be negative: {count}",
                field="count",
                operation="progress_complete_unit",
            )
        with self._lock:
            self._completed_units += count

    def set_current_path(self, path: str) -> None:
        with self._lock:
            self._current_path = path

    @property
    def total_units(self) -> int:
        with self._lock:
            return self._total_units

    @property
    def completed_units(self) -> int:
        with self._lock:
            return self._completed_units

    @property
    def current_path(self) -> str:
        with self._lock:
            return self._current_path

    @property
    def fraction(self) -> float:
        """completed / total, or 0.0 while no total is known."""
        return self.snapshot().fraction

    def snapshot(self) -> ProgressSnapshot:
        with self._lock:
            return ProgressSnapshot(
                total_units=self._total_units,
                completed_units=self._completed_units,
                current_path=self._current_path,
            )

    def reset(self) -> None:
        """Zero all state before reuse."""
        with self._lock:
            self._total_units = 0
            self._completed_units = 0
            self._current_path = ""
