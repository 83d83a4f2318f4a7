"""Thread-safe result accumulator for scan workers.

One ResultAccumulator is created per scan invocation, mutated by that
scan's workers only, read once by the caller and then discarded.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from fsinspect.shared.errors import create_validation_error

T = TypeVar("T")


@dataclass(frozen=True)
class AccumulatorSnapshot(Generic[T]):
    """Point-in-time copy of an accumulator's state."""

    items: list[T]
    total_size: int
    processed_count: int
    cancelled: bool = False


class ResultAccumulator(Generic[T]):
    """Lock-guarded collection of results, byte total and processed count.

    Every public method takes the lock; no field is touched without it.

    Example:
        >>> acc: ResultAccumulator[str] = ResultAccumulator()
        >>> acc.extend(["a", "b"])
        >>> acc.add_size(10)
        >>> acc.snapshot().total_size
        10
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[T] = []
        self._total_size = 0
        self._processed_count = 0

    def append(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def extend(self, items: Iterable[T]) -> None:
        """Append a batch of items in their given order."""
        batch = list(items)
        with self._lock:
            self._items.extend(batch)

    def add_size(self, size: int) -> None:
        """Add bytes to the running total.

        Raises:
            DomainError: If size is negative (the total never decreases).
        """
        if size < 0:
            raise create_validation_error(
                f"Cannot add a negative size: {size}",
                field="size",
                operation="accumulator_add_size",
            )
        with self._lock:
            self._total_size += size

    def increment_count(self, by: int = 1) -> None:
        if by < 0:
            raise create_validation_error(
                f"Cannot decrement processed count: {by}",
                field="by",
                operation="accumulator_increment_count",
            )
        with self._lock:
            self._processed_count += by

    @property
    def items(self) -> list[T]:
        """Copy of the collected items in arrival order."""
        with self._lock:
            return list(self._items)

    @property
    def total_size(self) -> int:
        with self._lock:
            return self._total_size

    @property
    def processed_count(self) -> int:
        with self._lock:
            return self._processed_count

    def snapshot(self, *, cancelled: bool = False) -> AccumulatorSnapshot[T]:
        """Read all three fields atomically."""
        with self._lock:
            return AccumulatorSnapshot(
                items=list(self._items),
                total_size=self._total_size,
                processed_count=self._processed_count,
                cancelled=cancelled,
            )

    def clear(self) -> None:
        """Zero all state."""
        with self._lock:
            self._items.clear()
            self._total_size = 0
            self._processed_count = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
