"""Batched, rate-limited delivery of observer callbacks.

UpdateThrottle sits between a high-frequency producer (per-file progress)
and an observer that must not be invoked more than a bounded number of
times per second. Callbacks are buffered and handed to the observer's
execution context in batches.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from fsinspect.shared.constants import ThrottleDefaults
from fsinspect.shared.errors import (
    ErrorCode,
    ErrorContextModel,
    InfrastructureError,
    create_validation_error,
)
from fsinspect.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

PendingUpdate = Callable[[], None]
Dispatcher = Callable[[Callable[[], None]], Any]


class UpdateThrottle:
    """Buffer callbacks and flush them no more often than ``min_interval``.

    Args:
        min_interval: Minimum seconds between automatic flushes.
        dispatcher: Callable that runs a zero-argument job on the observer's
            execution context (for example a GUI's "invoke on main thread").
            When omitted, a single dedicated delivery thread is used, so all
            batches run on the same thread in flush order.
        clock: Monotonic time source, injectable for tests.

    Example:
        >>> with UpdateThrottle(min_interval=0.1) as throttle:
        ...     throttle.schedule(lambda: print("tick"))
    """

    def __init__(
        self,
        min_interval: float = ThrottleDefaults.MIN_INTERVAL_SECONDS,
        *,
        dispatcher: Dispatcher | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if min_interval < 0:
            raise create_validation_error(
                f"Throttle interval must not be negative: {min_interval}",
                field="min_interval",
                operation="create_update_throttle",
            )
        self.min_interval = min_interval
        self._clock = clock
        self._lock = threading.Lock()
        self._flush_lock = threading.RLock()
        self._pending: list[PendingUpdate] = []
        self._last_flush = clock()

        self._executor: ThreadPoolExecutor | None = None
        if dispatcher is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix=ThrottleDefaults.DELIVERY_THREAD_PREFIX,
            )
            dispatcher = self._executor.submit
        self._dispatch = dispatcher

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def last_flush(self) -> float:
        with self._lock:
            return self._last_flush

    def schedule(self, update: PendingUpdate) -> Any:
        """Queue a callback, flushing if the interval has elapsed.

        Returns:
            The dispatcher's return value when a flush happened, else None.
        """
        with self._lock:
            self._pending.append(update)
            due = self._clock() - self._last_flush >= self.min_interval
        if due:
            return self.flush()
        return None

    def flush(self) -> Any:
        """Hand every pending callback to the delivery context.

        An empty batch is a no-op and leaves the timer untouched. The call
        does not wait for delivery. Batches reach the dispatcher in the
        order they were taken from the buffer.

        Returns:
            The dispatcher's return value (a Future for the default
            delivery thread), or None when nothing was pending.
        """
        with self._flush_lock:
            with self._lock:
                if not self._pending:
                    return None
                batch = self._pending
                self._pending = []
                self._last_flush = self._clock()

            return self._dispatch(lambda: self._deliver(batch))

    def _deliver(self, batch: list[PendingUpdate]) -> None:
        for update in batch:
            try:
                update()
            except Exception as e:  # noqa: BLE001
                error = InfrastructureError(
                    ErrorCode.DELIVERY_ERROR,
                    f"Observer callback failed: {e}",
                    ErrorContextModel(
                        operation="deliver_update",
                        additional_data={"batch_size": len(batch)},
                    ),
                    original_error=e,
                )
                log_operation_error(logger=logger, error=error)

    def close(self, *, wait: bool = True) -> None:
        """Flush what is pending and stop the owned delivery thread."""
        result = self.flush()
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
        elif wait and isinstance(result, Future):
            result.result()

    def __enter__(self) -> UpdateThrottle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
