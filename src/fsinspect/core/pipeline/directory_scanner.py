"""Parallel multi-root directory scanner.

DirectoryScanner walks each root on its own worker thread, filters entries
according to a ScanConfiguration and turns every surviving file into a
caller-defined result item via a transform function. Workers merge their
items into one ResultAccumulator.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar

from fsinspect.config.models.scan_settings import ScanConfiguration
from fsinspect.core.pipeline.throttle import UpdateThrottle
from fsinspect.core.pipeline.utils import (
    AccumulatorSnapshot,
    CancelToken,
    ProgressSnapshot,
    ProgressTracker,
    ResultAccumulator,
)
from fsinspect.core.pipeline.walker import FileMetadata, FileWalk, read_metadata
from fsinspect.shared.errors import (
    ErrorCode,
    ErrorContextModel,
    InfrastructureError,
)
from fsinspect.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Transform = Callable[[Path, FileMetadata], Optional[T]]
ProgressCallback = Callable[[ProgressSnapshot], None]


class DirectoryScanner(Generic[T]):
    """Walk roots in parallel and collect transformed file results.

    Args:
        config: Scan policy (concurrency, filters, notification cadence).
        progress: Tracker updated while scanning; a fresh one is created
            when omitted. It is reset at the start of every scan.
        throttle: Throttle used to deliver progress notifications. When
            ``on_progress`` is given without a throttle, the scanner owns
            one for the duration of each scan.
        on_progress: Observer receiving ProgressSnapshot values.
        cancel_token: Checked between entries; a cancelled scan returns
            the items collected so far. A KeyboardInterrupt raised while
            waiting on the workers cancels it before the workers are joined.

    Example:
        >>> scanner = DirectoryScanner(ScanConfiguration.large_file_scan())
        >>> big = scanner.scan([Path.home()], lambda path, meta: (path, meta.size))
    """

    def __init__(
        self,
        config: ScanConfiguration | None = None,
        *,
        progress: ProgressTracker | None = None,
        throttle: UpdateThrottle | None = None,
        on_progress: ProgressCallback | None = None,
        cancel_token: CancelToken | None = None,
    ) -> None:
        self.config = config or ScanConfiguration.default()
        self.progress = progress or ProgressTracker()
        self.throttle = throttle
        self.on_progress = on_progress
        self.cancel_token = cancel_token

    def scan(self, roots: Sequence[str | Path], transform: Transform[T]) -> list[T]:
        """Return the transformed items for every surviving file under ``roots``."""
        return self.collect(roots, transform).items

    def collect(
        self,
        roots: Sequence[str | Path],
        transform: Transform[T],
    ) -> AccumulatorSnapshot[T]:
        """Scan ``roots`` and return items, their total size and the processed count.

        The snapshot is marked cancelled only when a walk was actually cut
        short by the cancel token.

        Raises:
            InfrastructureError: If a worker fails with something other than
                a filesystem error (typically a bug in ``transform``).
        """
        root_paths = [Path(root) for root in roots]
        accumulator: ResultAccumulator[T] = ResultAccumulator()
        self.progress.reset()
        self.progress.set_total_units(len(root_paths))

        if not root_paths:
            return accumulator.snapshot()

        owned_throttle: UpdateThrottle | None = None
        throttle = self.throttle
        if self.on_progress is not None and throttle is None:
            owned_throttle = throttle = UpdateThrottle()

        context = ErrorContextModel(
            operation="directory_scan",
            additional_data={
                "roots_count": len(root_paths),
                "max_concurrency": self.config.max_concurrency,
            },
        )
        log_operation_start(logger, "directory_scan", context.additional_data)
        started = time.perf_counter()
        cancel_token = self.cancel_token if self.cancel_token is not None else CancelToken()
        interrupted = False

        try:
            workers = min(len(root_paths), self.config.max_concurrency)
            with ThreadPoolExecutor(
                max_workers=workers,
                thread_name_prefix="fsinspect-scan",
            ) as executor:
                future_to_root: dict[Future[bool], Path] = {
                    executor.submit(
                        self._scan_root, root, transform, accumulator, throttle, cancel_token
                    ): root
                    for root in root_paths
                }
                try:
                    for future in as_completed(future_to_root):
                        root = future_to_root[future]
                        try:
                            interrupted = future.result() or interrupted
                        except InfrastructureError:
                            raise
                        except Exception as e:
                            error = InfrastructureError(
                                ErrorCode.SCANNER_ERROR,
                                f"Scan worker failed for root {root}: {e}",
                                ErrorContextModel(
                                    file_path=str(root),
                                    operation="scan_root",
                                ),
                                original_error=e,
                            )
                            log_operation_error(logger=logger, error=error)
                            raise error from e
                        finally:
                            self.progress.complete_unit()
                except KeyboardInterrupt:
                    cancel_token.cancel()
                    raise
        finally:
            self._notify(throttle)
            if throttle is not None:
                throttle.flush()
            if owned_throttle is not None:
                owned_throttle.close()

        snapshot = accumulator.snapshot(cancelled=interrupted)
        log_operation_success(
            logger=logger,
            operation="directory_scan",
            duration_ms=(time.perf_counter() - started) * 1000,
            result_info={
                "items": len(snapshot.items),
                "total_size": snapshot.total_size,
                "processed": snapshot.processed_count,
                "cancelled": snapshot.cancelled,
            },
            context=context,
        )
        return snapshot

    def _scan_root(
        self,
        root: Path,
        transform: Transform[T],
        accumulator: ResultAccumulator[T],
        throttle: UpdateThrottle | None,
        cancel_token: CancelToken,
    ) -> bool:
        """Walk one root and merge its items into the accumulator.

        Returns:
            True if cancellation stopped the walk before it finished.
        """
        if not root.is_dir():
            logger.debug("Root does not exist or is not a directory: %s", root)
            return False

        items: list[T] = []
        collected_size = 0
        processed = 0

        walk = FileWalk(
            root,
            include_hidden=self.config.include_hidden,
            excluded_prefixes=self.config.excluded_prefixes,
            cancel_token=cancel_token,
        )
        for entry in walk:
            metadata = read_metadata(entry)
            if metadata is None:
                continue

            processed += 1
            self.progress.set_current_path(entry.path)
            if processed % self.config.notify_interval == 0:
                accumulator.increment_count(processed)
                processed = 0
                self._notify(throttle)

            if metadata.size < self.config.min_file_size:
                continue

            try:
                item = transform(Path(entry.path), metadata)
            except OSError:
                logger.debug("Transform could not read %s", entry.path, exc_info=True)
                continue
            if item is None:
                continue

            items.append(item)
            collected_size += metadata.size

        accumulator.increment_count(processed)
        accumulator.extend(items)
        accumulator.add_size(collected_size)
        return walk.interrupted

    def _notify(self, throttle: UpdateThrottle | None) -> None:
        if self.on_progress is None or throttle is None:
            return
        snapshot = self.progress.snapshot()
        callback = self.on_progress
        throttle.schedule(lambda: callback(snapshot))


def scan_directories(
    roots: Sequence[str | Path],
    transform: Transform[T],
    config: ScanConfiguration | None = None,
) -> list[T]:
    """Convenience wrapper around ``DirectoryScanner(config).scan``."""
    return DirectoryScanner(config).scan(roots, transform)
