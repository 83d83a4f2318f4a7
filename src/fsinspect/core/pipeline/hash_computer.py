"""Bounded-concurrency content hashing and duplicate grouping.

HashComputer reads files on a thread pool with at most ``max_concurrency``
reads in flight. Admission is gated by a semaphore acquired before each
submit and released when the job completes, so admission order equals
input order while completion order is unspecified.
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from fsinspect.core.pipeline.utils import CancelToken, is_cancelled
from fsinspect.core.pipeline.walker import file_size
from fsinspect.shared.constants import HashDefaults
from fsinspect.shared.errors import (
    ErrorCode,
    ErrorContextModel,
    InfrastructureError,
    create_validation_error,
)
from fsinspect.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


class _InFlightCounter:
    """Current and peak number of running reads for one compute_hashes call."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.current = 0
        self.peak = 0

    def enter(self) -> None:
        with self._lock:
            self.current += 1
            self.peak = max(self.peak, self.current)

    def leave(self) -> None:
        with self._lock:
            self.current -= 1


class HashComputer:
    """Compute content digests for many files under a concurrency cap.

    Args:
        algorithm: Any ``hashlib`` algorithm name; MD5 by default.
        read_chunk_size: Bytes read per chunk while streaming a file.
        cancel_token: Stops admission of new files once cancelled.

    Attributes:
        peak_in_flight: Highest number of simultaneously running reads
            observed by the most recently finished ``compute_hashes`` call.
            Each call counts its own reads, so concurrent calls on one
            instance do not inflate each other's peak.
    """

    def __init__(
        self,
        *,
        algorithm: str = HashDefaults.ALGORITHM,
        read_chunk_size: int = HashDefaults.READ_CHUNK_SIZE,
        cancel_token: CancelToken | None = None,
    ) -> None:
        if algorithm not in hashlib.algorithms_available:
            raise create_validation_error(
                f"Unsupported hash algorithm: {algorithm}",
                field="algorithm",
                operation="create_hash_computer",
            )
        self.algorithm = algorithm
        self.read_chunk_size = read_chunk_size
        self.cancel_token = cancel_token
        self.peak_in_flight = 0

    def digest_file(self, path: Path) -> str:
        """Return the lowercase hex digest of a file's whole content.

        Raises:
            OSError: If the file cannot be read.
        """
        hasher = hashlib.new(self.algorithm)
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(self.read_chunk_size), b""):
                hasher.update(chunk)
        return hasher.hexdigest()

    def _hash_one(self, path: Path, counter: _InFlightCounter) -> str | None:
        counter.enter()
        try:
            return self.digest_file(path)
        except OSError:
            logger.debug("Cannot read file for hashing: %s", path, exc_info=True)
            return None
        finally:
            counter.leave()

    def compute_hashes(
        self,
        paths: Sequence[str | Path],
        max_concurrency: int = HashDefaults.MAX_CONCURRENCY,
    ) -> dict[Path, str]:
        """Map each readable path to its digest; unreadable paths are omitted.

        Raises:
            DomainError: If max_concurrency is not positive.
            InfrastructureError: If a hashing job fails unexpectedly.
        """
        if max_concurrency <= 0:
            raise create_validation_error(
                f"max_concurrency must be positive: {max_concurrency}",
                field="max_concurrency",
                operation="compute_hashes",
            )

        results: dict[Path, str] = {}
        results_lock = threading.Lock()
        failures: list[BaseException] = []
        slots = threading.BoundedSemaphore(max_concurrency)
        counter = _InFlightCounter()
        started = time.perf_counter()

        def _on_done(future: Future[str | None], path: Path) -> None:
            try:
                digest = future.result()
            except Exception as e:  # noqa: BLE001
                with results_lock:
                    failures.append(e)
                return
            finally:
                slots.release()
            if digest is not None:
                with results_lock:
                    results[path] = digest

        with ThreadPoolExecutor(
            max_workers=max_concurrency,
            thread_name_prefix="fsinspect-hash",
        ) as executor:
            try:
                for raw_path in paths:
                    if is_cancelled(self.cancel_token):
                        break
                    slots.acquire()
                    path = Path(raw_path)
                    future = executor.submit(self._hash_one, path, counter)
                    future.add_done_callback(lambda f, p=path: _on_done(f, p))
            except KeyboardInterrupt:
                if self.cancel_token is not None:
                    self.cancel_token.cancel()
                raise

        self.peak_in_flight = counter.peak

        if failures:
            error = InfrastructureError(
                ErrorCode.HASHER_ERROR,
                f"{len(failures)} hashing job(s) failed: {failures[0]}",
                ErrorContextModel(
                    operation="compute_hashes",
                    additional_data={"failures": len(failures)},
                ),
                original_error=failures[0] if isinstance(failures[0], Exception) else None,
            )
            log_operation_error(logger=logger, error=error)
            raise error

        log_operation_success(
            logger=logger,
            operation="compute_hashes",
            duration_ms=(time.perf_counter() - started) * 1000,
            result_info={
                "requested": len(paths),
                "hashed": len(results),
                "peak_in_flight": counter.peak,
            },
        )
        return results


def group_duplicates(hashes: Mapping[Path, str]) -> dict[str, list[Path]]:
    """Group paths by digest, keeping only digests shared by two or more paths."""
    by_digest: dict[str, list[Path]] = defaultdict(list)
    for path, digest in hashes.items():
        by_digest[digest].append(path)
    return {digest: sorted(group) for digest, group in by_digest.items() if len(group) > 1}


def find_duplicates(
    paths: Iterable[str | Path],
    max_concurrency: int = HashDefaults.MAX_CONCURRENCY,
    hasher: HashComputer | None = None,
) -> dict[str, list[Path]]:
    """Find files with identical content.

    Files are bucketed by size first; only files sharing a size with
    another file are hashed.
    """
    by_size: dict[int, list[Path]] = defaultdict(list)
    for raw_path in paths:
        path = Path(raw_path)
        by_size[file_size(path)].append(path)

    candidates = [path for group in by_size.values() if len(group) > 1 for path in group]
    if not candidates:
        return {}

    hasher = hasher or HashComputer()
    return group_duplicates(hasher.compute_hashes(candidates, max_concurrency))
