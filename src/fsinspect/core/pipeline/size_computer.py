"""Exact and sampled size computation for files and directory trees.

The exact path enumerates every non-hidden file once, then sums sizes in at
most ``max_workers`` contiguous chunks on a thread pool. The sampled path
enumerates once, stats only a random subset of files and extrapolates; it
is meant for quick previews, not precise totals.
"""

from __future__ import annotations

import logging
import math
import random
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Protocol

from fsinspect.core.pipeline.utils import CancelToken, is_cancelled
from fsinspect.core.pipeline.walker import file_size, iter_files
from fsinspect.shared.constants import SizeDefaults
from fsinspect.shared.errors import create_validation_error
from fsinspect.shared.logging import log_operation_success

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...


def partition_paths(
    paths: Sequence[str | Path],
    max_chunks: int = SizeDefaults.MAX_CHUNKS,
    min_chunk_size: int = SizeDefaults.MIN_CHUNK_SIZE,
) -> list[list[str | Path]]:
    """Split ``paths`` into at most ``max_chunks`` contiguous chunks.

    Each chunk holds ``max(min_chunk_size, ceil(len(paths) / max_chunks))``
    paths, except possibly the last one.
    """
    if max_chunks <= 0 or min_chunk_size <= 0:
        raise create_validation_error(
            f"Chunking bounds must be positive: max_chunks={max_chunks}, min_chunk_size={min_chunk_size}",
            field="max_chunks",
            operation="partition_paths",
        )
    if not paths:
        return []
    chunk_size = max(min_chunk_size, math.ceil(len(paths) / max_chunks))
    return [list(paths[start : start + chunk_size]) for start in range(0, len(paths), chunk_size)]


def sum_file_sizes(paths: Sequence[str | Path], cancel_token: CancelToken | None = None) -> int:
    """Sum the sizes of ``paths``; unreadable files contribute 0."""
    total = 0
    for path in paths:
        if is_cancelled(cancel_token):
            break
        total += file_size(path)
    return total


class SizeComputer:
    """Compute exact or estimated byte totals for a path.

    Args:
        max_workers: Upper bound on parallel chunks for exact sums.
        min_chunk_size: Smallest chunk handed to a worker.
        cancel_token: Stops enumeration and summation early; the partial
            total is returned.
    """

    def __init__(
        self,
        *,
        max_workers: int = SizeDefaults.MAX_CHUNKS,
        min_chunk_size: int = SizeDefaults.MIN_CHUNK_SIZE,
        cancel_token: CancelToken | None = None,
    ) -> None:
        if max_workers <= 0:
            raise create_validation_error(
                f"max_workers must be positive: {max_workers}",
                field="max_workers",
                operation="create_size_computer",
            )
        self.max_workers = max_workers
        self.min_chunk_size = min_chunk_size
        self.cancel_token = cancel_token

    def _list_files(self, directory: Path) -> list[str]:
        return [
            entry.path
            for entry in iter_files(directory, include_hidden=False, cancel_token=self.cancel_token)
        ]

    def exact_size(self, path: str | Path) -> int:
        """Total bytes of a file or of every non-hidden file below a directory."""
        path = Path(path)
        if not path.is_dir():
            return file_size(path)

        started = time.perf_counter()
        files = self._list_files(path)
        chunks = partition_paths(files, self.max_workers, self.min_chunk_size)

        if len(chunks) <= 1:
            total = sum_file_sizes(files, self.cancel_token)
        else:
            cancel_token = self.cancel_token if self.cancel_token is not None else CancelToken()
            with ThreadPoolExecutor(
                max_workers=len(chunks),
                thread_name_prefix="fsinspect-size",
            ) as executor:
                partial_sums = executor.map(
                    lambda chunk: sum_file_sizes(chunk, cancel_token),
                    chunks,
                )
                try:
                    total = sum(partial_sums)
                except KeyboardInterrupt:
                    cancel_token.cancel()
                    raise

        log_operation_success(
            logger=logger,
            operation="exact_size",
            duration_ms=(time.perf_counter() - started) * 1000,
            result_info={"files": len(files), "chunks": len(chunks), "total_size": total},
        )
        return total

    def estimate_size(
        self,
        path: str | Path,
        sample_rate: float = SizeDefaults.SAMPLE_RATE,
        *,
        rng: RandomSource | None = None,
    ) -> int:
        """Extrapolate a directory's size from a random sample of its files.

        Each file is sampled independently with probability ``sample_rate``.
        The estimate is ``sampled_bytes * file_count // sampled_files``;
        0 when nothing was sampled.

        Raises:
            DomainError: If sample_rate is outside (0, 1].
        """
        if not 0 < sample_rate <= 1:
            raise create_validation_error(
                f"sample_rate must be in (0, 1], got {sample_rate}",
                field="sample_rate",
                operation="estimate_size",
            )
        path = Path(path)
        if not path.is_dir():
            return file_size(path)

        draw = rng if rng is not None else random
        sampled_bytes = 0
        sampled_count = 0
        total_count = 0

        for entry in iter_files(path, include_hidden=False, cancel_token=self.cancel_token):
            total_count += 1
            if draw.random() < sample_rate:
                try:
                    sampled_bytes += entry.stat(follow_symlinks=False).st_size
                except OSError:
                    continue
                sampled_count += 1

        if sampled_count == 0:
            return 0
        return sampled_bytes * total_count // sampled_count
