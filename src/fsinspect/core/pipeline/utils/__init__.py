"""Shared state containers for pipeline components."""

from __future__ import annotations

from .accumulator import AccumulatorSnapshot, ResultAccumulator
from .cancellation import CancelToken, is_cancelled
from .progress import ProgressSnapshot, ProgressTracker

__all__ = [
    "AccumulatorSnapshot",
    "CancelToken",
    "ProgressSnapshot",
    "ProgressTracker",
    "ResultAccumulator",
    "is_cancelled",
]
