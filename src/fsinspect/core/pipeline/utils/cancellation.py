"""Cooperative cancellation for long-running scans."""

from __future__ import annotations

import threading


class CancelToken:
    """Cooperative cancellation flag shared between a caller and its workers.

    Workers poll ``is_cancelled()`` between file operations; nothing is
    interrupted mid-read.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def is_cancelled(token: CancelToken | None) -> bool:
    """Return True when a token is given and has been cancelled."""
    return token is not None and token.is_cancelled()
