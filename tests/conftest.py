"""
Pytest configuration and shared fixtures for fsinspect tests.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from fsinspect.config import loader as config_loader


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingDispatcher:
    """Dispatcher that runs jobs inline and counts them."""

    def __init__(self) -> None:
        self.jobs = 0

    def __call__(self, job: Callable[[], None]) -> str:
        self.jobs += 1
        job()
        return f"job-{self.jobs}"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Fresh settings singleton, no FSINSPECT_* environment, no stray config files."""
    for name in list(os.environ):
        if name.startswith("FSINSPECT_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_loader, "_loader", config_loader.SettingsLoader())


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., Path]:
    """Create a file of a given size (or content) below tmp_path."""

    def _make(relative: str, size: int = 0, content: bytes | None = None) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content if content is not None else b"x" * size)
        return path

    return _make


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()
