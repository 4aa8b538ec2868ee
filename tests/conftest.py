"""Pytest configuration and shared fixtures for asciiwipe tests."""

from __future__ import annotations

import contextlib
import io
import logging
from typing import Iterator

import pytest
from rich.console import Console
from rich.text import Text

from asciiwipe.config import reset_config
from asciiwipe.utils.shutdown import clear_stop


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("integration", "marks tests as integration tests"),
        ("cli", "marks tests as CLI tests"),
        ("wipe", "marks tests as wipe animation tests"),
        ("terminal", "marks tests as terminal session tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep the developer's ASCIIWIPE_* settings out of the tests."""
    for name in (
        "ASCIIWIPE_ART_PATH",
        "ASCIIWIPE_STEP",
        "ASCIIWIPE_FRAME_DELAY",
        "ASCIIWIPE_FOREVER_FRAME_DELAY",
        "ASCIIWIPE_FOREVER",
        "ASCIIWIPE_LOG_LEVEL",
        "ASCIIWIPE_LOG_FILE",
        "ASCIIWIPE_STRUCTURED_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset the global config and stop flag around each test."""
    reset_config()
    clear_stop()
    yield
    reset_config()
    clear_stop()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)


class SequenceRandom:
    """Deterministic random source that replays a fixed sequence of integers.

    Values are clamped into the requested range so one sequence can serve both
    jitter draws (1-15) and rotation draws (1-3).
    """

    def __init__(self, values: list[int] | None = None, default: int | None = None):
        self.values = list(values or [])
        self.default = default
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if self.values:
            value = self.values.pop(0)
        elif self.default is not None:
            value = self.default
        else:
            value = a
        return max(a, min(b, value))


class FakeSession:
    """In-memory stand-in for TerminalSession."""

    def __init__(self, size: tuple[int, int] = (80, 24), keys: list[str] | None = None):
        self._size = size
        self.keys = list(keys or [])
        self.frames = 0
        self.clears = 0
        self.moves: list[tuple[int, int]] = []
        self.lines: list[Text] = []

    def size(self) -> tuple[int, int]:
        return self._size

    @contextlib.contextmanager
    def frame(self) -> Iterator[None]:
        yield
        self.frames += 1

    def clear(self) -> None:
        self.clears += 1

    def move_to(self, x: int, y: int) -> None:
        self.moves.append((x, y))

    def write(self, text: Text) -> None:
        self.lines.append(text)

    def poll_key(self) -> str | None:
        if self.keys:
            return self.keys.pop(0)
        return None


@pytest.fixture
def sequence_random():
    """Factory for deterministic random sources."""
    return SequenceRandom


@pytest.fixture
def fake_session():
    """A fresh in-memory terminal session."""
    return FakeSession()


@pytest.fixture
def session_factory():
    """Factory for in-memory sessions with a custom size or queued keys."""
    return FakeSession


@pytest.fixture
def terminal_console():
    """Rich Console that behaves like a terminal but writes to a buffer."""
    return Console(
        file=io.StringIO(),
        force_terminal=True,
        width=100,
        height=30,
        color_system="standard",
        legacy_windows=False,
    )
