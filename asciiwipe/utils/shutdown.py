"""Global stop flag shared between the signal handler and the render loop.

The SIGINT handler and the quit key both set the same flag; the render loop
polls it at the top of every frame.
"""

from __future__ import annotations

import signal
import threading
from types import FrameType
from typing import Any, Callable

# Global stop flag (thread-safe)
_stop_flag: threading.Event = threading.Event()


def is_stop_requested() -> bool:
    """Check if a stop has been requested.

    Returns:
        True if the animation should stop, False otherwise

    """
    return _stop_flag.is_set()


def request_stop() -> None:
    """Mark that the animation should stop."""
    _stop_flag.set()


def clear_stop() -> None:
    """Clear the stop flag (for testing and for a fresh run)."""
    _stop_flag.clear()


def get_stop_event() -> threading.Event:
    """Get the stop event object (for direct access if needed).

    Returns:
        The stop Event object

    """
    return _stop_flag


def _handle_interrupt(signum: int, frame: FrameType | None) -> None:
    request_stop()


def install_interrupt_handler() -> Callable[[], None]:
    """Route SIGINT to the stop flag.

    Returns:
        A callable that restores the previous SIGINT handler

    """
    previous: Any = signal.signal(signal.SIGINT, _handle_interrupt)

    if previous is None:
        previous = signal.SIG_DFL

    def _restore() -> None:
        signal.signal(signal.SIGINT, previous)

    return _restore
