"""Scoped terminal session for full-screen animation.

Entering the session switches to the alternate screen, hides the cursor and
puts stdin into cbreak mode so single keypresses can be polled without
blocking. Leaving it undoes all three on every exit path.
"""

from __future__ import annotations

import codecs
import contextlib
import os
import select
import sys
from collections import deque
from types import TracebackType
from typing import IO, Any, Iterator

from rich.console import Console
from rich.control import Control
from rich.text import Text

from asciiwipe.utils.exceptions import TerminalError
from asciiwipe.utils.logging_config import get_logger

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - Windows
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]

logger = get_logger(__name__)

# Bytes taken from the input fd per read
INPUT_CHUNK_SIZE = 1024


class TerminalSession:
    """Alternate screen, hidden cursor and cbreak input for one animation run."""

    def __init__(
        self,
        console: Console | None = None,
        stdin: IO[str] | None = None,
    ) -> None:
        """Initialize terminal session.

        Args:
            console: Rich Console used for all output (defaults to stdout)
            stdin: Input stream polled for keypresses (defaults to sys.stdin)

        """
        self.console = console or Console(highlight=False)
        self.stdin = stdin if stdin is not None else sys.stdin
        self._saved_tty_attrs: list[Any] | None = None
        self._alt_screen = False
        self._cursor_hidden = False
        self._pending_keys: deque[str] = deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self.active = False

    def __enter__(self) -> TerminalSession:
        """Acquire the terminal."""
        try:
            self._alt_screen = self.console.set_alt_screen(True)
            self.console.show_cursor(False)
            self._cursor_hidden = True
            self._enable_cbreak()
        except Exception as e:
            self.restore(suppress=True)
            msg = "Failed to prepare terminal for animation"
            raise TerminalError(msg, {"reason": str(e)}) from e
        self.active = True
        logger.debug(
            "Terminal session started (alt_screen=%s, cbreak=%s)",
            self._alt_screen,
            self._saved_tty_attrs is not None,
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        """Release the terminal, keeping any in-flight exception."""
        self.restore(suppress=exc_type is not None)
        return False  # Don't suppress exceptions

    def _stdin_is_tty(self) -> bool:
        isatty = getattr(self.stdin, "isatty", None)
        return bool(isatty and isatty())

    def _enable_cbreak(self) -> None:
        if termios is None or not self._stdin_is_tty():
            return
        fd = self.stdin.fileno()
        self._saved_tty_attrs = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def restore(self, suppress: bool = False) -> None:
        """Undo every terminal change made by this session.

        Each step is attempted even if an earlier one fails.

        Args:
            suppress: Log failures instead of raising them (used while another
                exception is already propagating)

        Raises:
            TerminalError: If a restore step failed and ``suppress`` is False

        """
        errors: list[str] = []

        if self._cursor_hidden:
            try:
                self.console.show_cursor(True)
            except Exception as e:
                errors.append(f"show cursor: {e}")
            self._cursor_hidden = False

        if self._alt_screen:
            try:
                self.console.set_alt_screen(False)
            except Exception as e:
                errors.append(f"leave alternate screen: {e}")
            self._alt_screen = False

        if self._saved_tty_attrs is not None and termios is not None:
            try:
                termios.tcsetattr(
                    self.stdin.fileno(), termios.TCSADRAIN, self._saved_tty_attrs
                )
            except Exception as e:
                errors.append(f"restore input mode: {e}")
            self._saved_tty_attrs = None

        self.active = False

        if not errors:
            logger.debug("Terminal restored")
            return
        if suppress:
            logger.error("Terminal restore incomplete: %s", "; ".join(errors))
            return
        msg = "Failed to restore terminal"
        raise TerminalError(msg, {"errors": errors})

    def size(self) -> tuple[int, int]:
        """Current terminal size as (columns, rows)."""
        try:
            dimensions = self.console.size
        except OSError as e:
            msg = "Failed to query terminal size"
            raise TerminalError(msg, {"reason": str(e)}) from e
        return dimensions.width, dimensions.height

    @contextlib.contextmanager
    def frame(self) -> Iterator[None]:
        """Buffer everything written inside the block and flush it once."""
        try:
            with self.console:
                yield
        except OSError as e:
            msg = "Failed to write frame"
            raise TerminalError(msg, {"reason": str(e)}) from e

    def clear(self) -> None:
        """Clear the whole screen."""
        self.console.control(Control.clear(), Control.home())

    def move_to(self, x: int, y: int) -> None:
        """Move the cursor to column x, row y (0-based)."""
        self.console.control(Control.move_to(x, y))

    def write(self, text: Text) -> None:
        """Write styled text at the cursor without wrapping or a newline."""
        self.console.print(text, end="", soft_wrap=True, highlight=False)

    def poll_key(self) -> str | None:
        """Return one pending keypress without blocking, or None.

        All input waiting on the fd is read at once and queued; queued keys
        are returned before the fd is polled again.
        """
        if self._pending_keys:
            return self._pending_keys.popleft()
        if not self._stdin_is_tty():
            return None
        try:
            fd = self.stdin.fileno()
            ready, _, _ = select.select([fd], [], [], 0)
            if not ready:
                return None
            data = os.read(fd, INPUT_CHUNK_SIZE)
        except (OSError, ValueError) as e:
            msg = "Failed to read keyboard input"
            raise TerminalError(msg, {"reason": str(e)}) from e
        self._pending_keys.extend(self._decoder.decode(data))
        if self._pending_keys:
            return self._pending_keys.popleft()
        return None
