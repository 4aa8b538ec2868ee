"""Terminal session handling."""

from __future__ import annotations

from asciiwipe.terminal.session import TerminalSession

__all__ = ["TerminalSession"]
