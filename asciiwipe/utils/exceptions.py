"""Exception hierarchy for asciiwipe.

Provides the exceptions raised while loading art, configuring the animation
and driving the terminal.
"""

from __future__ import annotations

from typing import Any


class AsciiWipeError(Exception):
    """Base exception for all asciiwipe errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize asciiwipe error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ArtLoadError(AsciiWipeError):
    """Art file could not be read or decoded."""


class TerminalError(AsciiWipeError):
    """Failure while talking to the terminal."""


class ValidationError(AsciiWipeError):
    """Data validation errors."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""
