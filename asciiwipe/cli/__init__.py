"""Command-line interface for asciiwipe."""

from __future__ import annotations

from asciiwipe.cli.main import cli

__all__ = ["cli"]
