"""Shared utilities for asciiwipe."""
