#!/usr/bin/env python3
"""Entry point for ``python -m asciiwipe``."""

from __future__ import annotations

from asciiwipe.cli.main import main

if __name__ == "__main__":
    main()
