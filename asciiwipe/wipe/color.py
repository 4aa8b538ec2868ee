"""Per-cell colour selection for the diagonal wipe.

The sweep front is ``x - max(height, width) + |t|``. Each cell compares that
front against seven bands spaced ``BAND_SPACING`` rows apart, pushed back by a
random jitter drawn for every cell so the edge looks ragged.

Bands are scanned from the outermost (6) inward and the first match wins, so
the farthest qualifying band colours the cell. This ordering is what gives the
layered trail its look and must not be flipped to "nearest band wins".
"""

from __future__ import annotations

import random
from typing import Protocol

from asciiwipe.wipe.palette import PALETTE_SIZE, PaletteState

BAND_SPACING = 3
JITTER_MIN = 1
JITTER_MAX = 15


class RandomSource(Protocol):
    """Anything that can draw an integer from an inclusive range."""

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        ...


_default_rng = random.Random()


def sweep_front(x: int, t: int, image_height: int, image_width: int) -> int:
    """Position of the sweep front relative to column ``x`` at time ``t``."""
    return x - max(image_height, image_width) + abs(t)


def pick_color(
    x: int,
    y: int,
    t: int,
    palettes: PaletteState,
    image_height: int,
    image_width: int,
    rng: RandomSource | None = None,
) -> str:
    """Choose the colour of the character at (x, y) for sweep time t.

    Args:
        x: Column of the character within its line
        y: Line index within the image
        t: Sweep time
        palettes: Current palette state (read only)
        image_height: Number of lines in the image
        image_width: Longest line length in characters
        rng: Source of the per-cell jitter

    Returns:
        A Rich colour name from one of the palettes or the background

    """
    if rng is None:
        rng = _default_rng

    front = sweep_front(x, t, image_height, image_width)
    off = rng.randint(JITTER_MIN, JITTER_MAX)

    for i in reversed(range(PALETTE_SIZE)):
        if front > y + BAND_SPACING * i + off:
            return palettes.outgoing[i] if t >= 0 else palettes.incoming[i]

    if t <= 0:
        return palettes.background
    return palettes.rest_color
