"""Palette state for the wipe animation.

Two fixed-length sequences of Rich colour names: the incoming palette paints
the approaching sweep (t < 0) and is rotated once per pass; the outgoing
palette paints the receding sweep (t >= 0).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from asciiwipe.utils.exceptions import ValidationError

if TYPE_CHECKING:
    from asciiwipe.wipe.color import RandomSource

PALETTE_SIZE = 7

# Inclusive bounds of the incoming index moved to the end on rotation.
# Index 0 is a fixed colour that never rotates; the rest colour is the last entry.
ROTATION_MIN_INDEX = 1
ROTATION_MAX_INDEX = 3

BACKGROUND_COLOR = "black"

INCOMING_PALETTE: tuple[str, ...] = (
    "white",
    "red",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "green",
)

OUTGOING_PALETTE: tuple[str, ...] = (
    "red",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "black",
)


@dataclass
class PaletteState:
    """Incoming/outgoing colour sequences of exactly seven entries each."""

    incoming: list[str] = field(default_factory=lambda: list(INCOMING_PALETTE))
    outgoing: list[str] = field(default_factory=lambda: list(OUTGOING_PALETTE))
    background: str = BACKGROUND_COLOR

    def __post_init__(self) -> None:
        """Validate palette lengths."""
        for name, palette in (("incoming", self.incoming), ("outgoing", self.outgoing)):
            if len(palette) != PALETTE_SIZE:
                msg = f"{name} palette must have {PALETTE_SIZE} colours, got {len(palette)}"
                raise ValidationError(msg, {"palette": list(palette)})

    @property
    def rest_color(self) -> str:
        """Colour for cells the sweep has not reached while t > 0."""
        return self.incoming[-1]

    def rotate(self, rng: RandomSource) -> int:
        """Move one incoming colour (index 1-3) to the end of the palette.

        Args:
            rng: Random source used to pick the index

        Returns:
            The index that was moved

        """
        idx = rng.randint(ROTATION_MIN_INDEX, ROTATION_MAX_INDEX)
        self.incoming.append(self.incoming.pop(idx))
        return idx

    def all_colors(self) -> set[str]:
        """Every colour the colour function can return."""
        return {*self.incoming, *self.outgoing, self.background}
