"""Paints one frame of the wipe onto a terminal session."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable

from rich.text import Text

from asciiwipe.wipe.color import RandomSource, pick_color

if TYPE_CHECKING:
    from asciiwipe.terminal.session import TerminalSession
    from asciiwipe.wipe.art import ArtImage
    from asciiwipe.wipe.palette import PaletteState

TAB_SIZE = 8

ColorFunction = Callable[
    [int, int, int, "PaletteState", int, int, RandomSource],
    str,
]


def center_offset(terminal_extent: int, image_extent: int) -> int:
    """Offset that centres the image, or 0 if the terminal is too small."""
    if terminal_extent > image_extent:
        return (terminal_extent - image_extent) // 2
    return 0


class WipeRenderer:
    """Renders the art image with per-character colours."""

    def __init__(
        self,
        session: TerminalSession,
        image: ArtImage,
        palettes: PaletteState,
        rng: RandomSource | None = None,
        color_fn: ColorFunction = pick_color,
    ) -> None:
        """Initialize wipe renderer.

        Args:
            session: Terminal session to draw on
            image: Image to draw
            palettes: Palette state shared with the animation loop
            rng: Random source handed to the colour function
            color_fn: Colour function called once per character

        """
        self.session = session
        self.image = image
        self.palettes = palettes
        self.rng = rng or random.Random()
        self.color_fn = color_fn

    def build_line(self, y: int, t: int, start_x: int = 0) -> Text:
        """Colour every character of line ``y`` for sweep time ``t``.

        Tabs are expanded to spaces against the terminal's tab stops, using
        ``start_x`` as the screen column of the first character. Expanded
        spaces take the colour of their tab.
        """
        height = self.image.height
        width = self.image.width
        text = Text()
        column = start_x
        for x, char in enumerate(self.image.lines[y]):
            color = self.color_fn(x, y, t, self.palettes, height, width, self.rng)
            if char == "\t":
                char = " " * (TAB_SIZE - column % TAB_SIZE)
            text.append(char, style=color)
            column += len(char)
        return text

    def draw_frame(self, t: int) -> int:
        """Clear the screen and draw the image centred for time ``t``.

        Returns:
            Number of characters painted

        """
        cols, rows = self.session.size()
        start_x = center_offset(cols, self.image.width)
        start_y = center_offset(rows, self.image.height)

        painted = 0
        with self.session.frame():
            self.session.clear()
            for y, line in enumerate(self.image.lines):
                self.session.move_to(start_x, start_y + y)
                self.session.write(self.build_line(y, t, start_x))
                painted += len(line)
        return painted
