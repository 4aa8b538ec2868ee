"""Render loop driving the diagonal wipe.

The loop owns the sweep time and the palette state. Every frame it checks the
shared stop flag, draws the image, sleeps, rotates the incoming palette when
the sweep crosses t == 0 and polls the keyboard for a quit key.
"""

from __future__ import annotations

import random
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from asciiwipe.models import AnimationConfig
from asciiwipe.utils.logging_config import get_logger
from asciiwipe.utils.shutdown import get_stop_event
from asciiwipe.wipe.color import RandomSource, pick_color
from asciiwipe.wipe.palette import PaletteState
from asciiwipe.wipe.renderer import ColorFunction, WipeRenderer
from asciiwipe.wipe.timeline import sweep_times

if TYPE_CHECKING:
    from asciiwipe.terminal.session import TerminalSession
    from asciiwipe.wipe.art import ArtImage

logger = get_logger(__name__)

QUIT_KEYS = frozenset({"q", "Q"})


class StopReason(str, Enum):
    """Why the render loop stopped."""

    COMPLETED = "completed"
    QUIT_KEY = "quit_key"
    INTERRUPTED = "interrupted"


@dataclass
class AnimationResult:
    """Summary of one run of the render loop."""

    reason: StopReason = StopReason.COMPLETED
    frames: int = 0
    passes: int = 0
    rotations: int = 0


class WipeAnimation:
    """Drives the sweep time through its range and draws each frame."""

    def __init__(
        self,
        image: ArtImage,
        session: TerminalSession,
        config: AnimationConfig | None = None,
        palettes: PaletteState | None = None,
        rng: RandomSource | None = None,
        stop_event: threading.Event | None = None,
        sleep: Callable[[float], None] = time.sleep,
        color_fn: ColorFunction = pick_color,
    ) -> None:
        """Initialize the animation.

        Args:
            image: Art to animate
            session: Active terminal session
            config: Timing and mode settings
            palettes: Palette state (mutated by rotation)
            rng: Random source for jitter and rotation
            stop_event: Shared stop flag (defaults to the global one)
            sleep: Frame delay function
            color_fn: Per-character colour function

        """
        self.image = image
        self.session = session
        self.config = config or AnimationConfig()
        self.palettes = palettes or PaletteState()
        self.rng = rng or random.Random()
        self.stop_event = stop_event if stop_event is not None else get_stop_event()
        self.sleep = sleep
        self.renderer = WipeRenderer(
            session,
            image,
            self.palettes,
            rng=self.rng,
            color_fn=color_fn,
        )

    def _quit_pressed(self) -> bool:
        """Drain pending keypresses; True if any of them was a quit key."""
        pressed = False
        key = self.session.poll_key()
        while key is not None:
            if key in QUIT_KEYS:
                pressed = True
            key = self.session.poll_key()
        return pressed

    def run(self) -> AnimationResult:
        """Run until one pass completes (or forever) or a stop is requested.

        Returns:
            Frame, pass and rotation counts plus the stop reason

        """
        times = sweep_times(self.image.height, self.config.step)
        delay = self.config.effective_frame_delay
        result = AnimationResult()

        logger.info(
            "Starting wipe: %d frames per pass, delay %.3fs, forever=%s",
            len(times),
            delay,
            self.config.forever,
        )

        while True:
            for t in times:
                if self.stop_event.is_set():
                    result.reason = StopReason.INTERRUPTED
                    logger.info("Stop requested after %d frames", result.frames)
                    return result

                self.renderer.draw_frame(t)
                result.frames += 1
                self.sleep(delay)

                if t == 0:
                    idx = self.palettes.rotate(self.rng)
                    result.rotations += 1
                    logger.debug(
                        "Rotated incoming palette index %d: %s",
                        idx,
                        self.palettes.incoming,
                    )

                if self._quit_pressed():
                    self.stop_event.set()
                    result.reason = StopReason.QUIT_KEY
                    logger.info("Quit key pressed after %d frames", result.frames)
                    return result

            result.passes += 1
            logger.debug("Completed pass %d", result.passes)
            if not self.config.forever:
                return result
