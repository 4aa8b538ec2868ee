"""Diagonal colour wipe over a static ASCII-art image."""

from __future__ import annotations

from asciiwipe.wipe.animation import AnimationResult, StopReason, WipeAnimation
from asciiwipe.wipe.art import ArtImage, load_art
from asciiwipe.wipe.color import RandomSource, pick_color
from asciiwipe.wipe.palette import PaletteState
from asciiwipe.wipe.renderer import WipeRenderer
from asciiwipe.wipe.timeline import sweep_times

__all__ = [
    "AnimationResult",
    "ArtImage",
    "PaletteState",
    "RandomSource",
    "StopReason",
    "WipeAnimation",
    "WipeRenderer",
    "load_art",
    "pick_color",
    "sweep_times",
]
