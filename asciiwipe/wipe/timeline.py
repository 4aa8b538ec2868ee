"""Sweep time range for one pass of the wipe."""

from __future__ import annotations

DEFAULT_STEP = 3


def frame_count(image_height: int, step: int = DEFAULT_STEP) -> int:
    """Half-width of the sweep range for an image of the given height."""
    return image_height * step


def sweep_times(image_height: int, step: int = DEFAULT_STEP) -> list[int]:
    """All t values visited in one pass, from -frames to +frames.

    Args:
        image_height: Number of lines in the image
        step: Increment between consecutive t values

    Returns:
        The ordered t values, always containing 0

    """
    if step < 1:
        msg = f"step must be positive, got {step}"
        raise ValueError(msg)
    frames = frame_count(image_height, step)
    return list(range(-frames, frames + 1, step))
