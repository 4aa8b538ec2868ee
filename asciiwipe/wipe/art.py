"""ASCII-art image buffer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from asciiwipe.utils.exceptions import ArtLoadError
from asciiwipe.utils.logging_config import get_logger

logger = get_logger(__name__)


def split_art_lines(content: str) -> tuple[str, ...]:
    """Split art text into lines.

    Splits on ``\\n`` only and drops a trailing ``\\r`` from each line. A final
    line terminator does not produce an extra empty line. Trailing whitespace
    and blank lines are kept.
    """
    if not content:
        return ()
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(line[:-1] if line.endswith("\r") else line for line in lines)


@dataclass(frozen=True)
class ArtImage:
    """Immutable multi-line text image."""

    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, content: str) -> ArtImage:
        """Build an image from the raw file contents."""
        return cls(split_art_lines(content))

    @property
    def height(self) -> int:
        """Number of lines."""
        return len(self.lines)

    @property
    def width(self) -> int:
        """Length of the longest line in characters."""
        return max((len(line) for line in self.lines), default=0)

    @property
    def cell_count(self) -> int:
        """Number of characters actually present across all lines."""
        return sum(len(line) for line in self.lines)


def load_art(path: str | Path) -> ArtImage:
    """Read an ASCII-art file.

    Args:
        path: Location of the UTF-8 art file

    Returns:
        The loaded image

    Raises:
        ArtLoadError: If the file is missing, unreadable or not UTF-8

    """
    art_path = Path(path)
    try:
        content = art_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Could not read the ASCII art file at '{art_path}'"
        raise ArtLoadError(msg, {"path": str(art_path), "reason": str(e)}) from e

    image = ArtImage.from_text(content)
    logger.debug(
        "Loaded art from %s (%d lines, width %d)",
        art_path,
        image.height,
        image.width,
    )
    return image
