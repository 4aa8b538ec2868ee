"""Pydantic models for asciiwipe.

Provides validated configuration models for the animation and for logging.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_ART_PATH = Path.home() / ".config" / "asciiwipe" / "ascii"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AnimationConfig(BaseModel):
    """Animation configuration."""

    art_path: Path = Field(
        default=DEFAULT_ART_PATH,
        description="Path to the ASCII-art file",
    )
    step: int = Field(
        default=3,
        ge=1,
        le=100,
        description="Sweep time increment per frame; also scales the frame count",
    )
    frame_delay: float = Field(
        default=0.05,
        ge=0.0,
        le=10.0,
        description="Seconds to sleep after each frame in single-pass mode",
    )
    forever_frame_delay: float = Field(
        default=0.1,
        ge=0.0,
        le=10.0,
        description="Seconds to sleep after each frame in forever mode",
    )
    forever: bool = Field(
        default=False,
        description="Repeat the sweep until stopped",
    )

    @field_validator("art_path", mode="before")
    @classmethod
    def expand_art_path(cls, v: str | Path) -> Path:
        """Expand a leading ~ in the art path."""
        return Path(v).expanduser()

    @property
    def effective_frame_delay(self) -> float:
        """Frame delay for the selected mode."""
        return self.forever_frame_delay if self.forever else self.frame_delay


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(default=None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Write JSON records to the log file",
    )


class Config(BaseModel):
    """Main configuration model."""

    animation: AnimationConfig = Field(
        default_factory=AnimationConfig,
        description="Animation configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
