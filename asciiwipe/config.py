"""Configuration management for asciiwipe.

Configuration is loaded hierarchically from defaults → environment → CLI.
There is no configuration file.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from asciiwipe.models import Config
from asciiwipe.utils.exceptions import ConfigurationError
from asciiwipe.utils.logging_config import setup_logging

ENV_MAPPINGS: dict[str, str] = {
    "ASCIIWIPE_ART_PATH": "animation.art_path",
    "ASCIIWIPE_STEP": "animation.step",
    "ASCIIWIPE_FRAME_DELAY": "animation.frame_delay",
    "ASCIIWIPE_FOREVER_FRAME_DELAY": "animation.forever_frame_delay",
    "ASCIIWIPE_FOREVER": "animation.forever",
    "ASCIIWIPE_LOG_LEVEL": "observability.log_level",
    "ASCIIWIPE_LOG_FILE": "observability.log_file",
    "ASCIIWIPE_STRUCTURED_LOGGING": "observability.structured_logging",
}

# Values that must stay strings even when they look numeric
_STRING_PATHS = {
    "animation.art_path",
    "observability.log_level",
    "observability.log_file",
}

_BOOL_PATHS = {
    "animation.forever",
    "observability.structured_logging",
}

# Global configuration instance
_config_manager: ConfigManager | None = None


def _parse_env_value(raw: str, path: str) -> bool | int | float | str:
    if path in _STRING_PATHS:
        return raw.upper() if path == "observability.log_level" else raw

    low = raw.lower()
    if path in _BOOL_PATHS:
        if low in {"true", "1", "yes", "on"}:
            return True
        if low in {"false", "0", "no", "off"}:
            return False
        return raw
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        return raw


def _set_nested(d: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    cur = d
    for p in parts[:-1]:
        cur = cur.setdefault(p, {})
    cur[parts[-1]] = value


class ConfigManager:
    """Builds and holds the validated configuration."""

    def __init__(
        self,
        overrides: dict[str, Any] | None = None,
        configure_logging: bool = True,
    ):
        """Initialize configuration manager.

        Args:
            overrides: Nested dict of CLI-level overrides (highest priority)
            configure_logging: Whether to apply the observability settings

        """
        self.overrides = overrides or {}
        self.config = self._load_config()
        if configure_logging:
            self._setup_logging()

    def _load_config(self) -> Config:
        """Load configuration from defaults, environment and overrides."""
        config_data: dict[str, Any] = {}
        config_data = self._merge_config(config_data, self._get_env_config())
        config_data = self._merge_config(config_data, self.overrides)

        try:
            return Config(**config_data)
        except PydanticValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

    def _get_env_config(self) -> dict[str, Any]:
        """Get configuration from environment variables."""
        env_config: dict[str, Any] = {}
        for env_name, cfg_path in ENV_MAPPINGS.items():
            raw = os.getenv(env_name)
            if raw is None:
                continue
            _set_nested(env_config, cfg_path, _parse_env_value(raw, cfg_path))
        return env_config

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Merge configuration dictionaries recursively."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result

    def _setup_logging(self) -> None:
        setup_logging(self.config.observability)


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config


def init_config(
    overrides: dict[str, Any] | None = None,
    configure_logging: bool = True,
) -> ConfigManager:
    """Initialize the global configuration manager."""
    global _config_manager
    _config_manager = ConfigManager(overrides, configure_logging=configure_logging)
    return _config_manager


def reset_config() -> None:
    """Drop the global configuration (for testing)."""
    global _config_manager
    _config_manager = None
