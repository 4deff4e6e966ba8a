"""cmdext environment variable configuration.

Environment variables:
    CMDEXT_COLOR: When banners may use terminal colors
        - auto = only when the stream is an interactive terminal (default)
        - always = always emit color codes
        - never = plain text only
        - invalid values fall back to auto

    CMDEXT_LOG_DEBUG: Debug logging
        - true/1/yes/on = enabled (DEBUG level for the cmdext namespace)
        - false/0/no = disabled (default, INFO level)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

__all__ = ["Config", "ColorChoice", "load_config", "get_config", "reload_config"]


class ColorChoice(Enum):
    """When a writer may emit color codes.

    - AUTO: only when the destination stream is an interactive terminal
    - ALWAYS: unconditionally
    - NEVER: plain text only
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def from_string(cls, value: str) -> "ColorChoice":
        """Parse a choice name.

        Args:
            value: Choice string (auto/always/never)

        Returns:
            The matching ColorChoice, AUTO for invalid values
        """
        value = value.lower().strip()
        for choice in cls:
            if choice.value == value:
                return choice
        return cls.AUTO


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_color(value: str | None) -> ColorChoice:
    """Parse the color choice environment variable."""
    if not value:
        return ColorChoice.AUTO
    return ColorChoice.from_string(value)


@dataclass
class Config:
    """cmdext configuration.

    Attributes:
        color: Color choice for terminal writers
        log_debug: Enable DEBUG logging
    """

    color: ColorChoice = ColorChoice.AUTO
    log_debug: bool = False

    def __repr__(self) -> str:
        return f"Config(color={self.color.value}, log_debug={self.log_debug})"


def load_config() -> Config:
    """Load configuration from the environment."""
    return Config(
        color=_parse_color(os.environ.get("CMDEXT_COLOR")),
        log_debug=_parse_bool(os.environ.get("CMDEXT_LOG_DEBUG"), default=False),
    )


# Global instance (lazily loaded)
_config: Config | None = None


def get_config() -> Config:
    """Return the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload the configuration (used by tests)."""
    global _config
    _config = load_config()
    return _config
