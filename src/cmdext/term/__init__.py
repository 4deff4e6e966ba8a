"""Terminal output helpers: color specs and scoped colored writers."""

from __future__ import annotations

from .colors import RESET, Color, ColorSpec
from .writer import ColoredWriter, stderr_with_color, stdout_with_color

__all__ = [
    "RESET",
    "Color",
    "ColorSpec",
    "ColoredWriter",
    "stdout_with_color",
    "stderr_with_color",
]
