"""Terminal color specifications.

Colors are named the way termcolor names them; the escape sequences are
built from termcolor's own code tables so both stay in agreement.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from termcolor import ATTRIBUTES, COLORS, HIGHLIGHTS, RESET

__all__ = [
    "Color",
    "ColorSpec",
    "RESET",
]

_SGR = "\033[%dm"


class Color(str, Enum):
    """The eight basic ANSI colors."""

    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"


@dataclass(frozen=True)
class ColorSpec:
    """Foreground/background colors plus text attributes.

    Attributes:
        fg: Foreground color (None = terminal default)
        bg: Background color (None = terminal default)
        bold: Bold text
        underline: Underlined text
    """

    fg: Color | None = None
    bg: Color | None = None
    bold: bool = False
    underline: bool = False

    def sequence(self) -> str:
        """Return the escape sequence that switches the terminal to this spec."""
        codes: list[int] = []
        if self.bold:
            codes.append(ATTRIBUTES["bold"])
        if self.underline:
            codes.append(ATTRIBUTES["underline"])
        if self.bg is not None:
            codes.append(HIGHLIGHTS[f"on_{self.bg.value}"])
        if self.fg is not None:
            codes.append(COLORS[self.fg.value])
        return "".join(_SGR % code for code in codes)
