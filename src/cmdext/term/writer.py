"""Scoped terminal coloring over stdout/stderr.

A ColoredWriter wraps a text stream and applies a ColorSpec for the duration
of a body. The reset sequence is written on every exit path of the body, so
color state never leaks into unrelated output.

Whether colors are emitted is decided per call by asking the stream whether
it is an interactive terminal. Streams get swapped at runtime (pytest
capture, redirected hosts), so the answer is never cached.

Example:
    spec = ColorSpec(fg=Color.BLACK, bg=Color.CYAN)
    stderr_with_color(spec, lambda w: w.write("/workspace"))
"""

from __future__ import annotations

import contextlib
import os
import sys
from collections.abc import Callable, Iterator
from typing import TextIO, TypeVar

from ..config import ColorChoice, load_config
from ..errors import TerminalError
from .colors import RESET, ColorSpec

__all__ = [
    "ColoredWriter",
    "stdout_with_color",
    "stderr_with_color",
]

T = TypeVar("T")


def _is_terminal(stream: TextIO) -> bool:
    """Query the stream's terminal-ness; closed or exotic streams are not terminals."""
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


class ColoredWriter:
    """Text stream wrapper with scoped color application.

    Attributes:
        stream: Destination text stream
        choice: Color choice (None = read CMDEXT_COLOR on each query)
    """

    def __init__(self, stream: TextIO, choice: ColorChoice | None = None) -> None:
        self.stream = stream
        self.choice = choice

    @property
    def color_enabled(self) -> bool:
        """Whether color codes are emitted right now."""
        choice = self.choice if self.choice is not None else load_config().color
        if choice is ColorChoice.NEVER:
            return False
        if choice is ColorChoice.ALWAYS:
            return True
        if "NO_COLOR" in os.environ:
            return False
        return _is_terminal(self.stream)

    def write(self, text: str) -> None:
        try:
            self.stream.write(text)
        except (OSError, ValueError) as e:
            raise TerminalError(f"Failed to write to terminal stream: {e}") from e

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")

    def flush(self) -> None:
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise TerminalError(f"Failed to flush terminal stream: {e}") from e

    def _emit_control(self, sequence: str) -> None:
        try:
            self.stream.write(sequence)
        except (OSError, ValueError) as e:
            raise TerminalError(f"Failed to write terminal color sequence: {e}") from e

    def with_color(self, spec: ColorSpec, body: Callable[["ColoredWriter"], T]) -> T:
        """Apply spec, run body with this writer, then always reset.

        Args:
            spec: Colors to apply while body runs
            body: Callable receiving the writer

        Returns:
            Whatever body returns

        Raises:
            TerminalError: If the color could not be set or reset
        """
        with self.colored(spec):
            return body(self)

    @contextlib.contextmanager
    def colored(self, spec: ColorSpec) -> Iterator["ColoredWriter"]:
        """Context manager form of with_color."""
        enabled = self.color_enabled
        if enabled:
            self._emit_control(spec.sequence())
        try:
            yield self
        finally:
            if enabled:
                self._emit_control(RESET)


def stdout_with_color(
    spec: ColorSpec,
    body: Callable[[ColoredWriter], T],
    choice: ColorChoice | None = None,
) -> T:
    """Run body with a colored writer over the current sys.stdout."""
    return ColoredWriter(sys.stdout, choice).with_color(spec, body)


def stderr_with_color(
    spec: ColorSpec,
    body: Callable[[ColoredWriter], T],
    choice: ColorChoice | None = None,
) -> T:
    """Run body with a colored writer over the current sys.stderr."""
    return ColoredWriter(sys.stderr, choice).with_color(spec, body)
