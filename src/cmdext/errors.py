"""Exceptions raised by the execution layer.

Every message is self-contained: it embeds the full invocation and, where
the process produced any, its captured output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .runtime.command import Command

__all__ = [
    "CommandError",
    "WorkingDirectoryError",
    "LaunchError",
    "NonZeroExitError",
    "InvalidOutputEncodingError",
    "TerminalError",
]


class CommandError(Exception):
    """Base exception for command execution failures.

    Attributes:
        command: The invocation that failed (None when not tied to one)
        message: Human readable message
    """

    def __init__(self, message: str, command: "Command | None" = None) -> None:
        self.message = message
        self.command = command
        super().__init__(message)


class WorkingDirectoryError(CommandError):
    """The current working directory could not be determined."""
    pass


class LaunchError(CommandError):
    """The OS failed to start the process or to wait for it."""
    pass


class NonZeroExitError(CommandError):
    """The process ran to completion but reported failure.

    Attributes:
        returncode: Exit status reported by the OS
        stdout: Captured stdout bytes (None in streaming mode)
        stderr: Captured stderr bytes (None in streaming mode)
    """

    def __init__(
        self,
        message: str,
        command: "Command",
        returncode: int,
        stdout: bytes | None = None,
        stderr: bytes | None = None,
    ) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message, command)


class InvalidOutputEncodingError(CommandError):
    """The process succeeded but its stdout is not valid UTF-8.

    Attributes:
        stdout: The raw stdout bytes
        stderr: The raw stderr bytes
    """

    def __init__(
        self,
        message: str,
        command: "Command",
        stdout: bytes,
        stderr: bytes,
    ) -> None:
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message, command)


class TerminalError(CommandError):
    """Setting or resetting terminal colors failed; the stream is broken."""
    pass
