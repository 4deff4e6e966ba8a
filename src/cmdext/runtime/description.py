"""Diagnostic descriptions of invocations.

These renderings are embedded in every failure message, so none of the
functions here may raise, whatever bytes a process wrote.
"""

from __future__ import annotations

import signal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .command import Command

__all__ = [
    "describe",
    "describe_with_output",
    "describe_status",
    "lossy_decode",
]


def lossy_decode(data: bytes) -> str:
    """Decode UTF-8, replacing invalid sequences with U+FFFD."""
    return data.decode("utf-8", errors="replace")


def describe(command: "Command") -> str:
    """Render an invocation as a deterministic one-line description.

    Environment overrides are sorted by key so that equal descriptors
    always render identically.

    Example:
        program = 'echo', args = ['hello'], envs = {}, current_dir = None
    """
    envs = dict(sorted(command.env.items()))
    current_dir = str(command.current_dir) if command.current_dir is not None else None
    return (
        f"program = {command.program!r}, "
        f"args = {list(command.args)!r}, "
        f"envs = {envs!r}, "
        f"current_dir = {current_dir!r}"
    )


def describe_with_output(command: "Command", stdout: bytes, stderr: bytes) -> str:
    """Render an invocation together with its captured output streams."""
    return (
        f"{describe(command)}, "
        f"stdout = {lossy_decode(stdout)!r}, "
        f"stderr = {lossy_decode(stderr)!r}"
    )


def describe_status(returncode: int) -> str:
    """Render a subprocess return code.

    Negative return codes mean the child was terminated by a signal (POSIX).
    """
    if returncode >= 0:
        return f"exit status: {returncode}"
    signum = -returncode
    try:
        name = signal.Signals(signum).name
    except ValueError:
        return f"signal: {signum}"
    return f"signal: {signum} ({name})"
