"""Execution engine: streaming and captured run modes.

Both modes are synchronous. Each call blocks until the child exits and owns
its own pipes; there is no timeout or cancellation, callers that need one
must kill the process themselves.

- Streaming mode lets the child inherit stdin/stdout/stderr so a human can
  watch its output, and frames it with two banners on stderr.
- Captured mode redirects stdout/stderr into pipes, reads both to the end
  and returns them. stdin is /dev/null.

Every failure raises a CommandError subclass whose message embeds the full
invocation (and the captured output, when there is any).
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from ..errors import (
    InvalidOutputEncodingError,
    LaunchError,
    NonZeroExitError,
    TerminalError,
    WorkingDirectoryError,
)
from ..term.colors import Color, ColorSpec
from ..term.writer import ColoredWriter
from .description import describe, describe_status, describe_with_output, lossy_decode

if TYPE_CHECKING:
    from .command import Command, StrPath

__all__ = [
    "CapturedOutput",
    "run_streaming",
    "run_streaming_args",
    "run_captured",
    "stdout_string",
]

logger = logging.getLogger(__name__)

CWD_BANNER_SPEC = ColorSpec(fg=Color.BLACK, bg=Color.CYAN)
SUCCESS_BANNER_SPEC = ColorSpec(fg=Color.BLACK, bg=Color.GREEN)
FAILURE_BANNER_SPEC = ColorSpec(fg=Color.BLACK, bg=Color.RED)
END_OUTPUT = " END OUTPUT "


@dataclass(frozen=True)
class CapturedOutput:
    """Result of a successful captured run.

    Attributes:
        command: The invocation that produced this output
        returncode: Exit status (always 0)
        stdout: Decoded stdout text
        stderr: Raw stderr bytes (diagnostic only, not guaranteed to be text)
    """

    command: "Command"
    returncode: int
    stdout: str
    stderr: bytes

    @property
    def stderr_text(self) -> str:
        """stderr decoded lossily for display."""
        return lossy_decode(self.stderr)


def _launch_error(command: "Command", exc: Exception) -> LaunchError:
    return LaunchError(f"Failed to execute command ({describe(command)}): {exc}", command)


def _non_zero_exit(command: "Command", returncode: int) -> NonZeroExitError:
    return NonZeroExitError(
        f"Process did not exit successfully ({describe_status(returncode)}) "
        f"({describe(command)})",
        command,
        returncode,
    )


def run_streaming(command: "Command", *, stream: TextIO | None = None) -> None:
    """Run a command with inherited streams, framed by banners.

    Writes the working directory (cyan field) and the invocation before the
    child starts, and an END OUTPUT banner (green on success, red on
    failure) after it exits.

    Args:
        command: Invocation to run
        stream: Banner destination (default: sys.stderr at call time)

    Raises:
        WorkingDirectoryError: If the current directory cannot be determined
        LaunchError: If the process cannot be started or waited on
        NonZeroExitError: If the process exits unsuccessfully
        TerminalError: If a banner cannot be written
    """
    writer = ColoredWriter(stream if stream is not None else sys.stderr)

    try:
        current_dir = os.getcwd()
    except OSError as e:
        raise WorkingDirectoryError(
            f"Failed to get current working directory: {e}", command
        ) from e

    writer.with_color(CWD_BANNER_SPEC, lambda w: w.write(current_dir))
    writer.writeln(f" {command.display()}")
    # The child writes straight to the inherited descriptors.
    writer.flush()

    try:
        with subprocess.Popen(
            command.argv(),
            env=command.child_env(),
            cwd=command.current_dir,
        ) as process:
            logger.debug(
                f"Started subprocess pid={process.pid} "
                f"argv={command.argv()} cwd={command.current_dir}"
            )
            returncode = process.wait()
    except (OSError, ValueError) as e:
        logger.debug(f"Failed to launch {command.program!r}: {e}")
        raise _launch_error(command, e) from e

    logger.debug(f"Subprocess completed pid={process.pid} returncode={returncode}")

    success = returncode == 0
    spec = SUCCESS_BANNER_SPEC if success else FAILURE_BANNER_SPEC
    try:
        writer.with_color(spec, lambda w: w.write(END_OUTPUT))
        writer.writeln()
        writer.flush()
    except TerminalError as e:
        if success:
            raise
        # The process failure outranks the broken banner stream.
        raise _non_zero_exit(command, returncode) from e

    if not success:
        raise _non_zero_exit(command, returncode)


def run_streaming_args(
    command: "Command",
    *args: "StrPath",
    stream: TextIO | None = None,
) -> None:
    """Append args to the command, then run it in streaming mode."""
    run_streaming(command.with_args(args), stream=stream)


def run_captured(command: "Command") -> CapturedOutput:
    """Run a command, capturing stdout and stderr.

    Args:
        command: Invocation to run

    Returns:
        CapturedOutput holding the command, exit status, stdout text and
        raw stderr bytes

    Raises:
        LaunchError: If the process cannot be started or waited on
        NonZeroExitError: If the process exits unsuccessfully
        InvalidOutputEncodingError: If stdout is not valid UTF-8
    """
    try:
        with subprocess.Popen(
            command.argv(),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=command.child_env(),
            cwd=command.current_dir,
        ) as process:
            logger.debug(
                f"Started subprocess pid={process.pid} "
                f"argv={command.argv()} cwd={command.current_dir}"
            )
            stdout, stderr = process.communicate()
            returncode = process.returncode
    except (OSError, ValueError) as e:
        logger.debug(f"Failed to launch {command.program!r}: {e}")
        raise _launch_error(command, e) from e

    logger.debug(
        f"Subprocess completed pid={process.pid} returncode={returncode} "
        f"stdout_bytes={len(stdout)} stderr_bytes={len(stderr)}"
    )

    if returncode != 0:
        raise NonZeroExitError(
            f"Process did not exit successfully ({describe_status(returncode)}) "
            f"({describe_with_output(command, stdout, stderr)})",
            command,
            returncode,
            stdout=stdout,
            stderr=stderr,
        )

    try:
        text = stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidOutputEncodingError(
            f"Process stdout is not valid UTF-8 "
            f"({describe_with_output(command, stdout, stderr)})",
            command,
            stdout=stdout,
            stderr=stderr,
        ) from e

    return CapturedOutput(
        command=command,
        returncode=returncode,
        stdout=text,
        stderr=stderr,
    )


def stdout_string(command: "Command") -> str:
    """Run a command captured and return its stdout text."""
    return run_captured(command).stdout
