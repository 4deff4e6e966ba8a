"""cmdext - run subprocesses from CLI tools with self-describing failures.

Environment variables:
    CMDEXT_COLOR: Banner colors, auto/always/never (default auto)
    CMDEXT_LOG_DEBUG: Debug logging (default false)

Usage:
    from cmdext import cmd

    cmd("make").arg("all").run_streaming()
    head = cmd("git").with_args(["rev-parse", "HEAD"]).stdout_string()
"""

__version__ = "0.1.0"

from .errors import (
    CommandError,
    InvalidOutputEncodingError,
    LaunchError,
    NonZeroExitError,
    TerminalError,
    WorkingDirectoryError,
)
from .runtime import CapturedOutput, Command, cmd

__all__ = [
    "__version__",
    "cmd",
    "Command",
    "CapturedOutput",
    "CommandError",
    "WorkingDirectoryError",
    "LaunchError",
    "NonZeroExitError",
    "InvalidOutputEncodingError",
    "TerminalError",
]
