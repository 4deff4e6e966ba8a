"""Runtime module for subprocess invocation and execution.

This module provides immutable invocation descriptors, their diagnostic
descriptions, and the streaming/captured run modes.
"""

from __future__ import annotations

from .command import Command, cmd
from .description import describe, describe_status, describe_with_output, lossy_decode
from .executor import (
    CapturedOutput,
    run_captured,
    run_streaming,
    run_streaming_args,
    stdout_string,
)

__all__ = [
    "Command",
    "cmd",
    "describe",
    "describe_status",
    "describe_with_output",
    "lossy_decode",
    "CapturedOutput",
    "run_captured",
    "run_streaming",
    "run_streaming_args",
    "stdout_string",
]
