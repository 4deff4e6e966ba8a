"""Invocation descriptors.

A Command describes one subprocess launch: program, arguments, environment
overrides and working directory. It is immutable; builder methods return a
new Command, so a descriptor embedded in an error or a result can never be
changed behind the caller's back.

Nothing is validated here. A missing program or directory only surfaces
when the command is run, as a LaunchError.

Example:
    output = cmd("git").with_args(["rev-parse", "HEAD"]).cwd(repo).stdout_string()
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, TextIO, Union

from . import executor
from .description import describe

if TYPE_CHECKING:
    from .executor import CapturedOutput

__all__ = [
    "Command",
    "cmd",
]

StrPath = Union[str, "os.PathLike[str]"]


def _freeze_env(env: Mapping[str, str | None]) -> Mapping[str, str | None]:
    return MappingProxyType(dict(env))


@dataclass(frozen=True)
class Command:
    """Specification of a subprocess to launch.

    Attributes:
        program: Executable name or path (resolved through PATH at launch)
        args: Arguments, excluding the program itself
        env: Environment overrides; a None value removes the variable
        current_dir: Working directory override (None = inherit)
    """

    program: str
    args: tuple[str, ...] = ()
    env: Mapping[str, str | None] = field(default_factory=dict, hash=False)
    current_dir: Path | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "program", os.fspath(self.program))
        object.__setattr__(self, "args", tuple(os.fspath(a) for a in self.args))
        object.__setattr__(self, "env", _freeze_env(self.env))
        if self.current_dir is not None:
            object.__setattr__(self, "current_dir", Path(self.current_dir))

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def arg(self, value: StrPath) -> "Command":
        """Return a copy with one more argument."""
        return replace(self, args=(*self.args, os.fspath(value)))

    def with_args(self, values: Iterable[StrPath]) -> "Command":
        """Return a copy with the given arguments appended."""
        return replace(self, args=(*self.args, *(os.fspath(v) for v in values)))

    def env_var(self, key: str, value: str) -> "Command":
        """Return a copy that sets one environment variable in the child."""
        return self.envs({key: value})

    def envs(self, values: Mapping[str, str]) -> "Command":
        """Return a copy that sets several environment variables in the child."""
        return replace(self, env={**self.env, **values})

    def env_remove(self, key: str) -> "Command":
        """Return a copy that removes an inherited variable from the child."""
        return replace(self, env={**self.env, key: None})

    def cwd(self, path: StrPath) -> "Command":
        """Return a copy that runs in the given directory."""
        return replace(self, current_dir=Path(path))

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def child_env(self) -> dict[str, str] | None:
        """Full environment for the child, or None to inherit the parent's."""
        if not self.env:
            return None
        env = dict(os.environ)
        for key, value in self.env.items():
            if value is None:
                env.pop(key, None)
            else:
                env[key] = value
        return env

    def display(self) -> str:
        """Shell-like one-line rendering, e.g. ``cd /tmp && FOO=1 make all``."""
        parts: list[str] = []
        removed = sorted(k for k, v in self.env.items() if v is None)
        if removed:
            parts.append("env")
            for key in removed:
                parts.extend(["-u", shlex.quote(key)])
        for key, value in sorted((k, v) for k, v in self.env.items() if v is not None):
            parts.append(f"{shlex.quote(key)}={shlex.quote(value)}")
        parts.append(shlex.join(self.argv()))
        line = " ".join(parts)
        if self.current_dir is not None:
            line = f"cd {shlex.quote(str(self.current_dir))} && {line}"
        return line

    def description(self) -> str:
        """Deterministic diagnostic description of this invocation."""
        return describe(self)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run_streaming(self, *, stream: TextIO | None = None) -> None:
        """Run with inherited streams, framed by banners (stderr by default)."""
        executor.run_streaming(self, stream=stream)

    def run_streaming_args(self, *args: StrPath, stream: TextIO | None = None) -> None:
        """Append args, then run in streaming mode."""
        executor.run_streaming_args(self, *args, stream=stream)

    def run_captured(self) -> "CapturedOutput":
        """Run with both output streams captured."""
        return executor.run_captured(self)

    def stdout_string(self) -> str:
        """Run captured and return only the decoded stdout."""
        return executor.stdout_string(self)


def cmd(program: StrPath) -> Command:
    """Shortcut for Command(program)."""
    return Command(os.fspath(program))
