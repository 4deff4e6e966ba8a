"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Add src to the Python path
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

IS_WINDOWS = sys.platform == "win32"

posix_only = pytest.mark.skipif(IS_WINDOWS, reason="uses POSIX shell utilities")


class FakeTTY(io.StringIO):
    """StringIO that reports itself as an interactive terminal."""

    def isatty(self) -> bool:
        return True


class BrokenTTY(io.StringIO):
    """Terminal whose writes fail, like a closed pty."""

    def isatty(self) -> bool:
        return True

    def write(self, s: str) -> int:
        raise OSError(5, "Input/output error")


@pytest.fixture(autouse=True)
def clean_color_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's color/logging settings out of the tests."""
    for name in ("CMDEXT_COLOR", "CMDEXT_LOG_DEBUG", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tty() -> FakeTTY:
    return FakeTTY()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


class BrokenPipeStream(io.StringIO):
    """Redirected (non-tty) stream whose reader has gone away."""

    def write(self, s: str) -> int:
        raise BrokenPipeError(32, "Broken pipe")

    def flush(self) -> None:
        raise BrokenPipeError(32, "Broken pipe")


class BreaksAfterFlush(io.StringIO):
    """Non-tty stream that accepts writes until its first flush."""

    broken = False

    def write(self, s: str) -> int:
        if self.broken:
            raise BrokenPipeError(32, "Broken pipe")
        return super().write(s)

    def flush(self) -> None:
        self.broken = True
