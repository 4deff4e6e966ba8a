"""Command descriptor tests."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path

import pytest

from cmdext.runtime import Command, cmd


class TestBuilders:
    """Builder methods return new descriptors and never mutate."""

    def test_cmd_shortcut(self):
        assert cmd("ls") == Command("ls")

    def test_arg_returns_new_command(self):
        base = cmd("git")
        extended = base.arg("status")
        assert base.args == ()
        assert extended.args == ("status",)
        assert extended is not base

    def test_with_args_appends(self):
        command = cmd("git").arg("log").with_args(["-n", "1"])
        assert command.argv() == ["git", "log", "-n", "1"]

    def test_path_arguments(self, tmp_path: Path):
        command = cmd(tmp_path / "tool").arg(tmp_path / "input.txt")
        assert command.program == str(tmp_path / "tool")
        assert command.args == (str(tmp_path / "input.txt"),)

    def test_env_builders(self):
        base = cmd("make").env_var("CC", "clang")
        command = base.envs({"CFLAGS": "-O2"}).env_remove("LDFLAGS")
        assert dict(base.env) == {"CC": "clang"}
        assert dict(command.env) == {"CC": "clang", "CFLAGS": "-O2", "LDFLAGS": None}

    def test_cwd(self, tmp_path: Path):
        command = cmd("pwd").cwd(str(tmp_path))
        assert command.current_dir == tmp_path

    def test_equality(self):
        assert cmd("a").arg("b").env_var("K", "V") == Command("a", ("b",), {"K": "V"})


class TestImmutability:
    """Descriptors cannot be changed after construction."""

    def test_frozen(self):
        command = cmd("ls")
        with pytest.raises(dataclasses.FrozenInstanceError):
            command.program = "rm"  # type: ignore[misc]

    def test_env_is_read_only(self):
        command = cmd("ls").env_var("A", "1")
        with pytest.raises(TypeError):
            command.env["A"] = "2"  # type: ignore[index]

    def test_env_copied_from_caller(self):
        overrides = {"A": "1"}
        command = Command("ls", env=overrides)
        overrides["A"] = "2"
        assert command.env["A"] == "1"


class TestChildEnv:
    """Environment passed to the child process."""

    def test_inherit_without_overrides(self):
        assert cmd("ls").child_env() is None

    def test_overrides_on_top_of_parent(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CMDEXT_PARENT_VAR", "parent")
        env = cmd("ls").env_var("CMDEXT_CHILD_VAR", "child").child_env()
        assert env is not None
        assert env["CMDEXT_PARENT_VAR"] == "parent"
        assert env["CMDEXT_CHILD_VAR"] == "child"

    def test_remove(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CMDEXT_PARENT_VAR", "parent")
        env = cmd("ls").env_remove("CMDEXT_PARENT_VAR").child_env()
        assert env is not None
        assert "CMDEXT_PARENT_VAR" not in env

    def test_parent_untouched(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CMDEXT_PARENT_VAR", "parent")
        cmd("ls").env_remove("CMDEXT_PARENT_VAR").child_env()
        assert os.environ["CMDEXT_PARENT_VAR"] == "parent"


class TestDisplay:
    """Shell-like rendering used in the streaming banner."""

    def test_plain(self):
        assert cmd("echo").arg("hello").display() == "echo hello"

    def test_quoting(self):
        assert cmd("echo").arg("hello world").display() == "echo 'hello world'"

    def test_env_and_cwd(self):
        command = cmd("make").arg("all").env_var("CC", "clang").cwd("/src/my project")
        assert command.display() == "cd '/src/my project' && CC=clang make all"

    def test_env_remove(self):
        command = cmd("ls").env_remove("HOME").env_var("A", "1 2")
        assert command.display() == "env -u HOME A='1 2' ls"

    def test_env_keys_are_quoted(self):
        command = cmd("ls").env_var("odd key", "v").env_remove("x;y")
        assert command.display() == "env -u 'x;y' 'odd key'=v ls"
