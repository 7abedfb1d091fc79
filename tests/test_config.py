"""Tests for arc_init.config -- environment resolution, data dir, atomic writes."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from arc_init.config import atomic_write, get_data_dir, load_environment
from arc_init.exceptions import ConfigError


# ---------------------------------------------------------------------------
# Environment resolution
# ---------------------------------------------------------------------------


class TestLoadEnvironment:
    def test_explicit_mapping(self, tmp_path: Path) -> None:
        env = load_environment(
            {
                "HOME": str(tmp_path),
                "XDG_CONFIG_HOME": str(tmp_path / "cfg"),
                "SHELL": "/bin/zsh",
            }
        )
        assert env.home == tmp_path
        assert env.config_root == tmp_path / "cfg"
        assert env.effective_config_root == tmp_path / "cfg"
        assert env.shell == "/bin/zsh"

    def test_empty_xdg_is_unset(self, tmp_path: Path) -> None:
        env = load_environment({"HOME": str(tmp_path), "XDG_CONFIG_HOME": ""})
        assert env.config_root is None
        assert env.effective_config_root == tmp_path / ".config"
        assert env.shell == ""

    def test_reads_process_environment(self, home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHELL", "/usr/bin/fish")
        env = load_environment()
        assert env.home == home
        assert env.config_root is None
        assert env.shell == "/usr/bin/fish"

    def test_missing_home_raises_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _no_home(cls):
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(Path, "home", classmethod(_no_home))

        with pytest.raises(ConfigError, match="home directory"):
            load_environment({})


# ---------------------------------------------------------------------------
# Data directory
# ---------------------------------------------------------------------------


class TestDataDir:
    def test_xdg_data_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
        result = get_data_dir()
        assert result == tmp_path / "data" / "arc-init"
        assert result.is_dir()

    def test_default_under_home(self, home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        result = get_data_dir()
        assert result == home / ".local" / "share" / "arc-init"
        assert result.is_dir()


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"
        atomic_write(target, "hello\n")
        assert target.read_text() == "hello\n"

    def test_replaces_and_keeps_mode(self, tmp_path: Path) -> None:
        target = tmp_path / ".bashrc"
        target.write_text("old")
        os.chmod(target, 0o640)

        atomic_write(target, "new")

        assert target.read_text() == "new"
        assert target.stat().st_mode & 0o777 == 0o640

    def test_new_file_follows_umask(self, tmp_path: Path) -> None:
        old = os.umask(0o022)
        try:
            atomic_write(tmp_path / "arc.bash", "x")
        finally:
            os.umask(old)
        assert (tmp_path / "arc.bash").stat().st_mode & 0o777 == 0o644

    def test_surrogate_escaped_bytes_round_trip(self, tmp_path: Path) -> None:
        target = tmp_path / ".bashrc"
        text = b"caf\xe9\r\n".decode("utf-8", "surrogateescape")

        atomic_write(target, text)

        assert target.read_bytes() == b"caf\xe9\r\n"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        atomic_write(tmp_path / "a", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["a"]

    def test_failure_cleans_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        target = tmp_path / "a"
        target.write_text("keep")

        def _fail(src, dst):
            raise OSError("rename failed")

        monkeypatch.setattr(os, "replace", _fail)

        with pytest.raises(OSError, match="rename failed"):
            atomic_write(target, "lost")

        assert target.read_text() == "keep"
        assert [p.name for p in tmp_path.iterdir()] == ["a"]
