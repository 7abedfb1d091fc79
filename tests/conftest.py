"""Shared test fixtures for arc-init.

Provides fixtures for an isolated home directory, a resolved
:class:`~arc_init.models.ShellEnvironment`, a recording completion
generator, output state management, and a CLI runner. These fixtures are
automatically discovered by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import pytest

from arc_init.models import ShellEnvironment, ShellKind
from arc_init.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams and the
    test finishes, the cached references become stale. Resetting forces a
    fresh manager on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a fresh directory and clear config-root overrides.

    ``$SHELL`` is set to ``/bin/bash`` so that shell detection is
    deterministic; tests that need another shell override it.

    Returns:
        The temporary home directory.
    """
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home_dir))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("SHELL", "/bin/bash")
    return home_dir


@pytest.fixture
def env(home: Path) -> ShellEnvironment:
    """A ShellEnvironment rooted at the isolated home, without XDG override."""
    return ShellEnvironment(home=home, shell="/bin/bash")


# ---------------------------------------------------------------------------
# Completion generator stand-in
# ---------------------------------------------------------------------------


class RecordingGenerator:
    """Completion generator that writes a short marker script and records calls."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.calls: list[ShellKind] = []
        self.fail_with = fail_with

    def generate(self, stream: TextIO, shell: ShellKind) -> None:
        self.calls.append(shell)
        if self.fail_with is not None:
            raise self.fail_with
        stream.write(f"# {shell.value} completion for arc\n")


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def failing_generator() -> RecordingGenerator:
    """A generator whose every call raises ``RuntimeError("boom")``."""
    return RecordingGenerator(fail_with=RuntimeError("boom"))


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN, colourless OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
