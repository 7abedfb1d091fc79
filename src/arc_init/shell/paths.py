"""Completion and RC file locations for each supported shell.

Each :class:`~arc_init.models.ShellKind` has one resolver function; the
tables :data:`COMPLETION_RESOLVERS` and :data:`RC_RESOLVERS` map kinds to
resolvers. Every resolver takes the explicit
:class:`~arc_init.models.ShellEnvironment` and never touches
``os.environ``.

Default completion locations for the ``arc`` program::

    bash        <config-root>/bash/completions/arc.bash
    zsh         ~/.zsh/completions/_arc
    fish        <config-root>/fish/completions/arc.fish
    powershell  <config-root>/powershell/arc.ps1

where ``<config-root>`` is ``$XDG_CONFIG_HOME`` or ``~/.config``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from arc_init.models import ShellEnvironment, ShellKind

PROG_NAME = "arc"
"""Program whose completions are installed."""


@dataclass(frozen=True)
class CompletionTarget:
    """Where a completion script lives: a directory and a file name."""

    directory: Path
    filename: str

    @property
    def path(self) -> Path:
        return self.directory / self.filename


# --- Completion targets ---


def _bash_target(env: ShellEnvironment, prog_name: str) -> CompletionTarget:
    return CompletionTarget(env.effective_config_root / "bash" / "completions", f"{prog_name}.bash")


def _zsh_target(env: ShellEnvironment, prog_name: str) -> CompletionTarget:
    # zsh has no XDG convention; the directory must be on $fpath.
    return CompletionTarget(env.home / ".zsh" / "completions", f"_{prog_name}")


def _fish_target(env: ShellEnvironment, prog_name: str) -> CompletionTarget:
    return CompletionTarget(env.effective_config_root / "fish" / "completions", f"{prog_name}.fish")


def _powershell_target(env: ShellEnvironment, prog_name: str) -> CompletionTarget:
    return CompletionTarget(env.effective_config_root / "powershell", f"{prog_name}.ps1")


COMPLETION_RESOLVERS: dict[ShellKind, Callable[[ShellEnvironment, str], CompletionTarget]] = {
    ShellKind.BASH: _bash_target,
    ShellKind.ZSH: _zsh_target,
    ShellKind.FISH: _fish_target,
    ShellKind.POWERSHELL: _powershell_target,
}


def completion_target(
    shell: ShellKind, env: ShellEnvironment, prog_name: str = PROG_NAME
) -> CompletionTarget:
    """Resolve the completion script location for *shell*."""
    return COMPLETION_RESOLVERS[shell](env, prog_name)


# --- RC files ---


def _bash_rc(env: ShellEnvironment) -> Path:
    bashrc = env.home / ".bashrc"
    if not bashrc.exists():
        return env.home / ".bash_profile"
    return bashrc


def _zsh_rc(env: ShellEnvironment) -> Path:
    return env.home / ".zshrc"


RC_RESOLVERS: dict[ShellKind, Callable[[ShellEnvironment], Path]] = {
    ShellKind.BASH: _bash_rc,
    ShellKind.ZSH: _zsh_rc,
}


def rc_path(shell: ShellKind, env: ShellEnvironment) -> Optional[Path]:
    """Return the RC file for *shell*, or ``None`` if RC management is unsupported.

    bash prefers ``~/.bashrc`` and falls back to ``~/.bash_profile`` when
    ``.bashrc`` does not exist.
    """
    resolver = RC_RESOLVERS.get(shell)
    if resolver is None:
        return None
    return resolver(env)


def home_relative(path: Path, env: ShellEnvironment, prefix: str = "$HOME") -> str:
    """Render *path* relative to the home directory for use inside shell code.

    Example::

        home_relative(Path("/home/ada/.zsh"), env)        # "$HOME/.zsh"
        home_relative(Path("/home/ada/.zsh"), env, "~")   # "~/.zsh"
        home_relative(Path("/etc/zsh"), env)              # "/etc/zsh"
    """
    try:
        relative = path.relative_to(env.home)
    except ValueError:
        return path.as_posix()
    return f"{prefix}/{relative.as_posix()}"
