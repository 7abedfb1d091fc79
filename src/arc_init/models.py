"""Canonical Pydantic models shared across all arc-init modules.

**Environment models** -- the explicit inputs to every path resolver:
    :class:`ShellKind` and :class:`ShellEnvironment`.

**Result models** -- produced by the ``shell`` command and rendered in the
final summary:
    :class:`CompletionOutcome`, :class:`RCOutcome`, and
    :class:`OperationStatus`.

All models use Pydantic v2. Result models are created fresh per invocation
and never persisted; they serialise to JSON for ``--json`` output.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Environment ---


class ShellKind(str, enum.Enum):
    """Shells that arc-init can install completions for.

    Declaration order is the processing order of the ``shell`` command.
    """

    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    POWERSHELL = "powershell"

    @property
    def supports_rc(self) -> bool:
        """Whether arc-init manages an RC block for this shell."""
        return self in (ShellKind.BASH, ShellKind.ZSH)


class ShellEnvironment(BaseModel):
    """Resolved environment passed explicitly into path resolution.

    Built once per invocation by :func:`arc_init.config.load_environment`
    so that the core never reads ``os.environ`` itself.

    Example::

        ShellEnvironment(home=Path("/home/ada"), config_root=None, shell="/bin/zsh")
    """

    model_config = ConfigDict(frozen=True)

    home: Path = Field(description="The user's home directory")
    config_root: Optional[Path] = Field(
        default=None,
        description="Override for the config root (XDG_CONFIG_HOME); "
        "defaults to ~/.config when unset",
    )
    shell: str = Field(default="", description="Raw value of $SHELL")

    @property
    def effective_config_root(self) -> Path:
        """The config root after applying the ``~/.config`` default."""
        if self.config_root is not None:
            return self.config_root
        return self.home / ".config"


# --- Results ---


class CompletionOutcome(str, enum.Enum):
    """What happened to a shell's completion file."""

    WRITTEN = "written"
    SKIPPED = "skipped"


class RCOutcome(str, enum.Enum):
    """What happened to a shell's RC block."""

    ADDED = "added"
    UPDATED = "updated"
    SKIPPED = "skipped"
    REMOVED = "removed"


class OperationStatus(BaseModel):
    """Per-shell record of everything the ``shell`` command did.

    ``None`` outcomes mean the step was not attempted or failed; failures
    are listed in ``errors``.
    """

    shell: ShellKind
    completion: Optional[CompletionOutcome] = None
    completion_path: Optional[Path] = None
    rc: Optional[RCOutcome] = None
    rc_path: Optional[Path] = None
    reason: Optional[str] = None
    errors: list[str] = Field(default_factory=list)
