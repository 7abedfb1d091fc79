"""Shell integration core: completion files and RC blocks.

* :class:`~arc_init.shell.writer.CompletionFileWriter` writes completion
  scripts for bash, zsh, fish and PowerShell.
* :class:`~arc_init.shell.rcblock.RCBlockManager` adds and removes the
  marker-delimited block in ``.bashrc``/``.zshrc``.
* :func:`~arc_init.shell.detect.detect_shell` maps ``$SHELL`` to a
  :class:`~arc_init.models.ShellKind`.
"""

from arc_init.shell.detect import detect_shell
from arc_init.shell.generator import CompletionGenerator, TyperCompletionGenerator
from arc_init.shell.paths import CompletionTarget, completion_target, rc_path
from arc_init.shell.rcblock import (
    RC_END,
    RC_START,
    RCBlock,
    RCBlockManager,
    build_rc_block,
    remove_rc_block,
    upsert_rc_block,
)
from arc_init.shell.writer import CompletionFileWriter

__all__ = [
    "RC_END",
    "RC_START",
    "CompletionFileWriter",
    "CompletionGenerator",
    "CompletionTarget",
    "RCBlock",
    "RCBlockManager",
    "TyperCompletionGenerator",
    "build_rc_block",
    "completion_target",
    "detect_shell",
    "rc_path",
    "remove_rc_block",
    "upsert_rc_block",
]
