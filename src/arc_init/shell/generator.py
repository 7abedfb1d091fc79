"""Completion script generation.

arc-init does not build completion scripts itself. A
:class:`CompletionGenerator` receives an open text stream and a
:class:`~arc_init.models.ShellKind` and writes the script body into the
stream. :class:`TyperCompletionGenerator` is the default implementation; it
emits the same scripts Typer's ``--show-completion`` prints, which call back
into the target program through its ``_<PROG>_COMPLETE`` environment
variable at completion time.
"""

from __future__ import annotations

from typing import Protocol, TextIO

import click
from typer._completion_shared import get_completion_script

from arc_init.exceptions import GeneratorError
from arc_init.models import ShellKind
from arc_init.shell.paths import PROG_NAME


class CompletionGenerator(Protocol):
    """Anything that can stream a completion script for a shell."""

    def generate(self, stream: TextIO, shell: ShellKind) -> None: ...


def complete_var_for(prog_name: str) -> str:
    """Return the completion environment variable Click/Typer use for *prog_name*.

    Example::

        >>> complete_var_for("arc")
        '_ARC_COMPLETE'
    """
    return f"_{prog_name.replace('-', '_').upper()}_COMPLETE"


class TyperCompletionGenerator:
    """Generate completion scripts with Typer's built-in templates.

    Args:
        prog_name: Name of the program being completed.
        complete_var: Environment variable the program reads to switch into
            completion mode. Derived from *prog_name* when omitted.
    """

    def __init__(self, prog_name: str = PROG_NAME, complete_var: str | None = None) -> None:
        self.prog_name = prog_name
        self.complete_var = complete_var or complete_var_for(prog_name)

    def generate(self, stream: TextIO, shell: ShellKind) -> None:
        try:
            script = get_completion_script(
                prog_name=self.prog_name,
                complete_var=self.complete_var,
                shell=shell.value,
            )
        except (click.exceptions.Exit, SystemExit) as exc:
            # Typer exits on an unknown shell: click.exceptions.Exit in current
            # releases, sys.exit in older ones.
            raise GeneratorError(f"Typer cannot generate {shell.value} completion") from exc
        stream.write(script)
        stream.write("\n")
