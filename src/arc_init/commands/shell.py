"""Shell command -- install completion scripts and manage RC blocks.

``arc-init shell`` processes each selected shell in the fixed order bash,
zsh, fish, powershell:

1. Write the completion script (skipped when it already exists, unless
   ``--force``).
2. With ``--write-rc``, add the arc block to the shell's RC file (bash and
   zsh only). With ``--uninstall-rc``, remove it instead; removal wins when
   both flags are given.

Failures are advisory: each one is printed to stderr and recorded in that
shell's :class:`~arc_init.models.OperationStatus`, the remaining shells are
still processed, and the command exits 0. A status summary is printed to
stdout at the end.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import typer
from rich.markup import escape

from arc_init.exceptions import ArcInitError
from arc_init.models import CompletionOutcome, OperationStatus, RCOutcome, ShellKind
from arc_init.output import OutputFormat, debug, error, get_output, suggest

if TYPE_CHECKING:
    from arc_init.shell import CompletionFileWriter, RCBlockManager

COMPLETION_EXISTS_REASON = "completion file already exists (use --force to overwrite)"


def select_shells(
    *,
    bash: bool = False,
    zsh: bool = False,
    fish: bool = False,
    powershell: bool = False,
    all_shells: bool = False,
    detected: Optional[ShellKind] = None,
) -> list[ShellKind]:
    """Decide which shells to process.

    Explicit shell flags win. Without any, ``--all`` selects every shell,
    then the detected shell is used, and an unrecognised shell falls back to
    bash and zsh.
    """
    flags = {
        ShellKind.BASH: bash,
        ShellKind.ZSH: zsh,
        ShellKind.FISH: fish,
        ShellKind.POWERSHELL: powershell,
    }
    selected = [kind for kind in ShellKind if flags[kind]]
    if selected:
        return selected
    if all_shells:
        return list(ShellKind)
    if detected is not None:
        return [detected]
    return [ShellKind.BASH, ShellKind.ZSH]


def _record_error(status: OperationStatus, message: str) -> None:
    error(message)
    status.errors.append(message)


def process_shell(
    shell: ShellKind,
    writer: CompletionFileWriter,
    rc_manager: RCBlockManager,
    *,
    force: bool = False,
    write_rc: bool = False,
    uninstall_rc: bool = False,
) -> OperationStatus:
    """Run every requested step for one shell and return its status.

    Never raises :class:`~arc_init.exceptions.ArcInitError`; such errors are
    reported on stderr and collected in ``status.errors``.
    """
    status = OperationStatus(shell=shell)

    try:
        path = writer.write(shell, overwrite=force)
    except ArcInitError as exc:
        _record_error(status, f"{shell.value} completion: {exc}")
    else:
        if path is None:
            status.completion = CompletionOutcome.SKIPPED
            status.completion_path = writer.target(shell).path
            status.reason = COMPLETION_EXISTS_REASON
        else:
            status.completion = CompletionOutcome.WRITTEN
            status.completion_path = path

    if not (write_rc or uninstall_rc):
        return status

    if not shell.supports_rc:
        status.reason = f"RC management is not supported for {shell.value}"
        debug(status.reason)
        return status

    if uninstall_rc:
        try:
            rc_file, removed = rc_manager.uninstall(shell)
        except ArcInitError as exc:
            _record_error(status, f"remove {shell.value} RC: {exc}")
        else:
            status.rc_path = rc_file
            if removed:
                status.rc = RCOutcome.REMOVED
            else:
                status.reason = f"no arc block found in {rc_file}"
    else:
        try:
            rc_file, outcome = rc_manager.ensure(shell, overwrite=force)
        except ArcInitError as exc:
            _record_error(status, f"{shell.value} RC: {exc}")
        else:
            status.rc_path = rc_file
            status.rc = outcome
            if outcome == RCOutcome.SKIPPED:
                status.reason = "RC block already present (use --force to update)"

    return status


_COMPLETION_LABELS = {
    CompletionOutcome.WRITTEN: "[green]INSTALLED[/green]",
    CompletionOutcome.SKIPPED: "[yellow]SKIPPED[/yellow] (already exists, use --force to overwrite)",
}

_RC_LABELS = {
    RCOutcome.ADDED: "[green]ADDED[/green]",
    RCOutcome.UPDATED: "[green]UPDATED[/green]",
    RCOutcome.SKIPPED: "[yellow]SKIPPED[/yellow] (already present, use --force to update)",
    RCOutcome.REMOVED: "[green]REMOVED[/green]",
}


def report_shell_status(statuses: list[OperationStatus]) -> None:
    """Print the per-shell summary to stdout.

    JSON mode prints a list of status objects; other modes print a
    human-readable summary, followed by next-step hints on stderr.
    """
    if not statuses:
        return

    out = get_output()
    if out.format == OutputFormat.JSON:
        out.print_json([s.model_dump(mode="json") for s in statuses])
        return

    out.print_markup("")
    out.print_markup("[bold]=== Shell Completions Status ===[/bold]")
    out.print_markup("")

    for s in statuses:
        out.print_markup(f"[bold]{s.shell.value.upper()}:[/bold]")
        if s.completion is not None:
            label = _COMPLETION_LABELS[s.completion]
            out.print_markup(f"  Completions: {label} {escape(str(s.completion_path))}")
        if s.rc is not None:
            out.print_markup(f"  RC block: {_RC_LABELS[s.rc]} {escape(str(s.rc_path))}")
        elif s.reason and s.reason != COMPLETION_EXISTS_REASON:
            out.print_markup(f"  Note: {escape(s.reason)}")
        for message in s.errors:
            out.print_markup(f"  [red]Error:[/red] {escape(message)}")
        out.print_markup("")

    suggest("If completions are not working, restart your shell")
    suggest("Use --force to overwrite existing files")
    suggest("Use --write-rc to update shell RC files")


def shell_command(
    bash: bool = typer.Option(False, "--bash", help="Install bash completion."),
    zsh: bool = typer.Option(False, "--zsh", help="Install zsh completion."),
    fish: bool = typer.Option(False, "--fish", help="Install fish completion."),
    powershell: bool = typer.Option(
        False, "--powershell", help="Install PowerShell completion."
    ),
    all_shells: bool = typer.Option(
        False, "--all", help="Install completions for all supported shells."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing files and update RC blocks."
    ),
    write_rc: bool = typer.Option(
        False, "--write-rc", help="Append idempotent RC lines to enable completions."
    ),
    uninstall_rc: bool = typer.Option(
        False, "--uninstall-rc", help="Remove RC lines previously added by arc."
    ),
) -> None:
    """Initialize shell completions for arc.

    Installs completion scripts for bash, zsh, fish, and PowerShell. By
    default the current shell is detected from the ``SHELL`` environment
    variable.

    Idempotent: running multiple times is safe. Existing files are not
    overwritten unless --force is used, and RC blocks are added once and
    never duplicated.

    Example::

        arc-init shell
        arc-init shell --all
        arc-init shell --bash --zsh
        arc-init shell --write-rc
        arc-init shell --uninstall-rc
    """
    from arc_init.config import load_environment
    from arc_init.shell import CompletionFileWriter, RCBlockManager, detect_shell

    env = load_environment()
    shells = select_shells(
        bash=bash,
        zsh=zsh,
        fish=fish,
        powershell=powershell,
        all_shells=all_shells,
        detected=detect_shell(env.shell),
    )
    debug(f"Selected shells: {', '.join(s.value for s in shells)}")

    writer = CompletionFileWriter(env)
    rc_manager = RCBlockManager(env)
    statuses = [
        process_shell(
            shell,
            writer,
            rc_manager,
            force=force,
            write_rc=write_rc,
            uninstall_rc=uninstall_rc,
        )
        for shell in shells
    ]
    report_shell_status(statuses)
