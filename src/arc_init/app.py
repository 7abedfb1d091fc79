"""Typer application and CLI entry point for arc-init.

This module builds the top-level Typer application, registers the built-in
``shell`` sub-command, and defines :func:`main`, the console-script entry
point declared in ``pyproject.toml``. Unhandled exceptions are written to a
crash log under the data directory.

See Also:
    :mod:`arc_init.commands.shell`: The ``shell`` sub-command.
    :mod:`arc_init.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from arc_init import __version__
from arc_init.commands.shell import shell_command
from arc_init.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="arc-init",
    help="Initialize arc components.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("shell")(shell_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"arc-init {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route ``arc_init`` log records to stderr through Rich when verbose."""
    from rich.logging import RichHandler

    from arc_init.output import get_output

    logger = logging.getLogger("arc_init")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    if verbose:
        handler = RichHandler(
            console=get_output().stderr_console,
            show_time=False,
            show_path=False,
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Initialize arc components.

    Installs the global :class:`~arc_init.output.OutputManager` from the
    output flags and configures logging before any sub-command runs.
    """
    from arc_init.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )
    _configure_logging(verbose)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from arc_init.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``arc-init`` console script.

    Unhandled :class:`~arc_init.exceptions.ArcInitError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from arc_init.exceptions import ArcInitError
        from arc_init.output import error

        if isinstance(exc, ArcInitError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
