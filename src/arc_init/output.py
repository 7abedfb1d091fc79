"""Output formatting with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- the shell status summary only (or its JSON form with
  ``--json``), so it can be piped.
* **stderr** -- per-shell errors, next-step hints, and debug messages.
* **TTY detection** -- Rich markup is rendered when stdout is a terminal and
  stripped when it is piped.
* **Colour control** -- ``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` all
  turn colour off.

:class:`OutputManager` is built once in :func:`~arc_init.app.main_callback`
and installed with :func:`set_output`. The module-level :func:`error`,
:func:`suggest` and :func:`debug` helpers delegate to that instance.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text


class OutputFormat(str, Enum):
    """How the status summary is rendered.

    ``AUTO`` becomes ``RICH`` on an interactive, colour-capable stdout and
    ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes summary data to stdout and diagnostics to stderr.

    Args:
        format: Requested format; ``AUTO`` is resolved at construction.
        no_color: Disable colour and Rich styling.
        quiet: Hide next-step hints. Errors are always shown.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            self._format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        else:
            self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        """The resolved output format."""
        return self._format

    @property
    def stderr_console(self) -> Console:
        """Console bound to stderr, shared with the logging handler."""
        return self._stderr

    # --- stdout ---

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_json(self, data: Any) -> None:
        """Print *data* as indented JSON."""
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def print_markup(self, text: str) -> None:
        """Print one summary line; markup is rendered in RICH mode, stripped otherwise."""
        if self._format == OutputFormat.RICH:
            self._stdout.print(text, highlight=False)
        else:
            self.print_data(Text.from_markup(text).plain)

    # --- stderr ---

    def error(self, message: str) -> None:
        """Print an error. Never suppressed."""
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def suggest(self, message: str) -> None:
        """Print a dimmed next-step hint. Suppressed by ``--quiet``."""
        if self._quiet:
            return
        formatted = f"→ {message}"
        if self._no_color:
            print(formatted, file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[dim]{escape(formatted)}[/dim]")

    def debug(self, message: str) -> None:
        """Print a debug line. Only shown with ``--verbose``."""
        if not self._verbose:
            return
        if self._no_color:
            print(f"[debug] {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# --- Global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the global instance so the next :func:`get_output` builds a fresh one."""
    global _output
    _output = None


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
