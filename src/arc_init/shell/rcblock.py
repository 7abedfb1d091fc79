"""RC block management -- idempotent marker blocks in shell startup files.

arc-init owns exactly one region of a user's ``.bashrc``/``.zshrc``::

    # >>> arc init >>>
    # Arc zsh completions
    fpath+=(~/.zsh/completions)
    autoload -Uz compinit
    compinit
    # <<< arc init <<<

The block is found by literal substring search for the two marker lines,
never by parsing shell syntax. When a file somehow holds several blocks, the
first start marker and the first end marker are taken as the boundary; no
attempt is made to merge or deduplicate.

Low-level operations (:func:`upsert_rc_block`, :func:`remove_rc_block`) act
on a path and a rendered block. :class:`RCBlockManager` binds them to the
per-shell RC paths and payloads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from arc_init.config import FILE_ENCODING, FILE_ERRORS, atomic_write
from arc_init.exceptions import RCFileError
from arc_init.models import RCOutcome, ShellEnvironment, ShellKind
from arc_init.shell.paths import PROG_NAME, completion_target, home_relative, rc_path

logger = logging.getLogger(__name__)

RC_START = "# >>> arc init >>>"
"""First line of the managed block."""

RC_END = "# <<< arc init <<<"
"""Last line of the managed block."""

BACKUP_SUFFIX = ".arc.bak"
"""Suffix of the one-copy backup taken before the first edit of an RC file."""


@dataclass(frozen=True)
class RCBlock:
    """A managed block: the marker lines around a fixed payload."""

    payload: tuple[str, ...]

    def render(self) -> str:
        """Return the block text, ending with a newline."""
        return "\n".join((RC_START, *self.payload, RC_END)) + "\n"


def has_block(content: str) -> bool:
    """Return True when both marker lines occur in *content*."""
    return RC_START in content and RC_END in content


def find_block(content: str) -> Optional[tuple[int, int]]:
    """Locate the managed block in *content*.

    Returns:
        ``(start, end)`` offsets spanning the start marker through the end
        marker inclusive, or ``None`` when either marker is missing or the
        first end marker precedes the first start marker.
    """
    start = content.find(RC_START)
    end = content.find(RC_END)
    if start == -1 or end == -1 or end < start:
        return None
    return start, end + len(RC_END)


def _read(path: Path) -> str:
    # Line endings and undecodable bytes are kept so rewrites only touch the block.
    with path.open("r", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="") as fh:
        return fh.read()


def _backup(path: Path, content: str) -> None:
    backup = path.with_name(path.name + BACKUP_SUFFIX)
    try:
        backup.write_text(content, encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="")
    except OSError as exc:
        logger.warning("Could not back up %s to %s: %s", path, backup, exc)
    else:
        logger.debug("Backed up %s to %s", path, backup)


def upsert_rc_block(path: Path, block: str, overwrite: bool = False) -> RCOutcome:
    """Insert *block* into the RC file at *path* unless it is already there.

    * File missing -- it is created containing ``"\\n" + block``. The parent
      directory must already exist.
    * Both markers present -- nothing is written and ``SKIPPED`` is
      returned. With *overwrite*, a block that differs from *block* is
      replaced in place and ``UPDATED`` is returned.
    * Markers absent -- unless *overwrite* is set, the original content is
      first copied to ``<path>.arc.bak`` (best-effort), then ``"\\n" + block``
      is appended.

    Args:
        path: RC file to edit.
        block: Rendered block, normally from :meth:`RCBlock.render`.
        overwrite: Update an existing block and skip the backup.

    Returns:
        ``ADDED``, ``UPDATED`` or ``SKIPPED``.

    Raises:
        RCFileError: If the file cannot be read or written.
    """
    if path.exists():
        try:
            current = _read(path)
        except OSError as exc:
            raise RCFileError(f"cannot read {path}: {exc.strerror or exc}") from exc

        if has_block(current):
            if not overwrite:
                return RCOutcome.SKIPPED
            return _replace_block(path, current, block)

        if not overwrite:
            _backup(path, current)

    try:
        with path.open("a", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="") as fh:
            fh.write("\n" + block)
    except OSError as exc:
        raise RCFileError(f"cannot write {path}: {exc.strerror or exc}") from exc
    logger.debug("Appended arc block to %s", path)
    return RCOutcome.ADDED


def _replace_block(path: Path, current: str, block: str) -> RCOutcome:
    span = find_block(current)
    if span is None:
        logger.warning("Markers in %s are out of order; leaving it unchanged", path)
        return RCOutcome.SKIPPED
    start, end = span
    replacement = block.rstrip("\n")
    if current[start:end] == replacement:
        return RCOutcome.SKIPPED
    try:
        atomic_write(path, current[:start] + replacement + current[end:])
    except OSError as exc:
        raise RCFileError(f"cannot write {path}: {exc.strerror or exc}") from exc
    logger.debug("Updated arc block in %s", path)
    return RCOutcome.UPDATED


def remove_rc_block(path: Path) -> bool:
    """Remove the managed block from the RC file at *path*.

    The text from the start marker through the end marker is cut out, the
    rest is stripped of surrounding whitespace and written back with a
    single trailing newline. A file without a well-formed block is left
    byte-for-byte unchanged.

    Returns:
        True if a block was removed, False if there was nothing to remove.

    Raises:
        RCFileError: If the file is missing, unreadable, or cannot be
            rewritten.
    """
    try:
        content = _read(path)
    except FileNotFoundError as exc:
        raise RCFileError(f"{path} not found") from exc
    except OSError as exc:
        raise RCFileError(f"cannot read {path}: {exc.strerror or exc}") from exc

    span = find_block(content)
    if span is None:
        logger.debug("No arc block in %s", path)
        return False

    start, end = span
    remaining = (content[:start] + content[end:]).strip() + "\n"
    try:
        atomic_write(path, remaining)
    except OSError as exc:
        raise RCFileError(f"cannot write {path}: {exc.strerror or exc}") from exc
    logger.debug("Removed arc block from %s", path)
    return True


# --- Per-shell payloads ---


def _bash_payload(env: ShellEnvironment, prog_name: str) -> tuple[str, ...]:
    script = home_relative(completion_target(ShellKind.BASH, env, prog_name).path, env)
    return (
        "# Arc bash completions",
        f'if [ -f "{script}" ]; then',
        f'  . "{script}"',
        "fi",
    )


def _zsh_payload(env: ShellEnvironment, prog_name: str) -> tuple[str, ...]:
    directory = home_relative(completion_target(ShellKind.ZSH, env, prog_name).directory, env, "~")
    return (
        "# Arc zsh completions",
        f"fpath+=({directory})",
        "autoload -Uz compinit",
        "compinit",
    )


_PAYLOADS = {
    ShellKind.BASH: _bash_payload,
    ShellKind.ZSH: _zsh_payload,
}


def build_rc_block(shell: ShellKind, env: ShellEnvironment, prog_name: str = PROG_NAME) -> RCBlock:
    """Return the block that loads *shell* completions.

    Raises:
        ValueError: If *shell* has no RC support.
    """
    payload = _PAYLOADS.get(shell)
    if payload is None:
        raise ValueError(f"RC management is not supported for {shell.value}")
    return RCBlock(payload(env, prog_name))


class RCBlockManager:
    """Adds and removes the arc block in the RC file of bash and zsh.

    fish and PowerShell have no RC management; callers should check
    :attr:`ShellKind.supports_rc` first.

    Args:
        env: Resolved environment used to locate RC files.
        prog_name: Program whose completions the block loads.
    """

    def __init__(self, env: ShellEnvironment, prog_name: str = PROG_NAME) -> None:
        self._env = env
        self._prog_name = prog_name

    def rc_path(self, shell: ShellKind) -> Path:
        path = rc_path(shell, self._env)
        if path is None:
            raise ValueError(f"RC management is not supported for {shell.value}")
        return path

    def ensure(self, shell: ShellKind, overwrite: bool = False) -> tuple[Path, RCOutcome]:
        """Make sure the RC file of *shell* carries the arc block.

        The RC file's directory is created first; a failure there surfaces
        as the write error from :func:`upsert_rc_block`.

        Returns:
            The RC path and the outcome of :func:`upsert_rc_block`.
        """
        path = self.rc_path(shell)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.debug("Could not create %s: %s", path.parent, exc)
        block = build_rc_block(shell, self._env, self._prog_name).render()
        return path, upsert_rc_block(path, block, overwrite)

    def uninstall(self, shell: ShellKind) -> tuple[Path, bool]:
        """Remove the arc block from the RC file of *shell*.

        Returns:
            The RC path and whether a block was removed.
        """
        path = self.rc_path(shell)
        return path, remove_rc_block(path)
