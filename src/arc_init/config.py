"""Environment resolution, XDG paths, and atomic writes.

This module is the only place arc-init reads the process environment:

* **Shell environment** -- :func:`load_environment` captures the home
  directory, the ``XDG_CONFIG_HOME`` override, and ``$SHELL`` into a
  :class:`~arc_init.models.ShellEnvironment` that is passed explicitly to
  the rest of the package.
* **Data directory** -- :func:`get_data_dir` locates where crash logs go.
* **Atomic writes** -- :func:`atomic_write` replaces a file via
  temp-file-then-rename so an interrupted RC rewrite never truncates the
  user's startup file.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from arc_init.exceptions import ConfigError
from arc_init.models import ShellEnvironment

_APP_NAME = "arc-init"


# --- Environment resolution ---


def _home_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the user's home directory or raise :class:`ConfigError`.

    ``HOME`` from *environ* wins when present; otherwise :meth:`Path.home`
    decides.
    """
    if environ is not None and environ.get("HOME"):
        return Path(environ["HOME"])
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError(f"Cannot determine home directory: {exc}") from exc


def load_environment(environ: Optional[Mapping[str, str]] = None) -> ShellEnvironment:
    """Build a :class:`ShellEnvironment` from the process environment.

    An empty ``XDG_CONFIG_HOME`` is treated as unset.

    Args:
        environ: Mapping to read instead of ``os.environ`` (used by tests).

    Returns:
        The resolved environment.

    Raises:
        ConfigError: If the home directory cannot be determined.
    """
    env = os.environ if environ is None else environ
    config_home = env.get("XDG_CONFIG_HOME", "")
    return ShellEnvironment(
        home=_home_dir(env),
        config_root=Path(config_home) if config_home else None,
        shell=env.get("SHELL", ""),
    )


def get_data_dir() -> Path:
    """Return the data directory for crash logs, creating it if necessary.

    ``$XDG_DATA_HOME/arc-init/`` (default ``~/.local/share/arc-init/``).
    """
    env_value = os.environ.get("XDG_DATA_HOME", "")
    base = Path(env_value) if env_value else _home_dir() / ".local" / "share"
    path = base / _APP_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---

FILE_ENCODING = "utf-8"
"""Encoding for reading and writing user files."""

FILE_ERRORS = "surrogateescape"
"""Undecodable bytes round-trip unchanged instead of raising."""


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. An existing file
    keeps its mode; a new one gets the usual umask-derived mode. Bytes that
    were decoded with :data:`FILE_ERRORS` are written back as they were read.
    On any failure the temp file is cleaned up and the error re-raised.
    """
    try:
        mode = path.stat().st_mode & 0o777
    except FileNotFoundError:
        mode = _default_mode()

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding=FILE_ENCODING,
            errors=FILE_ERRORS,
            newline="",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
