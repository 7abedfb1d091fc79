"""Completion file writer.

:class:`CompletionFileWriter` puts one completion script per shell on disk.
The write policy is idempotent: an existing file is left untouched unless
``overwrite`` is requested, so re-running ``arc-init shell`` never clobbers
a script the user has edited.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from arc_init.config import atomic_write
from arc_init.exceptions import ArcInitError, CompletionWriteError, GeneratorError
from arc_init.models import ShellEnvironment, ShellKind
from arc_init.shell.generator import CompletionGenerator, TyperCompletionGenerator
from arc_init.shell.paths import PROG_NAME, CompletionTarget, completion_target

logger = logging.getLogger(__name__)


class CompletionFileWriter:
    """Writes completion scripts to their per-shell default locations.

    Args:
        env: Resolved environment used for path resolution.
        generator: Produces the script bodies. Defaults to
            :class:`~arc_init.shell.generator.TyperCompletionGenerator`.
        prog_name: Program name used in completion file names.

    Example::

        writer = CompletionFileWriter(load_environment())
        path = writer.write(ShellKind.FISH)
        if path is None:
            print("already installed")
    """

    def __init__(
        self,
        env: ShellEnvironment,
        generator: Optional[CompletionGenerator] = None,
        prog_name: str = PROG_NAME,
    ) -> None:
        self._env = env
        self._generator = generator or TyperCompletionGenerator(prog_name)
        self._prog_name = prog_name

    def target(self, shell: ShellKind) -> CompletionTarget:
        """Return the resolved completion location for *shell*."""
        return completion_target(shell, self._env, self._prog_name)

    def write(self, shell: ShellKind, overwrite: bool = False) -> Optional[Path]:
        """Write the completion script for *shell*.

        The target directory is always created (with parents), even when the
        file itself ends up being skipped. The script is generated in memory
        and written atomically, so a failed run leaves no file behind.

        Args:
            shell: Shell to generate the script for.
            overwrite: Replace an existing completion file.

        Returns:
            The written path, or ``None`` if the file already existed and
            *overwrite* was false.

        Raises:
            CompletionWriteError: If the directory or file cannot be created.
            GeneratorError: If the generator fails.
        """
        target = self.target(shell)
        try:
            target.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CompletionWriteError(f"cannot create {target.directory}: {_reason(exc)}") from exc

        path = target.path
        if not overwrite and path.exists():
            logger.debug("Skipping %s completion: %s already exists", shell.value, path)
            return None

        buffer = io.StringIO()
        try:
            self._generator.generate(buffer, shell)
        except ArcInitError:
            raise
        except Exception as exc:
            raise GeneratorError(f"generating {shell.value} completion failed: {exc}") from exc

        try:
            atomic_write(path, buffer.getvalue())
        except OSError as exc:
            raise CompletionWriteError(f"cannot write {path}: {_reason(exc)}") from exc

        logger.debug("Wrote %s completion to %s", shell.value, path)
        return path


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)
