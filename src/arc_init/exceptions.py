"""Exception hierarchy for arc-init.

All exceptions inherit from :class:`ArcInitError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`arc_init.exit_codes`.
The ``shell`` command catches the per-shell errors below, reports them on
stderr and carries on with the next shell. Anything that escapes to
:func:`arc_init.app.main` exits with the error's code.

Subclass hierarchy::

    ArcInitError (exit 1)
    +-- ConfigError           (exit 1)
    +-- CompletionWriteError  (exit 1)
    +-- GeneratorError        (exit 1)
    +-- RCFileError           (exit 1)
"""

from arc_init.exit_codes import EXIT_GENERIC_FAILURE


class ArcInitError(Exception):
    """Base exception for all arc-init errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(ArcInitError):
    """Raised when the environment cannot be resolved (e.g. no home directory)."""


class CompletionWriteError(ArcInitError):
    """Raised when a completion directory or file cannot be created."""


class GeneratorError(ArcInitError):
    """Raised when the completion generator fails to produce a script."""


class RCFileError(ArcInitError):
    """Raised when a shell RC file cannot be read or written.

    Also covers a missing RC file during block removal.
    """
