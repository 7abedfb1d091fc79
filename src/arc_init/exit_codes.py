"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Per-shell failures inside ``arc-init shell`` are advisory and never change
the exit status; these codes only apply to errors that abort the whole
invocation, such as an unresolvable home directory. Usage errors exit 2
through Click itself.
"""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INTERRUPTED = 130
"""The user cancelled the command with Ctrl-C."""
