"""arc-init -- Set up the shell environment for the ``arc`` command.

The ``arc-init shell`` command installs tab-completion scripts for bash,
zsh, fish, and PowerShell, and can add (or remove) a small marker-delimited
block in the user's shell startup files so the completions load on launch.

Typical workflow::

    arc-init shell                 # detect $SHELL and install completions
    arc-init shell --all --write-rc
    arc-init shell --uninstall-rc

Every step is idempotent: re-running never overwrites existing completion
files or duplicates RC blocks unless ``--force`` is given.

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: Environment resolution and atomic file writes.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    shell: Completion file writer and RC block manager.
"""

__version__ = "0.1.0"
