"""Built-in CLI sub-commands for arc-init.

Each module defines one command function that :mod:`arc_init.app`
registers on the root Typer application:

* :mod:`~arc_init.commands.shell` -- ``arc-init shell``: install shell
  completions and manage RC blocks.
"""
