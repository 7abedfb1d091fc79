"""Shell detection from the ``$SHELL`` value.

Matching is a case-insensitive substring test so that login-shell names
(``-zsh``), full paths (``/usr/local/bin/bash``) and versioned binaries
(``fish3``) are all recognised.
"""

from __future__ import annotations

from typing import Optional

from arc_init.models import ShellKind

_DETECTION_ORDER = (ShellKind.ZSH, ShellKind.BASH, ShellKind.FISH, ShellKind.POWERSHELL)


def detect_shell(shell_value: str) -> Optional[ShellKind]:
    """Return the shell named by *shell_value*, or ``None`` if unrecognised.

    Args:
        shell_value: Raw ``$SHELL`` contents (usually a path).

    Example::

        >>> detect_shell("/usr/bin/zsh")
        <ShellKind.ZSH: 'zsh'>
        >>> detect_shell("/bin/tcsh") is None
        True
    """
    lowered = shell_value.lower()
    for kind in _DETECTION_ORDER:
        if kind.value in lowered:
            return kind
    if "pwsh" in lowered:
        return ShellKind.POWERSHELL
    return None
