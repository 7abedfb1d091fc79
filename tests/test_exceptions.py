"""Tests for arc_init.exceptions -- exit-code mapping."""

from __future__ import annotations

import pytest

from arc_init.exceptions import (
    ArcInitError,
    CompletionWriteError,
    ConfigError,
    GeneratorError,
    RCFileError,
)
from arc_init.exit_codes import EXIT_GENERIC_FAILURE


@pytest.mark.parametrize(
    ("exc_type", "code"),
    [
        (ArcInitError, EXIT_GENERIC_FAILURE),
        (ConfigError, EXIT_GENERIC_FAILURE),
        (CompletionWriteError, EXIT_GENERIC_FAILURE),
        (GeneratorError, EXIT_GENERIC_FAILURE),
        (RCFileError, EXIT_GENERIC_FAILURE),
    ],
)
def test_exit_codes(exc_type: type[ArcInitError], code: int) -> None:
    exc = exc_type("boom")
    assert exc.exit_code == code
    assert str(exc) == "boom"
    assert isinstance(exc, ArcInitError)


def test_exit_code_override() -> None:
    assert RCFileError("x", exit_code=9).exit_code == 9
    assert RCFileError("x").exit_code == EXIT_GENERIC_FAILURE
