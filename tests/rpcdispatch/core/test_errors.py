# tests/rpcdispatch/core/test_errors.py
from __future__ import annotations

from rpcdispatch.core.errors import DuplicateHandlerError


def test_duplicateHandlerError_carriesMethodAndKind() -> None:
    err = DuplicateHandlerError("echo", "notification")
    assert err.method == "echo"
    assert err.kind == "notification"
    assert str(err) == "Cannot register a duplicate handler for notification echo"
    assert isinstance(err, ValueError)
