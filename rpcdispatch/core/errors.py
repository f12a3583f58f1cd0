# rpcdispatch/core/errors.py
from __future__ import annotations
from typing import Literal

__all__ = ["HandlerKind", "DuplicateHandlerError"]

HandlerKind = Literal["request", "notification"]



class DuplicateHandlerError(ValueError):
    """Raised when two handlers claim the same method name within one namespace."""
    def __init__(self, method: str, kind: HandlerKind):
        super().__init__(f"Cannot register a duplicate handler for {kind} {method}")
        self.method = method
        self.kind = kind
