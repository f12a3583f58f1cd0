# rpcdispatch/core/logging/context.py
from __future__ import annotations
import contextvars
from collections.abc import Iterator
from contextlib import contextmanager

# All log context lives here. Enriched by the dispatcher for the duration of a call.
_logContextVar: contextvars.ContextVar[dict[str, object] | None] = contextvars.ContextVar("rpcdispatch.logctx", default=None)

def setLogContext(**kvs):
    """Set or update per-log context values (method, requestId, etc.)."""
    current = dict(_logContextVar.get() or {}) # use copy
    for key, value in kvs.items():
        if value is not None:
            current[key] = value
    _logContextVar.set(current)

def clearLogContext():
    """Clear context after a request/notification is fully handled."""
    _logContextVar.set(None)

def getLogContext():
    """Return current content dict or None."""
    return _logContextVar.get()

@contextmanager
def logContext(**kvs) -> Iterator[None]:
    """Scoped setLogContext; restores the previous context on exit, even if the body raises."""
    current = dict(_logContextVar.get() or {})
    for key, value in kvs.items():
        if value is not None:
            current[key] = value
    token = _logContextVar.set(current)
    try:
        yield
    finally:
        _logContextVar.reset(token)
