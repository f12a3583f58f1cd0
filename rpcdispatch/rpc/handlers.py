# rpcdispatch/rpc/handlers.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from rpcdispatch.rpc.context import MessageContext
from rpcdispatch.rpc.models import NotificationMessage, RequestMessage, ResponseMessage, RPCError

__all__ = [
    "RequestHandler", "NotificationHandler", "HandlerError",
    "FunctionRequestHandler", "FunctionNotificationHandler",
    "requestHandler", "notificationHandler",
]

logger = logging.getLogger(__name__)



@runtime_checkable
class RequestHandler(Protocol):
    def handledRequests(self) -> Iterable[str]: ...
    def process(self, request: RequestMessage, ctx: MessageContext | None) -> ResponseMessage: ...



@runtime_checkable
class NotificationHandler(Protocol):
    def handledNotifications(self) -> Iterable[str]: ...
    def process(self, notification: NotificationMessage, ctx: MessageContext | None) -> None: ...



class HandlerError(Exception):
    """
    Raised from a function-backed request handler to answer with a protocol error
    instead of a result. Any other exception propagates to the caller of dispatch.
    """
    def __init__(self, error: RPCError):
        if not isinstance(error, RPCError):
            raise TypeError("error must be an RPCError")
        super().__init__(f"{error.code}: {error.message}")
        self.error = error



RequestFn = Callable[[Any, MessageContext | None], Any]
NotificationFn = Callable[[Any, MessageContext | None], Any]



def _normalizeNames(names: Iterable[str]) -> tuple[str, ...]:
    if isinstance(names, str):
        raise TypeError(f"names must be a collection of method names, not the str {names!r}")
    out = tuple(names)
    if not out:
        raise ValueError("handler must declare at least one method name")
    for name in out:
        if not isinstance(name, str) or not name:
            raise ValueError(f"method name must be a non-empty string; got {name!r}")
    return out



@dataclass(frozen=True)
class FunctionRequestHandler:
    """
    Adapts a plain `fn(params, ctx)` to the RequestHandler protocol.
    A returned ResponseMessage is passed through as-is, anything else becomes the result.
    """
    names: tuple[str, ...]
    fn: RequestFn = field(repr=False)

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise TypeError("fn must be callable")
        object.__setattr__(self, "names", _normalizeNames(self.names))

    def handledRequests(self) -> tuple[str, ...]:
        return self.names

    def process(self, request: RequestMessage, ctx: MessageContext | None) -> ResponseMessage:
        try:
            out = self.fn(request.params, ctx)
        except HandlerError as err:
            logger.debug("Handler for '%s' answered with error %d", request.method, err.error.code)
            return ResponseMessage.failure(err.error, request.id)
        if isinstance(out, ResponseMessage):
            return out
        return ResponseMessage.success(out, request.id)



@dataclass(frozen=True)
class FunctionNotificationHandler:
    """Adapts a plain `fn(params, ctx)` to the NotificationHandler protocol; return value is ignored."""
    names: tuple[str, ...]
    fn: NotificationFn = field(repr=False)

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise TypeError("fn must be callable")
        object.__setattr__(self, "names", _normalizeNames(self.names))

    def handledNotifications(self) -> tuple[str, ...]:
        return self.names

    def process(self, notification: NotificationMessage, ctx: MessageContext | None) -> None:
        self.fn(notification.params, ctx)



def requestHandler(*names: str):
    """
    Decorator turning `fn(params, ctx)` into a FunctionRequestHandler for `names`.
    With no names, the function's own name is used.

        @requestHandler("echo")
        def echo(params, ctx):
            return params
    """
    def deco(fn: RequestFn) -> FunctionRequestHandler:
        return FunctionRequestHandler(names=names or (fn.__name__,), fn=fn)
    return deco



def notificationHandler(*names: str):
    """Decorator counterpart of requestHandler for notifications."""
    def deco(fn: NotificationFn) -> FunctionNotificationHandler:
        return FunctionNotificationHandler(names=names or (fn.__name__,), fn=fn)
    return deco
