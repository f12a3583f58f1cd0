# rpcdispatch/__init__.py
from __future__ import annotations

from rpcdispatch.core.errors import DuplicateHandlerError
from rpcdispatch.rpc.context import MessageContext
from rpcdispatch.rpc.dispatcher import PROC_TIME_ATTRIBUTE, Dispatcher
from rpcdispatch.rpc.errors import (
    INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR,
)
from rpcdispatch.rpc.handlers import (
    HandlerError, NotificationHandler, RequestHandler,
    notificationHandler, requestHandler,
)
from rpcdispatch.rpc.models import NotificationMessage, RequestMessage, ResponseMessage, RPCError

__all__ = [
    "Dispatcher", "PROC_TIME_ATTRIBUTE", "DuplicateHandlerError", "MessageContext",
    "RequestHandler", "NotificationHandler", "HandlerError",
    "requestHandler", "notificationHandler",
    "RequestMessage", "NotificationMessage", "ResponseMessage", "RPCError",
    "PARSE_ERROR", "INVALID_REQUEST", "METHOD_NOT_FOUND", "INVALID_PARAMS", "INTERNAL_ERROR",
]
