# rpcdispatch/rpc/dispatcher.py
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from rpcdispatch.core.errors import DuplicateHandlerError, HandlerKind
from rpcdispatch.core.logging import logContext
from rpcdispatch.core.time import elapsedMicros, formatProcTime, nowMonotonicNs
from rpcdispatch.rpc.context import MessageContext
from rpcdispatch.rpc.errors import METHOD_NOT_FOUND
from rpcdispatch.rpc.handlers import NotificationHandler, RequestHandler
from rpcdispatch.rpc.models import NotificationMessage, RequestMessage, ResponseMessage

__all__ = ["PROC_TIME_ATTRIBUTE", "Dispatcher"]

logger = logging.getLogger(__name__)


PROC_TIME_ATTRIBUTE = "xProcTime"



def _declaredNames(names: Iterable[str], kind: HandlerKind) -> tuple[str, ...]:
    # A bare str is iterable too and would register one name per character
    if isinstance(names, str):
        raise TypeError(f"{kind} handler must declare its names as a collection, not the str {names!r}")
    return tuple(names)



def _claimNames(
    current: dict[str, object],
    names: Iterable[str],
    handler: object,
    kind: HandlerKind,
) -> dict[str, object]:
    """
    Returns a copy of `current` with every name bound to `handler`.
    Raises DuplicateHandlerError on the first clash; `current` is never touched.
    """
    updated = dict(current)
    for name in names:
        if not isinstance(name, str) or not name:
            raise ValueError(f"{kind} method name must be a non-empty string; got {name!r}")
        if name in updated:
            raise DuplicateHandlerError(name, kind)
        updated[name] = handler
    return updated



class Dispatcher:
    """
    Routes JSON-RPC 2.0 requests and notifications to registered handlers.

    Request and notification names live in separate namespaces, so the same
    method name may have one handler of each kind.

    Registration is serialized by a lock and publishes a fresh mapping once all
    names of the call are accepted. Lookups read whichever mapping is current
    without locking; a successful register() is visible to every later lookup.

    With reportProcTime(True) each handler response gets a non-standard
    "xProcTime" attribute holding the handler's run time, e.g. "189 us".
    """
    def __init__(self, *, reportProcTime: bool = False):
        self._requestHandlers: dict[str, RequestHandler] = {}
        self._notificationHandlers: dict[str, NotificationHandler] = {}
        self._reportProcTime = bool(reportProcTime)
        self._registerLock = threading.Lock()

    @classmethod
    def fromSettings(cls) -> Dispatcher:
        from rpcdispatch.app.settings import settingsBool
        return cls(reportProcTime=settingsBool("dispatch.reportProcTime", False))

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def registerRequestHandler(self, handler: RequestHandler) -> None:
        if not isinstance(handler, RequestHandler):
            raise TypeError(f"{type(handler).__name__} is not a RequestHandler")
        names = _declaredNames(handler.handledRequests(), "request")
        with self._registerLock:
            self._requestHandlers = _claimNames(self._requestHandlers, names, handler, "request")  # type: ignore[assignment]
        logger.debug("Registered request handler %r for %s", handler, sorted(names))

    def registerNotificationHandler(self, handler: NotificationHandler) -> None:
        if not isinstance(handler, NotificationHandler):
            raise TypeError(f"{type(handler).__name__} is not a NotificationHandler")
        names = _declaredNames(handler.handledNotifications(), "notification")
        with self._registerLock:
            self._notificationHandlers = _claimNames(self._notificationHandlers, names, handler, "notification")  # type: ignore[assignment]
        logger.debug("Registered notification handler %r for %s", handler, sorted(names))

    def register(self, handler: RequestHandler | NotificationHandler) -> None:
        """
        Registers `handler` under every namespace it serves. An object that is both a
        request and a notification handler is registered in both or in neither.
        """
        isRequest = isinstance(handler, RequestHandler)
        isNotification = isinstance(handler, NotificationHandler)
        if not (isRequest or isNotification):
            raise TypeError(f"{type(handler).__name__} is neither a RequestHandler nor a NotificationHandler")

        requestNames = _declaredNames(handler.handledRequests(), "request") if isRequest else ()  # type: ignore[union-attr]
        notificationNames = _declaredNames(handler.handledNotifications(), "notification") if isNotification else ()  # type: ignore[union-attr]

        with self._registerLock:
            # Validate both before publishing either
            newRequests = _claimNames(self._requestHandlers, requestNames, handler, "request") if isRequest else None
            newNotifications = _claimNames(self._notificationHandlers, notificationNames, handler, "notification") if isNotification else None
            if newRequests is not None:
                self._requestHandlers = newRequests  # type: ignore[assignment]
            if newNotifications is not None:
                self._notificationHandlers = newNotifications  # type: ignore[assignment]

        if isRequest:
            logger.debug("Registered request handler %r for %s", handler, sorted(requestNames))
        if isNotification:
            logger.debug("Registered notification handler %r for %s", handler, sorted(notificationNames))

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    def handledRequests(self) -> frozenset[str]:
        return frozenset(self._requestHandlers)

    def handledNotifications(self) -> frozenset[str]:
        return frozenset(self._notificationHandlers)

    def getRequestHandler(self, name: str) -> RequestHandler | None:
        return self._requestHandlers.get(name)

    def getNotificationHandler(self, name: str) -> NotificationHandler | None:
        return self._notificationHandlers.get(name)

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def dispatchRequest(self, request: RequestMessage, ctx: MessageContext | None = None) -> ResponseMessage:
        if not isinstance(request, RequestMessage):
            raise TypeError("request must be a RequestMessage")

        with logContext(method=request.method, requestId=request.id):
            handler = self.getRequestHandler(request.method)
            if handler is None:
                logger.debug("No request handler for '%s'", request.method)
                return ResponseMessage.failure(METHOD_NOT_FOUND, request.id)

            if not self._reportProcTime:
                return handler.process(request, ctx)

            startNs = nowMonotonicNs()
            response = handler.process(request, ctx)
            response.appendNonStdAttribute(PROC_TIME_ATTRIBUTE, formatProcTime(elapsedMicros(startNs)))
            return response

    def dispatchNotification(self, notification: NotificationMessage, ctx: MessageContext | None = None) -> None:
        if not isinstance(notification, NotificationMessage):
            raise TypeError("notification must be a NotificationMessage")

        with logContext(method=notification.method):
            handler = self.getNotificationHandler(notification.method)
            if handler is None:
                # Notifications are never answered, not even with an error
                logger.debug("Dropped notification '%s': no handler", notification.method)
                return
            handler.process(notification, ctx)

    def dispatch(
        self,
        message: RequestMessage | NotificationMessage,
        ctx: MessageContext | None = None,
    ) -> ResponseMessage | None:
        """Dispatches by message kind; returns a response for requests and None for notifications."""
        if isinstance(message, RequestMessage):
            return self.dispatchRequest(message, ctx)
        if isinstance(message, NotificationMessage):
            self.dispatchNotification(message, ctx)
            return None
        raise TypeError(f"Cannot dispatch {type(message).__name__}")

    # ------------------------------------------------------------------ #
    # Processing time reporting
    # ------------------------------------------------------------------ #

    def reportProcTime(self, enabled: bool) -> None:
        self._reportProcTime = bool(enabled)

    def reportsProcTime(self) -> bool:
        return self._reportProcTime
