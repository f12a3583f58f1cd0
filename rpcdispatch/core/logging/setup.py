# rpcdispatch/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers

from rpcdispatch.app.settings import settings, settingsBool
from .formatters import DevFormatter, JsonFormatter, RedactingFormatter
from .filters import RecurringSuppressFilter

__all__ = ["configureLogging"]



def configureLogging() -> None:
    """
    Initiate the global logging configuration from settings.

    Dev (debug.devModeEnabled):
      - Console pretty logs (DEBUG)
      - Optional JSON file log (DEBUG)

    Prod:
      - Console INFO
      - Optional JSON file log INFO with rotation
      - Optional recurring suppression (toggle)

    Secrets are scrubbed from every handler's output.
    """
    devMode = settingsBool("debug.devModeEnabled", False)
    rootLevel = logging.DEBUG if devMode else logging.INFO

    root = logging.getLogger()
    # Reset handlers to avoid duplicate logs when called twice (pytest re-runs etc.)
    root.handlers.clear()
    root.setLevel(rootLevel)

    handlers: list[logging.Handler] = []

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(RedactingFormatter(DevFormatter()))
    handlers.append(consoleHandler)

    if settingsBool("logging.file.enabled", False):
        fileHandler = logging.handlers.RotatingFileHandler(
            str(settings("logging.file.path", "rpcdispatch.log")),
            maxBytes=int(settings("logging.file.maxBytes", 10 * 1024 * 1024)),
            backupCount=int(settings("logging.file.backupCount", 5)),
            encoding="utf-8",
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(RedactingFormatter(JsonFormatter()))
        handlers.append(fileHandler)

    # Optional recurring suppression (disabled by default)
    if settingsBool("debug.suppressRecurringMessages.enabled", False):
        # Resolve summaryLevel string like "INFO" -> logging.INFO, fallback safe
        levelName = str(settings("debug.suppressRecurringMessages.summaryLevel", "INFO")).upper()
        summaryLevel = getattr(logging, levelName, logging.INFO)

        suppressFilter = RecurringSuppressFilter(
            windowSeconds=int(settings("debug.suppressRecurringMessages.windowSeconds", 60)),
            maxPerWindow=int(settings("debug.suppressRecurringMessages.maxPerWindow", 5)),
            summaryLevel=summaryLevel,
        )
        for handler in handlers:
            handler.addFilter(suppressFilter)

    for handler in handlers:
        root.addHandler(handler)
