# rpcdispatch/core/logging/filters.py
from __future__ import annotations
import logging
import time
import threading
from collections import deque, defaultdict
from collections.abc import Callable

from rpcdispatch.core.redaction import redactText

__all__ = ["RecurringSuppressFilter"]

# Upper bound for normalized message keys
MAX_KEY_LEN = 512



class RecurringSuppressFilter(logging.Filter):
    """
    Suppresses recurring identical log messages after `maxPerWindow` occurrences
    within a sliding `windowSeconds`. Emits a summary once the window slides and
    logging resumes for that key.

    Key = (logger name, levelno, normalized message)

    Typical offender is a client hammering an unregistered method, which logs
    the same "method not found" line for every request.

    Thread-safe; uses per-key timestamp deques.
    """
    def __init__(
            self,
            *,
            windowSeconds: int = 60,
            maxPerWindow: int = 5,
            summaryLevel: int = logging.INFO,
            normalize: Callable[[logging.LogRecord], str] | None = None,
            clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__()
        self.windowSeconds = max(1, int(windowSeconds))
        self.maxPerWindow = max(1, int(maxPerWindow))
        self.summaryLevel = int(summaryLevel)
        self.normalize = normalize or self._defaultNormalize
        self._clock = clock

        # Per-key sliding window of timestamps
        self._buckets: dict[tuple[str, int, str], deque[float]] = defaultdict(deque)
        # Suppressed count not yet reported
        self._suppressedCounts: dict[tuple[str, int, str], int] = defaultdict(int)
        self._lock = threading.Lock()

    def _defaultNormalize(self, record: logging.LogRecord) -> str:
        try:
            msg = redactText(record.getMessage())
        except Exception:
            msg = str(record.msg)
        norm = " ".join(str(msg).split())
        if len(norm) > MAX_KEY_LEN:
            norm = norm[:MAX_KEY_LEN] + "..."
        return norm

    def _keyOf(self, record: logging.LogRecord) -> tuple[str, int, str]:
        return (record.name, record.levelno, self.normalize(record))

    def _pruneOld(self, dq: deque[float], now: float) -> None:
        limit = now - self.windowSeconds
        while dq and dq[0] < limit:
            dq.popleft()

    def _emitSummary(self, key: tuple[str, int, str]) -> None:
        suppressedCount = self._suppressedCounts.get(key, 0)
        if suppressedCount <= 0:
            return
        loggerName, _levelno, normMessage = key
        # Reset first, the summary record passes back through this filter
        self._suppressedCounts[key] = 0
        logging.getLogger(loggerName).log(
            self.summaryLevel,
            "Suppressed %d repeated logs: %s",
            suppressedCount,
            normMessage,
            extra={"_noRecurringSuppress": True},
        )

    def _maybeCleanup(self) -> None:
        if len(self._buckets) > 5000:
            # Drop stale keys with empty windows and zero suppressed count
            for key in list(self._buckets.keys())[:2000]:
                if not self._buckets[key] and not self._suppressedCounts.get(key, 0):
                    self._buckets.pop(key, None)
                    self._suppressedCounts.pop(key, None)

    def filter(self, record: logging.LogRecord) -> bool:
        # Allow summaries to pass through
        if getattr(record, "_noRecurringSuppress", False):
            return True

        now = self._clock()
        key = self._keyOf(record)

        with self._lock:
            self._maybeCleanup()
            dq = self._buckets[key]
            self._pruneOld(dq, now)

            if len(dq) < self.maxPerWindow:
                dq.append(now)
                if self._suppressedCounts.get(key, 0) > 0:
                    # Exiting suppression window; report what we dropped
                    self._emitSummary(key)
                return True

            # Over the limit -> suppress and count
            self._suppressedCounts[key] += 1
            dq.append(now)
            return False
