# rpcdispatch/core/time.py
from __future__ import annotations
import time

__all__ = ["nowMonotonicNs", "elapsedMicros", "formatProcTime"]



def nowMonotonicNs() -> int:
    """Returns a high-resolution monotonic timestamp in nanoseconds."""
    return time.perf_counter_ns()



def elapsedMicros(startNs: int, endNs: int | None = None) -> int:
    """
    Whole microseconds elapsed since `startNs`, truncated toward zero.
    Never negative, even if the caller passes stamps from different clocks.
    """
    end = nowMonotonicNs() if endNs is None else endNs
    return max(0, (end - startNs) // 1000)



def formatProcTime(micros: int) -> str:
    # e.g. 189 -> "189 us"
    return f"{int(micros)} us"
