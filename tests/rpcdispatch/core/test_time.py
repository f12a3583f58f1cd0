# tests/rpcdispatch/core/test_time.py
from __future__ import annotations

from rpcdispatch.core.time import elapsedMicros, formatProcTime, nowMonotonicNs


def test_monotonicClock_neverGoesBack() -> None:
    first = nowMonotonicNs()
    second = nowMonotonicNs()
    assert second >= first


def test_elapsedMicros_truncates() -> None:
    assert elapsedMicros(0, 189_999) == 189
    assert elapsedMicros(1_000, 1_999) == 0


def test_elapsedMicros_neverNegative() -> None:
    assert elapsedMicros(5_000, 1_000) == 0
    assert elapsedMicros(nowMonotonicNs()) >= 0


def test_formatProcTime() -> None:
    assert formatProcTime(189) == "189 us"
    assert formatProcTime(0) == "0 us"
