"""Logical clocks supplying ``now`` to every operation."""

import threading
import time
from typing import Protocol


class LogicalClock(Protocol):
    def now(self) -> int: ...


class SystemClock:
    """Unix seconds, clamped so successive readings never decrease."""

    def __init__(self):
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, int(time.time()))
            return self._last


class ManualClock:
    """Deterministic clock for tests and replays."""

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("logical time is unsigned")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int = 1) -> int:
        if seconds < 0:
            raise ValueError("logical time never decreases")
        self._now += seconds
        return self._now

    def set(self, value: int) -> None:
        if value < self._now:
            raise ValueError(f"cannot move clock back from {self._now} to {value}")
        self._now = value


def build_clock(kind: str) -> LogicalClock:
    if kind == "manual":
        return ManualClock()
    return SystemClock()
