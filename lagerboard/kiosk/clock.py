#!filepath: lagerboard/kiosk/clock.py
"""
Time sources for the kiosk.

The rotation engine never reads the system time or creates timers itself;
it goes through a Clock so tests can drive hours of ticks instantly.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Clock(Protocol):
    def monotonic(self) -> float:
        """Seconds on a clock that never jumps (staleness, uptime)."""
        ...

    def now(self) -> datetime:
        """Local wall-clock time (clock readout, "today")."""
        ...

    async def sleep(self, seconds: float) -> None:
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class SystemClock:
    """Real time, timers on the running asyncio loop."""

    def monotonic(self) -> float:
        return asyncio.get_running_loop().time()

    def now(self) -> datetime:
        return datetime.now()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class _ManualHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """
    Simulated time. Nothing moves until advance() (or sleep()) is called;
    callbacks whose deadline has been reached then run in deadline order.
    """

    def __init__(self, start: Optional[datetime] = None):
        self._t = 0.0
        self._wall0 = start or datetime(2026, 1, 5, 8, 0, 0)
        self._seq = itertools.count()
        self._due: List[Tuple[float, int, Callable[[], None], _ManualHandle]] = []

    def monotonic(self) -> float:
        return self._t

    def now(self) -> datetime:
        return self._wall0 + timedelta(seconds=self._t)

    async def sleep(self, seconds: float) -> None:
        self.advance(max(0.0, seconds))
        # let tasks spawned by the tick (refreshes) make progress
        await asyncio.sleep(0)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ManualHandle()
        heapq.heappush(self._due, (self._t + delay, next(self._seq), callback, handle))
        return handle

    def advance(self, seconds: float) -> None:
        target = self._t + seconds
        while self._due and self._due[0][0] <= target:
            deadline, _, callback, handle = heapq.heappop(self._due)
            self._t = max(self._t, deadline)
            if not handle.cancelled:
                callback()
        self._t = target

    @property
    def pending(self) -> int:
        return sum(1 for *_, h in self._due if not h.cancelled)
