"""
Single-shot delayed callbacks with cancellation.

The collector re-arms one of these after every flush attempt rather than
relying on a fixed-rate interval.
"""

import asyncio
import heapq
import itertools
import threading
from typing import Callable, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """A pending callback that can be cancelled."""

    def cancel(self) -> None:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Runs a callback once after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class ThreadingScheduler:
    """Schedules callbacks on daemon ``threading.Timer`` threads."""

    __slots__ = ("_name",)

    def __init__(self, name: str = "collectlog-flush"):
        self._name = name

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.name = self._name
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """
    Schedules callbacks on an asyncio event loop.

    All callbacks run on the loop's thread, so a collector driven by this
    scheduler never sees concurrent flushes. The loop is resolved lazily
    when none is given, which requires a running loop at call time.
    """

    __slots__ = ("_loop",)

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ManualTimer:
    """Handle returned by ManualScheduler."""

    __slots__ = ("when", "callback", "cancelled")

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Scheduler driven by explicit calls to advance().

    Useful for deterministic tests and for hosts that run their own tick loop.
    """

    __slots__ = ("_now", "_timers", "_sequence")

    def __init__(self):
        self._now = 0.0
        self._timers: List[Tuple[float, int, ManualTimer]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> List[ManualTimer]:
        """Timers that have neither fired nor been cancelled, soonest first."""
        return [timer for _, _, timer in sorted(self._timers) if not timer.cancelled]

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self._now + delay, callback)
        heapq.heappush(self._timers, (timer.when, next(self._sequence), timer))
        return timer

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every timer that comes due.

        Callbacks may schedule new timers; those fire too if they fall within
        the advanced window.

        Returns:
            Number of callbacks run
        """
        deadline = self._now + seconds
        fired = 0
        while self._timers and self._timers[0][0] <= deadline:
            when, _, timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self._now = when
            timer.cancelled = True
            timer.callback()
            fired += 1
        self._now = deadline
        return fired
