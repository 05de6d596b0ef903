"""Clock abstraction for real-time and simulated frame scheduling.

The wall animation never calls ``time`` or the event loop directly. It
asks an injected TimeSource for monotonic time and for deferred callbacks,
so the same renderer runs against asyncio in the app and against a
deterministic simulated clock in tests and headless renders.

Real-time usage:
    ts = RealTimeSource()
    handle = ts.call_later(0.01, renderer.frame)  # needs a running loop

Simulated time usage:
    ts = SimTimeSource(start=0.0)
    ts.call_later(0.5, lambda: fired.append(ts.monotonic()))
    ts.advance(0.5)  # runs the callback with monotonic() == 0.5
"""

from __future__ import annotations

import asyncio
import heapq
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol, Union

__all__ = [
    "TimerHandle",
    "TimeSource",
    "RealTimeSource",
    "SimTimeSource",
]


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class TimeSource(Protocol):
    """Protocol for monotonic time, async sleep and deferred callbacks."""

    def monotonic(self) -> float:
        """Return monotonic time in seconds."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Sleep for the specified number of seconds."""
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* once after *delay* seconds."""
        ...


class RealTimeSource:
    """Real-time implementation using time.monotonic and the asyncio loop."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        # Raises RuntimeError outside a running loop, same as asyncio itself
        loop = asyncio.get_running_loop()
        return loop.call_later(max(0.0, float(delay)), callback)


@dataclass(slots=True)
class _SimTimer:
    callback: Callable[[], None]
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


_Waiter = Union["asyncio.Future[None]", _SimTimer]


class SimTimeSource:
    """Deterministic simulated clock.

    Features:
    - Starts at a configurable time (default t0=0.0)
    - advance(dt) steps time forward, then fires due timers and sleepers
      in due-time order
    - set_time(t) sets absolute sim time (forward only)
    - call_later(delay, cb) registers a timer that fires on advance
    - sleep(sec) registers an awaitable waiter

    Timers scheduled from inside a firing callback with a due time at or
    before the current time fire within the same advance() call.
    """

    def __init__(self, *, start: float = 0.0) -> None:
        self._monotonic_time: float = float(start)
        # Priority queue of (due_time, seq, waiter)
        self._waiters: list[tuple[float, int, _Waiter]] = []
        self._seq: int = 0

    def monotonic(self) -> float:
        return self._monotonic_time

    def set_time(self, t: float) -> None:
        """Set absolute simulated time (forward only).

        Raises:
            ValueError: If t < current monotonic time
        """
        if t < self._monotonic_time:
            raise ValueError(f"Cannot set time backwards: {t} < {self._monotonic_time}")
        self._monotonic_time = float(t)
        self._fire_due()

    def advance(self, dt: float) -> None:
        """Advance simulated time by *dt* seconds.

        Raises:
            ValueError: If dt < 0
        """
        if dt < 0:
            raise ValueError(f"Cannot advance time backwards: dt={dt}")
        self._monotonic_time += dt
        self._fire_due()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _SimTimer:
        if delay < 0:
            raise ValueError(f"Timer delay must be non-negative: {delay}")
        timer = _SimTimer(callback)
        self._push(self._monotonic_time + delay, timer)
        return timer

    async def sleep(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Sleep duration must be non-negative: {seconds}")
        if seconds == 0:
            await asyncio.sleep(0)
            return
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._push(self._monotonic_time + seconds, future)
        await future

    def pending(self) -> int:
        """Return the number of live (uncancelled) timers and sleepers."""
        return sum(1 for _, _, w in self._waiters if not self._is_dead(w))

    def next_due_monotonic(self) -> float | None:
        """Return the due time of the next live timer or sleeper, if any."""
        while self._waiters and self._is_dead(self._waiters[0][2]):
            heapq.heappop(self._waiters)
        if not self._waiters:
            return None
        return self._waiters[0][0]

    def run_until_idle(self, *, max_steps: int = 1_000_000) -> int:
        """Jump from one due time to the next until nothing is scheduled.

        Returns the number of jumps taken. Stops after *max_steps* to guard
        against callbacks that reschedule themselves forever.
        """
        steps = 0
        while steps < max_steps:
            due = self.next_due_monotonic()
            if due is None:
                break
            self.set_time(max(due, self._monotonic_time))
            steps += 1
        return steps

    # ------------------------------------------------------------------
    def _push(self, due: float, waiter: _Waiter) -> None:
        self._seq += 1
        heapq.heappush(self._waiters, (due, self._seq, waiter))

    @staticmethod
    def _is_dead(waiter: _Waiter) -> bool:
        if isinstance(waiter, _SimTimer):
            return waiter.cancelled
        return waiter.done()

    def _fire_due(self) -> None:
        current = self._monotonic_time
        while self._waiters and self._waiters[0][0] <= current:
            _due, _seq, waiter = heapq.heappop(self._waiters)
            if isinstance(waiter, _SimTimer):
                if not waiter.cancelled:
                    waiter.cancelled = True
                    waiter.callback()
            elif not waiter.done():
                waiter.set_result(None)
