"""
scheduler.py — Timer Sources for Playback
==========================================
The PlaybackEngine never sleeps and never touches a clock directly.  It
asks a Scheduler for "call me back in N ms" and may cancel that request.

    ManualScheduler     fake clock, advanced by hand        (tests)
    MonotonicScheduler  time.monotonic, fired by poll()     (Flask handlers)
    AsyncioScheduler    loop.call_later                     (async front-ends)

Every implementation fires callbacks on the owner's thread only.  The
schedulers are not thread-safe: a caller sharing one between threads
(the Flask app) must serialise access itself.
"""

import asyncio
import itertools
import time
from typing import Callable, Dict, List, Optional, Tuple


Callback = Callable[[], None]


class Scheduler:
    """Interface: schedule a callback after `delay_ms`, cancel by handle."""

    def call_later(self, delay_ms: float, callback: Callback) -> object:
        raise NotImplementedError

    def cancel(self, handle: object) -> None:
        raise NotImplementedError

    def pending(self) -> int:
        """Number of callbacks scheduled and not yet fired or cancelled."""
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Clock-driven schedulers (manual + monotonic share the bookkeeping)
# ---------------------------------------------------------------------------
class _ClockScheduler(Scheduler):

    def __init__(self):
        self._ids = itertools.count(1)
        # handle → (due_ms, callback)
        self._timers: Dict[int, Tuple[float, Callback]] = {}

    def now(self) -> float:
        raise NotImplementedError

    def call_later(self, delay_ms: float, callback: Callback) -> int:
        handle = next(self._ids)
        self._timers[handle] = (self.now() + max(0.0, delay_ms), callback)
        return handle

    def cancel(self, handle: object) -> None:
        self._timers.pop(handle, None)

    def pending(self) -> int:
        return len(self._timers)

    def _fire_due(self, now: float) -> int:
        """Fire every timer due at `now`, earliest first.  Returns count fired."""
        fired = 0
        while True:
            due = [(at, h) for h, (at, _) in self._timers.items() if at <= now]
            if not due:
                return fired
            _, handle = min(due)
            _, callback = self._timers.pop(handle)
            callback()
            fired += 1


class ManualScheduler(_ClockScheduler):
    """
    Deterministic fake clock.  Time only moves when advance() is called;
    callbacks scheduled from inside a firing callback run in the same
    advance() if they fall due before the new time.
    """

    def __init__(self):
        super().__init__()
        self._now: float = 0.0

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> int:
        """Move the clock forward `ms`, firing due timers in order."""
        target = self._now + ms
        fired = 0
        while True:
            upcoming = [at for at, _ in self._timers.values() if at <= target]
            if not upcoming:
                break
            # land exactly on each due time so rescheduled ticks see it as "now"
            self._now = max(self._now, min(upcoming))
            fired += self._fire_due(self._now)
        self._now = target
        return fired

    def fire_next(self) -> bool:
        """Jump straight to the earliest pending timer and fire it."""
        if not self._timers:
            return False
        handle = min(self._timers, key=lambda h: self._timers[h][0])
        due, callback = self._timers.pop(handle)
        self._now = max(self._now, due)
        callback()
        return True


class MonotonicScheduler(_ClockScheduler):
    """
    Wall-clock scheduler for request/response front-ends with no event
    loop.  Nothing fires on its own: the owner calls poll() (e.g. at the
    top of every HTTP handler).  A playback tick reschedules relative to
    the poll time, so one poll advances a playing engine by at most one
    step however long the gap was.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self._clock = clock

    def now(self) -> float:
        return self._clock() * 1000.0

    def poll(self) -> int:
        return self._fire_due(self.now())


# ---------------------------------------------------------------------------
# asyncio
# ---------------------------------------------------------------------------
class AsyncioScheduler(Scheduler):
    """
    Backs call_later onto an asyncio loop; the loop is the owner thread.
    Without an explicit loop, the first call_later must come from a
    coroutine running on it.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handles: List[asyncio.TimerHandle] = []

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        holder: List[asyncio.TimerHandle] = []

        def run():
            if holder and holder[0] in self._handles:
                self._handles.remove(holder[0])
            callback()

        handle = self.loop.call_later(max(0.0, delay_ms) / 1000.0, run)
        holder.append(handle)
        self._handles.append(handle)
        return handle

    def cancel(self, handle: object) -> None:
        if handle in self._handles:
            self._handles.remove(handle)
        if isinstance(handle, asyncio.TimerHandle):
            handle.cancel()

    def pending(self) -> int:
        return len(self._handles)
