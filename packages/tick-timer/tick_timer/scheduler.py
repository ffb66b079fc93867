"""Host delay facilities: scheduler protocol, virtual-time and asyncio implementations."""
from __future__ import annotations

import asyncio
import heapq
import time
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

Callback = Callable[[], None]

# Repeating callbacks never run more often than this on virtual time.
_MIN_INTERVAL = 1.0


@runtime_checkable
class Scheduler(Protocol):
    """Protocol for the delay facility a Timer runs on.

    All durations and timestamps are milliseconds. Handles are positive ints;
    0 is reserved to mean "nothing scheduled".
    """

    def now(self) -> float:
        """Current monotonic time."""
        ...

    def call_later(self, delay: float, callback: Callback) -> int:
        """Run ``callback`` once after ``delay``."""
        ...

    def call_every(self, interval: float, callback: Callback) -> int:
        """Run ``callback`` every ``interval`` until cancelled."""
        ...

    def cancel(self, handle: int) -> None:
        """Cancel a pending callback. Unknown or spent handles are ignored."""
        ...


@dataclass
class _Entry:
    callback: Callback
    interval: float | None = None


class ManualScheduler:
    """Deterministic scheduler on virtual time, advanced explicitly.

    Conforms to the Scheduler protocol. Nothing runs until advance() is
    called; callbacks then fire in due-time order (ties in scheduling order)
    with now() reporting each callback's due time while it runs.
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self._now = start_time
        self._queue: list[tuple[float, int, int]] = []
        self._entries: dict[int, _Entry] = {}
        self._next_handle = 1
        self._seq = 0

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callback) -> int:
        handle = self._new_handle()
        self._entries[handle] = _Entry(callback)
        self._push(self._now + max(delay, 0.0), handle)
        return handle

    def call_every(self, interval: float, callback: Callback) -> int:
        handle = self._new_handle()
        interval = max(interval, _MIN_INTERVAL)
        self._entries[handle] = _Entry(callback, interval)
        self._push(self._now + interval, handle)
        return handle

    def cancel(self, handle: int) -> None:
        self._entries.pop(handle, None)
        # Cancelled entries stay queued until due; drop them once nothing is live.
        if not self._entries:
            self._queue.clear()

    def pending(self) -> int:
        """Number of live scheduled callbacks."""
        return len(self._entries)

    def queued(self) -> int:
        """Number of queue slots, including cancelled ones not yet due."""
        return len(self._queue)

    def advance(self, ms: float) -> None:
        """Move virtual time forward by ``ms``, running everything that falls due.

        Exceptions raised by a callback propagate. Time then stays at that
        callback's due time and later callbacks wait for another advance().
        """
        if ms < 0:
            raise ValueError(f"ms must be >= 0, got {ms}")
        target = self._now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            entry = self._entries.get(handle)
            if entry is None:
                continue
            self._now = max(self._now, due)
            if entry.interval is None:
                del self._entries[handle]
            else:
                self._push(due + entry.interval, handle)
            entry.callback()
        self._now = target

    def _new_handle(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        return handle

    def _push(self, due: float, handle: int) -> None:
        heapq.heappush(self._queue, (due, self._seq, handle))
        self._seq += 1


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Conforms to the Scheduler protocol. Uses ``loop`` when given, otherwise
    the loop running at scheduling time. Repeating callbacks are re-armed
    on a fixed cadence before the callback runs, so cancelling from inside
    the callback prevents the next run.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handles: dict[int, asyncio.TimerHandle] = {}
        self._next_handle = 1

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def call_later(self, delay: float, callback: Callback) -> int:
        handle = self._new_handle()

        def fire() -> None:
            self._handles.pop(handle, None)
            callback()

        self._handles[handle] = self.loop.call_later(delay / 1000.0, fire)
        return handle

    def call_every(self, interval: float, callback: Callback) -> int:
        handle = self._new_handle()
        loop = self.loop
        step = interval / 1000.0
        when = loop.time() + step

        def fire() -> None:
            nonlocal when
            when += step
            self._handles[handle] = loop.call_at(when, fire)
            callback()

        self._handles[handle] = loop.call_at(when, fire)
        return handle

    def cancel(self, handle: int) -> None:
        timer_handle = self._handles.pop(handle, None)
        if timer_handle is not None:
            timer_handle.cancel()

    def pending(self) -> int:
        """Number of live scheduled callbacks."""
        return len(self._handles)

    def _new_handle(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        return handle
