"""End-to-end Timer runs on a real asyncio event loop."""
from __future__ import annotations

import asyncio

from tick_timer import AsyncioScheduler, Timer, TimerEventType

TIMER = TimerEventType.TIMER
TIMER_COMPLETE = TimerEventType.TIMER_COMPLETE


def test_counted_run_on_event_loop():
    """Timer(10, 3) fires three ticks then one completion."""

    async def main():
        timer = Timer(10, 3)
        done = asyncio.Event()
        ticks = []

        timer.add_event_listener(TIMER, lambda e: ticks.append(e.data), data="t")
        timer.add_event_listener(TIMER_COMPLETE, lambda e: done.set())
        timer.start()
        assert timer.running

        await asyncio.wait_for(done.wait(), timeout=2)
        await asyncio.sleep(0.05)
        return timer, ticks

    timer, ticks = asyncio.run(main())
    assert ticks == ["t", "t", "t"]
    assert timer.current_count == 3
    assert timer.is_completed
    assert not timer.running


def test_infinite_run_stopped_from_listener():
    async def main():
        timer = Timer(5, -1, scheduler=AsyncioScheduler())
        done = asyncio.Event()
        completions = []

        def on_tick(event):
            if timer.current_count == 2:
                timer.stop()

        def on_complete(event):
            completions.append(event)
            done.set()

        timer.add_event_listener(TIMER, on_tick)
        timer.add_event_listener(TIMER_COMPLETE, on_complete)
        timer.start()

        await asyncio.wait_for(done.wait(), timeout=2)
        await asyncio.sleep(0.05)
        return timer, completions

    timer, completions = asyncio.run(main())
    assert timer.current_count == 3
    assert len(completions) == 1
    assert timer.scheduler.pending() == 0


def test_stop_cancels_pending_tick():
    async def main():
        timer = Timer(50, 2)
        events = []
        timer.add_event_listener(TIMER, lambda e: events.append(e.type))
        timer.add_event_listener(TIMER_COMPLETE, lambda e: events.append(e.type))
        timer.start()

        await asyncio.sleep(0)
        timer.stop()
        await asyncio.sleep(0.12)
        return events

    assert asyncio.run(main()) == [TIMER_COMPLETE]


def test_elapsed_time_on_event_loop():
    async def main():
        timer = Timer(1000, 1)
        timer.add_event_listener(TIMER, lambda e: None)
        timer.start()
        await asyncio.sleep(0.02)
        elapsed = timer.get_elapsed_time()
        timer.stop()
        return elapsed

    elapsed = asyncio.run(main())
    assert 0 < elapsed < 1000
