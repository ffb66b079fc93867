"""Timers on a real asyncio event loop.

Demonstrates:
- The default AsyncioScheduler (no scheduler argument)
- Waiting for TIMER_COMPLETE from a coroutine
- Turning on debug logging for the tick_timer package

Run: python -m examples.event_loop
"""

import asyncio
import logging

from tick_timer import Timer, TimerEvent, TimerEventType


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    done = asyncio.Event()
    timer = Timer(250, 4)

    def on_tick(event: TimerEvent) -> None:
        print(f"  tick {timer.current_count + 1} of {timer.repeat_count}")

    def on_complete(event: TimerEvent) -> None:
        print("  complete")
        done.set()

    timer.add_event_listener(TimerEventType.TIMER, on_tick)
    timer.add_event_listener(TimerEventType.TIMER_COMPLETE, on_complete)
    timer.start()

    await done.wait()


if __name__ == "__main__":
    asyncio.run(main())
