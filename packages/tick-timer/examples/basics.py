"""Hello Timer -- a counted timer and an infinite one on virtual time.

Demonstrates:
- Creating timers on a ManualScheduler
- Registering TIMER and TIMER_COMPLETE listeners with payloads
- Stopping an infinite timer and resetting a finished one

Run: python -m examples.basics
"""

from tick_timer import ManualScheduler, Timer, TimerEvent, TimerEventType


def show(event: TimerEvent) -> None:
    print(f"  {event}")


def main() -> None:
    print("=== Counted timer ===\n")

    sched = ManualScheduler()

    # Three ticks, 100 ms apart, then a completion event.
    countdown = Timer(100, 3, scheduler=sched)
    countdown.add_event_listener(TimerEventType.TIMER, show, data="countdown")
    countdown.add_event_listener(TimerEventType.TIMER_COMPLETE, show, data="countdown")
    countdown.start()
    sched.advance(400)

    print(f"\nFired {countdown.current_count} times, completed={countdown.is_completed}")

    print("\n=== Infinite timer ===\n")

    heartbeat = Timer(50, -1, scheduler=sched)
    heartbeat.add_event_listener(TimerEventType.TIMER, show, data="heartbeat")
    heartbeat.add_event_listener(TimerEventType.TIMER_COMPLETE, show, data="heartbeat")
    heartbeat.start()
    sched.advance(150)

    # An infinite timer only completes when stopped.
    heartbeat.stop()

    print("\n=== Reset and run again ===\n")

    countdown.reset()
    countdown.start()
    sched.advance(100)
    print(f"\nElapsed {countdown.get_elapsed_time()} ms, remaining {countdown.get_remaining_time()} ms")
    countdown.stop()


if __name__ == "__main__":
    main()
