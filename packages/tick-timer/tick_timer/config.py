"""Timer configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimerConfig:
    """Immutable behavior switches for a Timer.

    Attributes:
        complete_on_idle_stop: Dispatch TIMER_COMPLETE when stop() is called
            on a timer with nothing scheduled (e.g. never started). Off by
            default, in which case such a stop() only clears ``running``.
        elapsed_per_tick: Measure get_elapsed_time() from the most recent
            tick instead of from start(). Off by default, in which case every
            repeat after the first reads as fully elapsed.
    """

    complete_on_idle_stop: bool = False
    elapsed_per_tick: bool = False
