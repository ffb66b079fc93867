"""tick-timer - Repeatable, cancellable, event-driven timers."""
from __future__ import annotations

import logging

from tick_timer.config import TimerConfig
from tick_timer.scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from tick_timer.timer import Timer
from tick_timer.types import (
    Listener,
    NoListenersError,
    NullListenerError,
    TimerError,
    TimerEvent,
    TimerEventType,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Timer",
    "TimerConfig",
    "TimerEvent",
    "TimerEventType",
    "Listener",
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "TimerError",
    "NullListenerError",
    "NoListenersError",
]
