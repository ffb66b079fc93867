"""Event types, listener alias, and errors for tick-timer."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class TimerEventType(str, Enum):
    """Tag carried by every TimerEvent."""

    TIMER = "timer"
    TIMER_COMPLETE = "timerComplete"


@dataclass(frozen=True, slots=True)
class TimerEvent:
    """Event handed to listeners. ``data`` is the payload given at registration."""

    type: TimerEventType
    data: Any = None

    def __str__(self) -> str:
        tag = getattr(self.type, "value", self.type)
        return f"[TimerEvent type = {tag} data = {self.data}]"


Listener = Callable[[TimerEvent], None]


@dataclass(slots=True)
class Registration:
    listener: Listener
    data: Any = None


class TimerError(Exception):
    """Base class for timer misuse."""


class NullListenerError(TimerError, ValueError):
    """Raised when registering a missing listener."""

    def __init__(self, event_type: TimerEventType) -> None:
        self.event_type = event_type
        super().__init__(f"Listener for {event_type.value!r} is null")


class NoListenersError(TimerError):
    """Raised on start() when no listener is registered for any event type."""
