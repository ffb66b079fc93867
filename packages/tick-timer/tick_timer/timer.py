"""Timer - repeatable, cancellable delayed execution with a listener registry."""
from __future__ import annotations

import logging
from typing import Any

from tick_timer.config import TimerConfig
from tick_timer.scheduler import AsyncioScheduler, Scheduler
from tick_timer.types import (
    Listener,
    NoListenersError,
    NullListenerError,
    Registration,
    TimerEvent,
    TimerEventType,
)

logger = logging.getLogger(__name__)


def _event_type(value: Any) -> TimerEventType | None:
    """Map an event type or its string value to TimerEventType, else None."""
    if isinstance(value, TimerEventType):
        return value
    try:
        return TimerEventType(value)
    except ValueError:
        return None


class Timer:
    """Fires TIMER every ``delay`` ms and a single TIMER_COMPLETE per run.

    ``repeat_count`` of None or 0 fires once; a negative count repeats until
    stop(). The timer never blocks: ticks are delivered by ``scheduler``,
    and listener exceptions propagate out of the scheduler callback.
    """

    def __init__(
        self,
        delay: float,
        repeat_count: int | None = None,
        *,
        scheduler: Scheduler | None = None,
        config: TimerConfig | None = None,
    ) -> None:
        self._delay = delay
        self._repeat_count = 1 if not repeat_count else repeat_count
        self._repeat_infinitely = repeat_count is not None and repeat_count < 0
        self._scheduler: Scheduler = (
            scheduler if scheduler is not None else AsyncioScheduler()
        )
        self._config = config if config is not None else TimerConfig()

        self._listeners: dict[TimerEventType, list[Registration]] = {
            TimerEventType.TIMER: [],
            TimerEventType.TIMER_COMPLETE: [],
        }

        self._current_count = 0
        self._running = False
        self._is_completed = False
        self._timer_id = 0
        self._start_time: float = 0
        self._tick_time: float = 0
        # Bumped by start() and reset(); ticks from an older run bail out.
        self._run_id = 0

    # --- Properties ---

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def repeat_count(self) -> int:
        return self._repeat_count

    @property
    def repeat_infinitely(self) -> bool:
        return self._repeat_infinitely

    @property
    def current_count(self) -> int:
        return self._current_count

    @property
    def running(self) -> bool:
        return self._running

    @property
    def is_completed(self) -> bool:
        return self._is_completed

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def timer_id(self) -> int:
        return self._timer_id

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    # --- Listener registry ---

    def add_event_listener(
        self,
        event_type: TimerEventType | str,
        listener: Listener,
        data: Any = None,
        insert_to_front: bool = False,
    ) -> None:
        """Register ``listener`` for ``event_type``. Unknown types are ignored.

        Raises:
            NullListenerError: ``listener`` is None or otherwise falsy.
            TypeError: ``listener`` is not callable.
        """
        etype = _event_type(event_type)
        if etype is None:
            logger.debug("Ignoring listener for unknown event type %r", event_type)
            return
        if not listener:
            raise NullListenerError(etype)
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {type(listener).__name__}")

        registration = Registration(listener, data)
        if insert_to_front:
            self._listeners[etype].insert(0, registration)
        else:
            self._listeners[etype].append(registration)

    def remove_event_listener(
        self, event_type: TimerEventType | str, listener: Listener | None = None
    ) -> None:
        """Remove the first registration of ``listener``, or all when omitted."""
        etype = _event_type(event_type)
        if etype is None:
            return
        registrations = self._listeners[etype]
        if not listener:
            registrations.clear()
            return
        for index, registration in enumerate(registrations):
            if registration.listener is listener:
                del registrations[index]
                break

    def has_event_listener(self, event_type: TimerEventType | str) -> bool:
        """True if at least one listener is registered for ``event_type``."""
        return self.listener_count(event_type) > 0

    def listener_count(self, event_type: TimerEventType | str) -> int:
        """Number of registrations for ``event_type``. 0 for unknown types."""
        etype = _event_type(event_type)
        if etype is None:
            return 0
        return len(self._listeners[etype])

    # --- Lifecycle ---

    def start(self) -> None:
        """Begin a run. No-op while running or once completed (until reset()).

        Raises:
            NoListenersError: no listener is registered for either event type.
        """
        if self._running or self._is_completed:
            return
        if not any(self._listeners.values()):
            raise NoListenersError("Timer.start: no listener registered")

        self._run_id += 1
        run_id = self._run_id
        self._running = True
        self._start_time = self._scheduler.now()
        self._tick_time = self._start_time

        try:
            if self._repeat_infinitely:
                self._timer_id = self._scheduler.call_every(
                    self._delay, lambda: self._on_interval(run_id)
                )
            else:
                self._timer_id = self._scheduler.call_later(
                    self._delay, lambda: self._on_timeout(run_id)
                )
        except BaseException:
            # Nothing was scheduled; leave the timer startable.
            self._running = False
            self._start_time = 0
            self._tick_time = 0
            raise
        logger.debug(
            "Timer started: delay=%s repeat_count=%s infinite=%s",
            self._delay,
            self._repeat_count,
            self._repeat_infinitely,
        )

    def stop(self) -> None:
        """End the run, dispatching TIMER_COMPLETE unless already completed."""
        self._running = False

        if not self._timer_id:
            if self._config.complete_on_idle_stop and not self._is_completed:
                self._complete()
            return

        self._scheduler.cancel(self._timer_id)
        self._timer_id = 0
        logger.debug("Timer stopped at count %d", self._current_count)

        if not self._is_completed:
            self._complete()

    def reset(self) -> None:
        """Stop, then return to the pre-run state. Listeners are kept."""
        self.stop()
        self._run_id += 1
        self._current_count = 0
        self._is_completed = False
        self._start_time = 0
        self._tick_time = 0
        logger.debug("Timer reset")

    # --- Timing ---

    def get_elapsed_time(self) -> float:
        """Time since start() (or the last tick), never more than ``delay``."""
        reference = (
            self._tick_time if self._config.elapsed_per_tick else self._start_time
        )
        return min(self._scheduler.now() - reference, self._delay)

    def get_remaining_time(self) -> float:
        return self._delay - self.get_elapsed_time()

    # --- Internal ---

    def _on_interval(self, run_id: int) -> None:
        self._tick_time = self._scheduler.now()
        self._dispatch(TimerEventType.TIMER)
        if run_id == self._run_id:
            self._current_count += 1

    def _on_timeout(self, run_id: int) -> None:
        self._tick_time = self._scheduler.now()
        self._dispatch(TimerEventType.TIMER)
        if run_id != self._run_id:
            return
        self._current_count += 1

        if self._current_count < self._repeat_count:
            if self._running:
                self._timer_id = self._scheduler.call_later(
                    self._delay, lambda: self._on_timeout(run_id)
                )
        else:
            self._running = False

        if not self._running and not self._is_completed:
            self._complete()

    def _complete(self) -> None:
        # Flag first: a TIMER_COMPLETE listener may stop() or reset()/start().
        self._is_completed = True
        logger.debug("Timer complete after %d tick(s)", self._current_count)
        self._dispatch(TimerEventType.TIMER_COMPLETE)

    def _dispatch(self, event_type: TimerEventType) -> None:
        for registration in list(self._listeners[event_type]):
            registration.listener(TimerEvent(event_type, registration.data))
