"""Tests for TimerEvent, TimerEventType and timer errors."""
from __future__ import annotations

import dataclasses

import pytest

from tick_timer import (
    NoListenersError,
    NullListenerError,
    TimerError,
    TimerEvent,
    TimerEventType,
)


class TestTimerEventType:

    def test_string_values(self):
        assert TimerEventType.TIMER.value == "timer"
        assert TimerEventType.TIMER_COMPLETE.value == "timerComplete"

    def test_compares_equal_to_value(self):
        assert TimerEventType.TIMER == "timer"
        assert TimerEventType("timerComplete") is TimerEventType.TIMER_COMPLETE

    def test_exactly_two_members(self):
        assert len(TimerEventType) == 2


class TestTimerEvent:

    def test_fields(self):
        payload = {"id": 7}
        event = TimerEvent(TimerEventType.TIMER, payload)
        assert event.type is TimerEventType.TIMER
        assert event.data is payload

    def test_data_defaults_to_none(self):
        assert TimerEvent(TimerEventType.TIMER_COMPLETE).data is None

    def test_frozen(self):
        event = TimerEvent(TimerEventType.TIMER, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.data = 2  # type: ignore[misc]

    def test_str(self):
        event = TimerEvent(TimerEventType.TIMER, "tick")
        assert str(event) == "[TimerEvent type = timer data = tick]"

    def test_str_complete_without_data(self):
        event = TimerEvent(TimerEventType.TIMER_COMPLETE)
        assert str(event) == "[TimerEvent type = timerComplete data = None]"

    def test_type_is_not_validated(self):
        """Any tag is accepted; str() falls back to the raw value."""
        event = TimerEvent("custom", 3)  # type: ignore[arg-type]
        assert str(event) == "[TimerEvent type = custom data = 3]"

    def test_equality_by_value(self):
        assert TimerEvent(TimerEventType.TIMER, 1) == TimerEvent(TimerEventType.TIMER, 1)
        assert TimerEvent(TimerEventType.TIMER, 1) != TimerEvent(TimerEventType.TIMER, 2)


class TestErrors:

    def test_hierarchy(self):
        assert issubclass(NullListenerError, TimerError)
        assert issubclass(NullListenerError, ValueError)
        assert issubclass(NoListenersError, TimerError)

    def test_null_listener_carries_event_type(self):
        err = NullListenerError(TimerEventType.TIMER)
        assert err.event_type is TimerEventType.TIMER
        assert "timer" in str(err)
