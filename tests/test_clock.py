"""Tests for vegam.core.clock – countdown clock."""

from __future__ import annotations

import pytest

from vegam.core.clock import CountdownClock, TickScheduler


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_defaults(self, scheduler):
        clock = CountdownClock(scheduler)
        assert clock.duration == 60
        assert clock.remaining == 60
        assert clock.elapsed == 0
        assert not clock.running

    def test_rejects_zero_duration(self, scheduler):
        with pytest.raises(ValueError):
            CountdownClock(scheduler, duration=0)

    def test_manual_scheduler_satisfies_protocol(self, scheduler):
        assert isinstance(scheduler, TickScheduler)


# ---------------------------------------------------------------------------
# start / tick / stop
# ---------------------------------------------------------------------------

class TestTicking:
    def test_start_schedules_one_second_ticks(self, scheduler):
        clock = CountdownClock(scheduler)
        clock.start()
        assert clock.running
        assert scheduler.intervals == [1000]

    def test_start_twice_schedules_once(self, scheduler):
        clock = CountdownClock(scheduler)
        clock.start()
        clock.start()
        assert len(scheduler.tokens) == 1

    def test_tick_decrements_by_one(self, scheduler):
        ticks = []
        clock = CountdownClock(scheduler, duration=5, on_tick=ticks.append)
        clock.start()
        scheduler.fire(2)
        assert clock.remaining == 3
        assert clock.elapsed == 2
        assert ticks == [4, 3]

    def test_tick_before_start_is_ignored(self, scheduler):
        clock = CountdownClock(scheduler, duration=5)
        clock.tick()
        assert clock.remaining == 5

    def test_restart_resets_remaining(self, scheduler):
        clock = CountdownClock(scheduler, duration=5)
        clock.start()
        scheduler.fire(3)
        clock.stop()
        clock.start()
        assert clock.remaining == 5


class TestStop:
    def test_stop_cancels_token(self, scheduler):
        clock = CountdownClock(scheduler)
        clock.start()
        clock.stop()
        assert scheduler.last.cancelled
        assert not clock.running

    def test_stop_is_idempotent(self, scheduler):
        clock = CountdownClock(scheduler)
        clock.start()
        clock.stop()
        clock.stop()
        assert scheduler.last.cancel_calls == 1

    def test_stop_without_start(self, scheduler):
        CountdownClock(scheduler).stop()

    def test_late_tick_after_stop_is_noop(self, scheduler):
        ticks = []
        clock = CountdownClock(scheduler, duration=5, on_tick=ticks.append)
        clock.start()
        token = scheduler.last
        clock.stop()
        token.callback()
        assert clock.remaining == 5
        assert ticks == []

    def test_context_manager_always_stops(self, scheduler):
        clock = CountdownClock(scheduler)
        with pytest.raises(RuntimeError):
            with clock:
                assert clock.running
                raise RuntimeError("boom")
        assert not clock.running
        assert scheduler.last.cancelled


# ---------------------------------------------------------------------------
# Expiry
# ---------------------------------------------------------------------------

class TestExpiry:
    def test_expires_exactly_once(self, scheduler):
        expired = []
        clock = CountdownClock(scheduler, duration=3, on_expired=lambda: expired.append(True))
        clock.start()
        token = scheduler.last
        scheduler.fire(3)
        assert expired == [True]
        assert clock.remaining == 0
        assert not clock.running
        token.callback()
        token.callback()
        assert expired == [True]
        assert clock.remaining == 0

    def test_last_tick_reports_zero(self, scheduler):
        ticks = []
        clock = CountdownClock(scheduler, duration=2, on_tick=ticks.append)
        clock.start()
        scheduler.fire(2)
        assert ticks == [1, 0]

    def test_stop_inside_tick_prevents_expiry(self, scheduler):
        expired = []
        clock = CountdownClock(scheduler, duration=1, on_expired=lambda: expired.append(True))
        clock.connect(on_tick=lambda remaining: clock.stop(), on_expired=lambda: expired.append(True))
        clock.start()
        scheduler.fire()
        assert expired == []

    def test_connect_replaces_callbacks(self, scheduler):
        old, new = [], []
        clock = CountdownClock(scheduler, duration=2, on_tick=old.append)
        clock.connect(on_tick=new.append)
        clock.start()
        scheduler.fire()
        assert old == []
        assert new == [1]
