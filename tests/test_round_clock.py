"""Tests for the cancellable round clock."""

import pytest

from buzz_app.core.services.round_clock import ManualTimerBackend, RoundClock


def make_clock(backend):
    ticks = []
    expiries = []
    clock = RoundClock(backend, ticks.append, lambda: expiries.append(backend.now()))
    return clock, ticks, expiries


class TestCountdown:
    def test_ticks_down_and_expires_once(self):
        backend = ManualTimerBackend()
        clock, ticks, expiries = make_clock(backend)
        clock.start(3)
        backend.advance(10_000)
        assert ticks == [3, 2, 1, 0]
        assert len(expiries) == 1
        assert not clock.running
        assert backend.pending_count() == 0

    def test_expiry_time_matches_length(self):
        backend = ManualTimerBackend()
        start = backend.now()
        clock, _, expiries = make_clock(backend)
        clock.start(5)
        backend.advance(5_000)
        assert (expiries[0] - start).total_seconds() == 5

    def test_rejects_non_positive_length(self):
        clock, _, _ = make_clock(ManualTimerBackend())
        with pytest.raises(ValueError):
            clock.start(0)


class TestCancellation:
    def test_stop_silences_everything(self):
        backend = ManualTimerBackend()
        clock, ticks, expiries = make_clock(backend)
        clock.start(3)
        backend.advance(1_000)
        clock.stop()
        backend.advance(10_000)
        assert ticks == [3, 2]
        assert expiries == []

    def test_restart_drops_previous_countdown(self):
        backend = ManualTimerBackend()
        clock, ticks, expiries = make_clock(backend)
        clock.start(2)
        backend.advance(500)
        clock.start(4)
        backend.advance(2_000)
        assert ticks == [2, 4, 3, 2]
        assert expiries == []
        assert backend.pending_count() == 1

    def test_stop_from_tick_handler_prevents_expiry(self):
        backend = ManualTimerBackend()
        expiries = []
        clock = None

        def on_tick(value):
            if value == 0:
                clock.stop()

        clock = RoundClock(backend, on_tick, lambda: expiries.append(True))
        clock.start(1)
        backend.advance(5_000)
        assert expiries == []

