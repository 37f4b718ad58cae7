"""Cancellable per-round countdown.

The clock never sleeps or spawns threads itself. It asks a ``TimerBackend``
for a repeating callback and keeps a generation number per countdown; a
callback that belongs to a stopped countdown is dropped, so no tick or expiry
can be delivered after ``stop()`` returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

from buzz_app.constants.game_constants import CLOCK_TICK_INTERVAL_MS

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerBackend(Protocol):
    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle: ...


@dataclass(slots=True)
class _ManualTimer:
    interval_ms: int
    callback: Callable[[], None]
    next_fire: datetime
    sequence: int
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class ManualTimerBackend:
    """Single-threaded scheduler driven by explicit ``advance`` calls.

    Keeps its own virtual time, so a session built with ``now=backend.now``
    replays identically for identical input.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2000, 1, 1, tzinfo=timezone.utc)
        self._timers: list[_ManualTimer] = []
        self._sequence = 0

    def now(self) -> datetime:
        return self._now

    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> _ManualTimer:
        if interval_ms <= 0:
            raise ValueError("Timer interval must be positive.")
        self._sequence += 1
        timer = _ManualTimer(
            interval_ms=interval_ms,
            callback=callback,
            next_fire=self._now + timedelta(milliseconds=interval_ms),
            sequence=self._sequence,
        )
        self._timers.append(timer)
        return timer

    def advance(self, milliseconds: float) -> None:
        """Move virtual time forward, firing every callback that falls due."""
        target = self._now + timedelta(milliseconds=milliseconds)
        while True:
            due = [timer for timer in self._timers if timer.active and timer.next_fire <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.next_fire, t.sequence))
            self._now = timer.next_fire
            timer.next_fire += timedelta(milliseconds=timer.interval_ms)
            timer.callback()
        self._now = target
        self._timers = [timer for timer in self._timers if timer.active]

    def pending_count(self) -> int:
        return sum(1 for timer in self._timers if timer.active)


class RoundClock:
    """Countdown emitting one tick per second and a single expiry."""

    def __init__(
        self,
        backend: TimerBackend,
        on_tick: Callable[[int], None],
        on_expired: Callable[[], None],
    ) -> None:
        self._backend = backend
        self._on_tick = on_tick
        self._on_expired = on_expired
        self._handle: TimerHandle | None = None
        self._generation = 0
        self._running = False
        self._remaining = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def remaining(self) -> int:
        return self._remaining

    def start(self, total_seconds: int) -> None:
        if total_seconds <= 0:
            raise ValueError("Countdown length must be a positive number of seconds.")
        self.stop()
        self._generation += 1
        generation = self._generation
        self._remaining = total_seconds
        self._running = True
        self._handle = self._backend.call_repeating(
            CLOCK_TICK_INTERVAL_MS, lambda: self._on_interval(generation)
        )
        logger.debug("Countdown started: %ss", total_seconds)
        self._on_tick(self._remaining)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._running:
            logger.debug("Countdown stopped with %ss remaining", self._remaining)
        self._running = False
        self._generation += 1

    def _on_interval(self, generation: int) -> None:
        if generation != self._generation or not self._running:
            return
        self._remaining = max(0, self._remaining - 1)
        self._on_tick(self._remaining)
        if generation != self._generation:
            # A tick handler stopped or restarted the clock.
            return
        if self._remaining == 0:
            self.stop()
            self._on_expired()
