"""Typed event stream published by the game session.

Each event is a frozen dataclass. Subscribers register for one event class and
receive only instances of that class. Subscriptions are explicit handles, so a
presentation component that goes away can detach without leaking callbacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from buzz_app.core.models import (
    AnswerColor,
    PlayerKey,
    RankedPlayer,
    RoundResult,
    SessionPhase,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base class for everything the session emits."""


@dataclass(frozen=True, slots=True)
class StateChanged(GameEvent):
    from_phase: SessionPhase
    to_phase: SessionPhase


@dataclass(frozen=True, slots=True)
class PlayerJoined(GameEvent):
    player: PlayerKey


@dataclass(frozen=True, slots=True)
class AnswerSelected(GameEvent):
    player: PlayerKey
    color: AnswerColor


@dataclass(frozen=True, slots=True)
class AnswerCommitted(GameEvent):
    player: PlayerKey
    color: AnswerColor
    elapsed_ms: float


@dataclass(frozen=True, slots=True)
class FirstCommit(GameEvent):
    """Racing policy: this player latched the round's first commit."""

    player: PlayerKey


@dataclass(frozen=True, slots=True)
class AllPlayersCommitted(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class TimerTick(GameEvent):
    value: int


@dataclass(frozen=True, slots=True)
class TimeExpired(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class RoundResolved(GameEvent):
    correct_color: AnswerColor
    results: tuple[RoundResult, ...]


@dataclass(frozen=True, slots=True)
class NewHighScore(GameEvent):
    score: int


@dataclass(frozen=True, slots=True)
class GameOver(GameEvent):
    ranking: tuple[RankedPlayer, ...]
    questions_played: int

    @property
    def winner(self) -> RankedPlayer | None:
        return self.ranking[0] if self.ranking else None


E = TypeVar("E", bound=GameEvent)


class Subscription(Generic[E]):
    """Handle returned by :meth:`EventBus.subscribe`."""

    def __init__(self, bus: EventBus, event_type: type[E], handler: Callable[[E], None]) -> None:
        self._bus = bus
        self.event_type = event_type
        self.handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._bus._remove(self)

    def __enter__(self) -> Subscription[E]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class EventBus:
    """Synchronous publish/subscribe bus keyed by event class."""

    def __init__(self) -> None:
        self._subscriptions: dict[type[GameEvent], list[Subscription]] = {}

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> Subscription[E]:
        subscription = Subscription(self, event_type, handler)
        self._subscriptions.setdefault(event_type, []).append(subscription)
        return subscription

    def emit(self, event: GameEvent) -> None:
        # Iterate over a snapshot so handlers may unsubscribe mid-dispatch.
        for subscription in list(self._subscriptions.get(type(event), ())):
            if not subscription.active:
                continue
            try:
                subscription.handler(event)
            except Exception:
                logger.exception("Handler %r failed for %s", subscription.handler, type(event).__name__)

    def subscriber_count(self, event_type: type[GameEvent] | None = None) -> int:
        if event_type is not None:
            return len(self._subscriptions.get(event_type, ()))
        return sum(len(subs) for subs in self._subscriptions.values())

    def clear(self) -> None:
        for subscriptions in list(self._subscriptions.values()):
            for subscription in list(subscriptions):
                subscription.unsubscribe()
        self._subscriptions.clear()

    def _remove(self, subscription: Subscription) -> None:
        subscriptions = self._subscriptions.get(subscription.event_type)
        if not subscriptions:
            return
        try:
            subscriptions.remove(subscription)
        except ValueError:
            return
        if not subscriptions:
            del self._subscriptions[subscription.event_type]
