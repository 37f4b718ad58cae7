"""Drives the per-player controller lights from the session event stream.

Commands are fire-and-forget; nothing the device does feeds back into the
session.
"""

from __future__ import annotations

import logging
from typing import Protocol

from buzz_app.constants.game_constants import LED_FLASH_INTERVAL_MS, LED_FLASH_TIMES
from buzz_app.core.events import (
    AnswerCommitted,
    EventBus,
    FirstCommit,
    GameOver,
    PlayerJoined,
    StateChanged,
    Subscription,
)
from buzz_app.core.models import PlayerKey, SessionPhase

logger = logging.getLogger(__name__)


class IndicatorDevice(Protocol):
    def set_one(self, player: PlayerKey, on: bool) -> None: ...

    def set_all(self, on: bool) -> None: ...

    def flash(self, player: PlayerKey, times: int, interval_ms: int) -> None: ...

    def victory(self, winner: PlayerKey) -> None: ...


class NullIndicatorDevice:
    """Stand-in used when no controller lights are attached."""

    def set_one(self, player: PlayerKey, on: bool) -> None:
        logger.debug("LED %s %s", player.label, "on" if on else "off")

    def set_all(self, on: bool) -> None:
        logger.debug("All LEDs %s", "on" if on else "off")

    def flash(self, player: PlayerKey, times: int, interval_ms: int) -> None:
        logger.debug("LED %s flash x%d every %dms", player.label, times, interval_ms)

    def victory(self, winner: PlayerKey) -> None:
        logger.debug("Victory pattern for %s", winner.label)


class IndicatorFeedback:
    """Subscribes to session events and issues light commands."""

    def __init__(self, events: EventBus, device: IndicatorDevice) -> None:
        self._device = device
        self._subscriptions: list[Subscription] = [
            events.subscribe(PlayerJoined, self._on_player_joined),
            events.subscribe(StateChanged, self._on_state_changed),
            events.subscribe(AnswerCommitted, self._on_answer_committed),
            events.subscribe(FirstCommit, self._on_first_commit),
            events.subscribe(GameOver, self._on_game_over),
        ]

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []

    def _on_player_joined(self, event: PlayerJoined) -> None:
        self._device.set_one(event.player, True)

    def _on_state_changed(self, event: StateChanged) -> None:
        if event.to_phase in (SessionPhase.QUESTION_ACTIVE, SessionPhase.LOBBY):
            self._device.set_all(False)

    def _on_answer_committed(self, event: AnswerCommitted) -> None:
        self._device.set_one(event.player, True)

    def _on_first_commit(self, event: FirstCommit) -> None:
        self._device.flash(event.player, LED_FLASH_TIMES, LED_FLASH_INTERVAL_MS)

    def _on_game_over(self, event: GameOver) -> None:
        if event.winner is not None:
            self._device.victory(event.winner.player)
