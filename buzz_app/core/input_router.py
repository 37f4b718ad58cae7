"""Maps controller button presses onto session operations."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from buzz_app.constants.game_constants import START_SEQUENCE_TIMEOUT_MS
from buzz_app.core.models import AnswerColor, ButtonPress, ButtonRole, SessionPhase
from buzz_app.core.services.game_session import GameSession

logger = logging.getLogger(__name__)

START_SEQUENCE: tuple[AnswerColor, ...] = (
    AnswerColor.BLUE,
    AnswerColor.ORANGE,
    AnswerColor.GREEN,
    AnswerColor.YELLOW,
)


class InputRouter:
    """Routes presses by phase.

    Lobby: the buzzer joins, and blue, orange, green, yellow pressed in order
    (each within the timeout of the previous press) starts the game.
    Question: colors select, the buzzer commits. Game over: the buzzer
    returns everyone to the lobby.
    """

    def __init__(self, session: GameSession, sequence_timeout_ms: int = START_SEQUENCE_TIMEOUT_MS) -> None:
        self._session = session
        self._sequence_timeout = timedelta(milliseconds=sequence_timeout_ms)
        self._sequence: list[AnswerColor] = []
        self._last_sequence_press: datetime | None = None

    @property
    def start_sequence_progress(self) -> int:
        return len(self._sequence)

    def handle(self, press: ButtonPress) -> bool:
        phase = self._session.phase
        if phase is not SessionPhase.LOBBY:
            self._reset_sequence()

        if phase is SessionPhase.LOBBY:
            return self._handle_lobby(press)
        if phase is SessionPhase.QUESTION_ACTIVE:
            color = press.role.color
            if color is None:
                return self._session.commit_answer(press.player)
            return self._session.select_answer(press.player, color)
        if phase is SessionPhase.GAME_OVER and press.role is ButtonRole.COMMIT:
            return self._session.restart()
        return False

    def _handle_lobby(self, press: ButtonPress) -> bool:
        if press.role is ButtonRole.COMMIT:
            return self._session.join(press.player)

        if not self._session.joined_players():
            self._reset_sequence()
            return False

        if (
            self._last_sequence_press is not None
            and press.timestamp - self._last_sequence_press > self._sequence_timeout
        ):
            self._reset_sequence()
        self._last_sequence_press = press.timestamp

        expected = START_SEQUENCE[len(self._sequence)]
        if press.role.color is not expected:
            self._reset_sequence()
            return False

        self._sequence.append(expected)
        logger.debug("Start sequence %d/%d", len(self._sequence), len(START_SEQUENCE))
        if len(self._sequence) < len(START_SEQUENCE):
            return True
        self._reset_sequence()
        return self._session.start_session()

    def _reset_sequence(self) -> None:
        self._sequence = []
        self._last_sequence_press = None
