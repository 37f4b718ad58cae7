"""Session state machine: lobby, rounds, reveal, scoreboard and game over.

All input is processed on one logical queue. Every public operation checks the
current phase and player state at the moment it runs and returns ``False``
when the trigger is not legal, leaving the session untouched. An operation
invoked from inside an event handler of another operation is rejected the
same way instead of recursing.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from buzz_app.constants.game_constants import PLAYER_NAME_MAX_LENGTH
from buzz_app.core.events import (
    AllPlayersCommitted,
    AnswerCommitted,
    AnswerSelected,
    EventBus,
    FirstCommit,
    GameOver,
    NewHighScore,
    PlayerJoined,
    RoundResolved,
    StateChanged,
    TimeExpired,
    TimerTick,
)
from buzz_app.core.models import (
    AnswerColor,
    Player,
    PlayerKey,
    QuizProgress,
    QuizQuestion,
    RankedPlayer,
    RoundResult,
    ScoringPolicy,
    SessionPhase,
)
from buzz_app.core.services.answer_ledger import AnswerLedger
from buzz_app.core.services.high_score_store import HighScoreStore
from buzz_app.core.services.player_registry import PlayerRegistry
from buzz_app.core.services.quiz_repository import QuizRepository
from buzz_app.core.services.round_clock import RoundClock, TimerBackend
from buzz_app.core.services.scoreboard import rank_players
from buzz_app.core.services.scoring import resolve_round
from buzz_app.core.settings import GameSettings

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _operation(method: Callable[..., bool]) -> Callable[..., bool]:
    """Run a public operation exclusively; re-entrant calls fail."""

    @functools.wraps(method)
    def wrapper(self: GameSession, *args, **kwargs) -> bool:
        if self._busy:
            logger.warning("Rejected re-entrant %s() during event dispatch", method.__name__)
            return False
        self._busy = True
        try:
            return method(self, *args, **kwargs)
        finally:
            self._busy = False
            self._run_deferred_expiry()

    return wrapper


class GameSession:
    """Owns the players, the round clock and the ledger of one party game."""

    def __init__(
        self,
        quiz: QuizRepository,
        high_scores: HighScoreStore,
        timer_backend: TimerBackend,
        settings: GameSettings | None = None,
        event_bus: EventBus | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._quiz = quiz
        self._high_scores = high_scores
        self._settings = (settings or GameSettings()).validate()
        self.events = event_bus or EventBus()
        self._now = now or _utc_now
        self._registry = PlayerRegistry()
        self._clock = RoundClock(timer_backend, self._handle_tick, self._handle_expired)
        self._phase = SessionPhase.LOBBY
        self._ledger: AnswerLedger | None = None
        self._last_results: list[RoundResult] = []
        self._ranking: list[RankedPlayer] = []
        self._questions_played = 0
        self._busy = False
        self._deferred_expiry: AnswerLedger | None = None

    # --- Read access ---

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def high_score(self) -> int:
        return self._high_scores.value

    @property
    def quiz_title(self) -> str:
        return self._quiz.title

    @property
    def questions_played(self) -> int:
        return self._questions_played

    @property
    def time_remaining(self) -> int:
        return self._clock.remaining

    @property
    def ledger(self) -> AnswerLedger | None:
        """The ledger of the current or most recently resolved round."""
        return self._ledger

    @property
    def first_committer(self) -> PlayerKey | None:
        return self._ledger.first_committer if self._ledger else None

    def get_player(self, key: PlayerKey) -> Player:
        """Return a snapshot of one player record."""
        return replace(self._registry.get(key))

    def players(self) -> list[Player]:
        return [replace(player) for player in self._registry.players()]

    def joined_players(self) -> list[Player]:
        return [replace(player) for player in self._registry.get_joined()]

    def all_committed(self) -> bool:
        return self._registry.all_committed()

    def current_question(self) -> QuizQuestion | None:
        if self._phase in (SessionPhase.LOBBY, SessionPhase.GAME_OVER):
            return None
        return self._ledger.question if self._ledger else None

    def question_progress(self) -> QuizProgress:
        return self._quiz.progress()

    def has_next_question(self) -> bool:
        """True while a round is on screen and another question follows it."""
        if self._phase not in (SessionPhase.REVEAL, SessionPhase.SCOREBOARD):
            return False
        return self._quiz.has_more()

    def last_results(self) -> list[RoundResult]:
        return list(self._last_results)

    def ranking(self) -> list[RankedPlayer]:
        return list(self._ranking)

    # --- Operations ---

    @_operation
    def update_settings(self, settings: GameSettings) -> bool:
        if self._phase is not SessionPhase.LOBBY:
            logger.debug("Settings change rejected in %s", self._phase.value)
            return False
        self._settings = settings.validate()
        logger.info("Settings updated: %s", self._settings)
        return True

    @_operation
    def join(self, player: PlayerKey) -> bool:
        if self._phase is not SessionPhase.LOBBY:
            logger.debug("%s join rejected in %s", player.value, self._phase.value)
            return False
        if not self._registry.join(player):
            return False
        self.events.emit(PlayerJoined(player))
        return True

    @_operation
    def set_player_name(self, player: PlayerKey, name: str) -> bool:
        """Give a slot a display name; blank restores the default label."""
        if self._phase is not SessionPhase.LOBBY:
            return False
        cleaned = " ".join(name.split())[:PLAYER_NAME_MAX_LENGTH].strip()
        if cleaned == self._registry.get(player).name:
            return False
        self._registry.set_name(player, cleaned)
        logger.info("%s is now called %r", player.value, cleaned or player.label)
        return True

    @_operation
    def start_session(self) -> bool:
        if self._phase is not SessionPhase.LOBBY:
            return False
        if self._registry.joined_count() == 0:
            logger.debug("Start rejected: nobody has joined")
            return False
        self._quiz.reset()
        if self._settings.shuffle_questions:
            self._quiz.shuffle(self._settings.shuffle_seed)
        question = self._quiz.current()
        if question is None:
            logger.warning("Start rejected: no questions loaded")
            return False
        self._registry.reset_for_game()
        self._last_results = []
        self._ranking = []
        self._questions_played = 0
        logger.info("Game started with %d player(s)", self._registry.joined_count())
        self._begin_round(question)
        return True

    @_operation
    def select_answer(self, player: PlayerKey, color: AnswerColor) -> bool:
        if self._phase is not SessionPhase.QUESTION_ACTIVE or self._ledger is None:
            return False
        if not self._ledger.select(self._registry.get(player), color):
            return False
        logger.debug("%s selected %s", player.value, color.value)
        self.events.emit(AnswerSelected(player, color))
        return True

    @_operation
    def commit_answer(self, player: PlayerKey) -> bool:
        if self._phase is not SessionPhase.QUESTION_ACTIVE or self._ledger is None:
            return False
        ledger = self._ledger
        record = self._registry.get(player)
        if not ledger.commit(record, self._now()):
            logger.debug("%s commit rejected", player.value)
            return False

        elapsed = ledger.elapsed_ms(record) or 0.0
        logger.info("%s locked in %s after %.0f ms", player.value, record.selection.value, elapsed)
        self.events.emit(AnswerCommitted(player, record.selection, elapsed))

        racing = self._settings.scoring_policy is ScoringPolicy.RACING
        if racing and ledger.is_first_committer(player):
            self.events.emit(FirstCommit(player))

        everyone_in = self._registry.all_committed()
        if everyone_in:
            self.events.emit(AllPlayersCommitted())
        if everyone_in or (racing and ledger.exclusive_first_commit):
            self._resolve_round()
        return True

    @_operation
    def reveal(self) -> bool:
        if self._phase is not SessionPhase.QUESTION_ACTIVE or self._ledger is None:
            return False
        self._resolve_round()
        return True

    @_operation
    def show_scoreboard(self) -> bool:
        if self._phase is not SessionPhase.REVEAL:
            return False
        self._set_phase(SessionPhase.SCOREBOARD)
        return True

    @_operation
    def advance(self) -> bool:
        if self._phase not in (SessionPhase.REVEAL, SessionPhase.SCOREBOARD):
            return False
        if self._quiz.has_more():
            question = self._quiz.advance()
            if question is not None:
                self._begin_round(question)
                return True
        self._finish_game()
        return True

    @_operation
    def restart(self, force: bool = False) -> bool:
        """Return to the lobby with every slot unjoined.

        Legal from GAME_OVER; ``force`` aborts a game from any phase.
        """
        if self._phase is not SessionPhase.GAME_OVER and not force:
            return False
        self._clock.stop()
        self._deferred_expiry = None
        self._registry.unjoin_all()
        self._ledger = None
        self._last_results = []
        self._ranking = []
        self._questions_played = 0
        self._quiz.reset()
        if self._phase is not SessionPhase.LOBBY:
            self._set_phase(SessionPhase.LOBBY)
        return True

    # --- Internals ---

    def _set_phase(self, phase: SessionPhase, from_phase: SessionPhase | None = None) -> None:
        previous = from_phase or self._phase
        self._phase = phase
        logger.info("%s -> %s", previous.value, phase.value)
        self.events.emit(StateChanged(previous, phase))

    def _begin_round(self, question: QuizQuestion) -> None:
        self._registry.reset_round()
        time_limit = question.time_limit_seconds or self._settings.seconds_per_question
        exclusive = (
            self._settings.scoring_policy is ScoringPolicy.RACING and self._settings.racing_lockout
        )
        started_at = self._now()
        self._ledger = AnswerLedger(question, started_at, time_limit, exclusive_first_commit=exclusive)
        self._questions_played += 1
        self._set_phase(SessionPhase.QUESTION_ACTIVE)
        self._clock.start(time_limit)

    def _resolve_round(self) -> None:
        ledger = self._ledger
        self._clock.stop()
        self._phase = SessionPhase.ROUND_LOCKED
        results = resolve_round(ledger.question, self._registry.players(), ledger, self._settings)
        self._apply_results(results, ledger)
        ledger.mark_resolved()
        self._last_results = results
        for result in results:
            logger.info(
                "%s: %s (%+d) score=%d streak=%d",
                result.player.value,
                "correct" if result.is_correct else "wrong",
                result.points_earned,
                result.new_score,
                result.streak,
            )
        self._set_phase(SessionPhase.REVEAL, from_phase=SessionPhase.QUESTION_ACTIVE)
        self.events.emit(RoundResolved(ledger.question.correct_color, tuple(results)))

    def _apply_results(self, results: list[RoundResult], ledger: AnswerLedger) -> None:
        for result in results:
            player = self._registry.get(result.player)
            player.score = max(0, result.new_score)
            player.streak = result.streak
            if result.is_correct:
                player.correct_answers += 1
                player.best_streak = max(player.best_streak, result.streak)
            # A round without a commit counts as the full time limit for tie-breaks.
            player.total_commit_ms += (
                result.commit_ms if result.commit_ms is not None else ledger.time_limit_ms
            )

    def _finish_game(self) -> None:
        self._ranking = rank_players(self._registry.players())
        winning_score = self._ranking[0].score if self._ranking else 0
        is_new_best = self._high_scores.record(winning_score)
        self._set_phase(SessionPhase.GAME_OVER)
        if is_new_best:
            logger.info("New high score: %d", winning_score)
            self.events.emit(NewHighScore(winning_score))
        self.events.emit(GameOver(tuple(self._ranking), self._questions_played))

    def _handle_tick(self, value: int) -> None:
        self.events.emit(TimerTick(value))

    def _handle_expired(self) -> None:
        if self._busy:
            # Expiry landed while an operation is dispatching; run it afterwards.
            self._deferred_expiry = self._ledger
            return
        self._busy = True
        try:
            self._expire_round(self._ledger)
        finally:
            self._busy = False

    def _run_deferred_expiry(self) -> None:
        ledger, self._deferred_expiry = self._deferred_expiry, None
        if ledger is None:
            return
        self._busy = True
        try:
            self._expire_round(ledger)
        finally:
            self._busy = False

    def _expire_round(self, ledger: AnswerLedger | None) -> None:
        if self._phase is not SessionPhase.QUESTION_ACTIVE or ledger is None or ledger is not self._ledger:
            return
        logger.info("Time expired")
        self.events.emit(TimeExpired())
        self._resolve_round()
