"""Shared fixtures: a deterministic clock, a small quiz and a session factory."""

import pytest

from buzz_app.core import events as ev
from buzz_app.core.models import AnswerColor, QuizQuestion
from buzz_app.core.services.game_session import GameSession
from buzz_app.core.services.high_score_store import HighScoreStore
from buzz_app.core.services.quiz_repository import QuizRepository
from buzz_app.core.services.round_clock import ManualTimerBackend
from buzz_app.core.settings import GameSettings

ALL_EVENT_TYPES = (
    ev.StateChanged,
    ev.PlayerJoined,
    ev.AnswerSelected,
    ev.AnswerCommitted,
    ev.FirstCommit,
    ev.AllPlayersCommitted,
    ev.TimerTick,
    ev.TimeExpired,
    ev.RoundResolved,
    ev.NewHighScore,
    ev.GameOver,
)


def make_question(question_id, correct=AnswerColor.BLUE, points=None, time_limit_seconds=None):
    return QuizQuestion(
        id=question_id,
        question_text=f"Question {question_id}?",
        options={
            AnswerColor.BLUE: "Blue answer",
            AnswerColor.ORANGE: "Orange answer",
            AnswerColor.GREEN: "Green answer",
            AnswerColor.YELLOW: "Yellow answer",
        },
        correct_color=correct,
        points=points,
        time_limit_seconds=time_limit_seconds,
    )


@pytest.fixture
def backend():
    return ManualTimerBackend()


@pytest.fixture
def questions():
    return [
        make_question(1, AnswerColor.BLUE),
        make_question(2, AnswerColor.GREEN),
        make_question(3, AnswerColor.ORANGE),
    ]


@pytest.fixture
def high_scores(tmp_path):
    return HighScoreStore(tmp_path / "high_score.json")


@pytest.fixture
def make_session(backend, questions, high_scores):
    """Build a session; keyword arguments become GameSettings fields."""

    def factory(question_list=None, **settings):
        quiz = QuizRepository()
        quiz.load_questions(question_list or questions, "Test Quiz")
        return GameSession(
            quiz,
            high_scores,
            backend,
            settings=GameSettings(**settings),
            now=backend.now,
        )

    return factory


@pytest.fixture
def recorder():
    """Attach to a session's bus and collect every event in order."""

    def attach(session):
        received = []
        for event_type in ALL_EVENT_TYPES:
            session.events.subscribe(event_type, received.append)
        return received

    return attach
