"""Tests for controller button routing."""

from datetime import timedelta

from buzz_app.core.input_router import InputRouter
from buzz_app.core.models import AnswerColor, ButtonPress, ButtonRole, PlayerKey, SessionPhase

from conftest import make_question

P1, P2 = PlayerKey.PLAYER1, PlayerKey.PLAYER2
START_ROLES = (ButtonRole.BLUE, ButtonRole.ORANGE, ButtonRole.GREEN, ButtonRole.YELLOW)


class Presser:
    """Feeds presses to a router with controllable timestamps."""

    def __init__(self, router, backend):
        self.router = router
        self.at = backend.now()

    def press(self, player, role, after_ms=100):
        self.at += timedelta(milliseconds=after_ms)
        return self.router.handle(ButtonPress(player, role, self.at))


def setup(session, backend):
    return Presser(InputRouter(session), backend)


class TestLobby:
    def test_buzzer_joins(self, make_session, backend):
        session = make_session()
        presser = setup(session, backend)
        assert presser.press(P2, ButtonRole.COMMIT)
        assert session.get_player(P2).joined
        assert not presser.press(P2, ButtonRole.COMMIT)

    def test_start_sequence_starts_game(self, make_session, backend):
        session = make_session()
        presser = setup(session, backend)
        presser.press(P1, ButtonRole.COMMIT)
        for role in START_ROLES:
            assert presser.press(P2, role)
        assert session.phase is SessionPhase.QUESTION_ACTIVE
        assert presser.router.start_sequence_progress == 0

    def test_sequence_needs_a_joined_player(self, make_session, backend):
        session = make_session()
        presser = setup(session, backend)
        for role in START_ROLES:
            assert not presser.press(P1, role)
        assert session.phase is SessionPhase.LOBBY

    def test_wrong_order_resets(self, make_session, backend):
        session = make_session()
        presser = setup(session, backend)
        presser.press(P1, ButtonRole.COMMIT)
        presser.press(P1, ButtonRole.BLUE)
        presser.press(P1, ButtonRole.ORANGE)
        assert presser.router.start_sequence_progress == 2
        assert not presser.press(P1, ButtonRole.YELLOW)
        assert presser.router.start_sequence_progress == 0
        assert session.phase is SessionPhase.LOBBY

    def test_slow_sequence_resets(self, make_session, backend):
        session = make_session()
        presser = setup(session, backend)
        presser.press(P1, ButtonRole.COMMIT)
        presser.press(P1, ButtonRole.BLUE)
        presser.press(P1, ButtonRole.ORANGE)
        assert not presser.press(P1, ButtonRole.GREEN, after_ms=2_500)
        assert presser.router.start_sequence_progress == 0
        assert session.phase is SessionPhase.LOBBY


class TestInGame:
    def test_colors_select_and_buzzer_commits(self, make_session, backend):
        session = make_session()
        presser = setup(session, backend)
        presser.press(P1, ButtonRole.COMMIT)
        presser.press(P2, ButtonRole.COMMIT)
        for role in START_ROLES:
            presser.press(P1, role)
        assert presser.press(P1, ButtonRole.GREEN)
        assert session.get_player(P1).selection is AnswerColor.GREEN
        assert presser.press(P1, ButtonRole.COMMIT)
        assert session.get_player(P1).committed
        assert not presser.press(P1, ButtonRole.COMMIT)

    def test_input_ignored_during_reveal(self, make_session, backend):
        session = make_session()
        presser = setup(session, backend)
        presser.press(P1, ButtonRole.COMMIT)
        for role in START_ROLES:
            presser.press(P1, role)
        session.reveal()
        assert not presser.press(P1, ButtonRole.BLUE)
        assert not presser.press(P1, ButtonRole.COMMIT)
        assert session.phase is SessionPhase.REVEAL

    def test_buzzer_at_game_over_returns_to_lobby(self, make_session, backend):
        session = make_session([make_question(1)])
        presser = setup(session, backend)
        presser.press(P1, ButtonRole.COMMIT)
        for role in START_ROLES:
            presser.press(P1, role)
        presser.press(P1, ButtonRole.BLUE)
        presser.press(P1, ButtonRole.COMMIT)
        session.advance()
        assert session.phase is SessionPhase.GAME_OVER
        assert not presser.press(P1, ButtonRole.BLUE)
        assert presser.press(P2, ButtonRole.COMMIT)
        assert session.phase is SessionPhase.LOBBY
