"""Tests for controller light feedback."""

from buzz_app.core.models import AnswerColor, PlayerKey, ScoringPolicy
from buzz_app.core.services.indicator_feedback import IndicatorFeedback

from conftest import make_question

P1, P2 = PlayerKey.PLAYER1, PlayerKey.PLAYER2


class RecordingDevice:
    def __init__(self):
        self.commands = []

    def set_one(self, player, on):
        self.commands.append(("set_one", player, on))

    def set_all(self, on):
        self.commands.append(("set_all", on))

    def flash(self, player, times, interval_ms):
        self.commands.append(("flash", player))

    def victory(self, winner):
        self.commands.append(("victory", winner))


class TestIndicatorFeedback:
    def test_full_game_light_sequence(self, make_session):
        session = make_session([make_question(1)], scoring_policy=ScoringPolicy.RACING)
        device = RecordingDevice()
        IndicatorFeedback(session.events, device)

        session.join(P1)
        session.join(P2)
        session.start_session()
        session.select_answer(P2, AnswerColor.BLUE)
        session.commit_answer(P2)
        session.select_answer(P1, AnswerColor.ORANGE)
        session.commit_answer(P1)
        session.advance()

        assert device.commands == [
            ("set_one", P1, True),
            ("set_one", P2, True),
            ("set_all", False),
            ("set_one", P2, True),
            ("flash", P2),
            ("set_one", P1, True),
            ("victory", P2),
        ]

    def test_close_detaches(self, make_session):
        session = make_session()
        device = RecordingDevice()
        feedback = IndicatorFeedback(session.events, device)
        feedback.close()
        session.join(P1)
        assert device.commands == []
        assert session.events.subscriber_count() == 0
