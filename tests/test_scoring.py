"""Tests for round resolution under each scoring policy."""

from datetime import datetime, timedelta, timezone

from buzz_app.core.models import AnswerColor, Player, PlayerKey, ScoringPolicy
from buzz_app.core.services.answer_ledger import AnswerLedger
from buzz_app.core.services.scoring import (
    base_points,
    resolve_round,
    round_half_up,
    speed_bonus,
    streak_multiplier,
)
from buzz_app.core.settings import GameSettings

from conftest import make_question

START = datetime(2000, 1, 1, tzinfo=timezone.utc)


def answer(ledger, key, color, after_ms=None, score=0, streak=0):
    player = Player(key=key, joined=True, score=score, streak=streak)
    ledger.select(player, color)
    if after_ms is not None:
        ledger.commit(player, START + timedelta(milliseconds=after_ms))
    return player


class TestHelpers:
    def test_round_half_up(self):
        assert round_half_up(49.5) == 50
        assert round_half_up(50.49) == 50
        assert round_half_up(0.5) == 1

    def test_speed_bonus_linear(self):
        assert speed_bonus(0, 30_000, 100) == 100
        assert speed_bonus(15_000, 30_000, 100) == 50
        assert speed_bonus(30_000, 30_000, 100) == 0
        assert speed_bonus(45_000, 30_000, 100) == 0

    def test_streak_multiplier_capped(self):
        settings = GameSettings(max_streak_multiplier=3)
        assert streak_multiplier(0, settings) == 1
        assert streak_multiplier(1, settings) == 2
        assert streak_multiplier(7, settings) == 3

    def test_streak_multiplier_disabled(self):
        assert streak_multiplier(4, GameSettings(streak_enabled=False)) == 1

    def test_question_points_override_setting(self):
        settings = GameSettings(points_correct=100)
        assert base_points(make_question(1, points=250), settings) == 250
        assert base_points(make_question(1), settings) == 100


class TestOpenFlat:
    def test_correct_and_wrong(self):
        settings = GameSettings(scoring_policy=ScoringPolicy.OPEN_FLAT, streak_enabled=False)
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 30)
        p1 = answer(ledger, PlayerKey.PLAYER1, AnswerColor.BLUE, 1_000)
        p2 = answer(ledger, PlayerKey.PLAYER2, AnswerColor.GREEN, 2_000)
        first, second = resolve_round(question, [p1, p2], ledger, settings)
        assert (first.new_score, first.streak, first.points_earned) == (100, 1, 100)
        assert (second.new_score, second.streak, second.points_earned) == (0, 0, 0)

    def test_streak_multiplies_base(self):
        settings = GameSettings(scoring_policy=ScoringPolicy.OPEN_FLAT)
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 30)
        player = answer(ledger, PlayerKey.PLAYER1, AnswerColor.BLUE, 1_000, score=300, streak=2)
        [result] = resolve_round(question, [player], ledger, settings)
        assert result.multiplier == 3
        assert result.points_earned == 300
        assert result.new_score == 600
        assert result.streak == 3

    def test_no_answer_resets_streak(self):
        settings = GameSettings(scoring_policy=ScoringPolicy.OPEN_FLAT)
        question = make_question(1)
        ledger = AnswerLedger(question, START, 30)
        player = Player(key=PlayerKey.PLAYER1, joined=True, score=200, streak=4)
        [result] = resolve_round(question, [player], ledger, settings)
        assert result.selection is None
        assert result.streak == 0
        assert result.new_score == 200

    def test_uncommitted_selection_is_scored(self):
        settings = GameSettings(scoring_policy=ScoringPolicy.OPEN_FLAT, streak_enabled=False)
        question = make_question(1, AnswerColor.YELLOW)
        ledger = AnswerLedger(question, START, 30)
        player = answer(ledger, PlayerKey.PLAYER1, AnswerColor.YELLOW)
        [result] = resolve_round(question, [player], ledger, settings)
        assert not result.committed
        assert result.is_correct
        assert result.points_earned == 100

    def test_unjoined_players_skipped(self):
        settings = GameSettings()
        question = make_question(1)
        ledger = AnswerLedger(question, START, 30)
        players = [Player(key=key) for key in PlayerKey]
        assert resolve_round(question, players, ledger, settings) == []


class TestOpenSpeed:
    def test_half_time_earns_half_bonus(self):
        settings = GameSettings(
            scoring_policy=ScoringPolicy.OPEN_SPEED, speed_bonus_max=100, streak_enabled=False
        )
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 30)
        player = answer(ledger, PlayerKey.PLAYER1, AnswerColor.BLUE, 15_000)
        [result] = resolve_round(question, [player], ledger, settings)
        assert result.speed_bonus == 50
        assert result.new_score == 150

    def test_bonus_added_before_multiplier(self):
        settings = GameSettings(scoring_policy=ScoringPolicy.OPEN_SPEED, speed_bonus_max=100)
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 10)
        player = answer(ledger, PlayerKey.PLAYER1, AnswerColor.BLUE, 0, streak=1)
        [result] = resolve_round(question, [player], ledger, settings)
        assert result.points_earned == (100 + 100) * 2

    def test_uncommitted_selection_gets_no_bonus(self):
        settings = GameSettings(scoring_policy=ScoringPolicy.OPEN_SPEED, streak_enabled=False)
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 30)
        player = answer(ledger, PlayerKey.PLAYER1, AnswerColor.BLUE)
        [result] = resolve_round(question, [player], ledger, settings)
        assert result.speed_bonus == 0
        assert result.points_earned == 100


class TestRacing:
    def settings(self, **changes):
        return GameSettings(
            scoring_policy=ScoringPolicy.RACING, first_bonus=50, first_penalty=50, **changes
        )

    def test_wrong_first_committer_clamped_at_zero(self):
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 30)
        p1 = answer(ledger, PlayerKey.PLAYER1, AnswerColor.GREEN, 1_000)
        p2 = answer(ledger, PlayerKey.PLAYER2, AnswerColor.BLUE, 2_000)
        first, second = resolve_round(question, [p1, p2], ledger, self.settings())
        assert first.is_first_commit
        assert first.penalty == 0
        assert first.new_score == 0
        assert not second.is_first_commit
        assert second.first_bonus == 0
        assert second.new_score == 100

    def test_wrong_first_committer_loses_penalty(self):
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 30)
        player = answer(ledger, PlayerKey.PLAYER1, AnswerColor.GREEN, 1_000, score=120)
        [result] = resolve_round(question, [player], ledger, self.settings())
        assert result.penalty == 50
        assert result.points_earned == -50
        assert result.new_score == 70

    def test_correct_first_committer_gets_bonus_after_multiplier(self):
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 30)
        player = answer(ledger, PlayerKey.PLAYER1, AnswerColor.BLUE, 1_000, streak=1)
        [result] = resolve_round(question, [player], ledger, self.settings())
        assert result.multiplier == 2
        assert result.first_bonus == 50
        assert result.points_earned == 100 * 2 + 50

    def test_wrong_non_first_has_no_penalty(self):
        question = make_question(1, AnswerColor.BLUE)
        ledger = AnswerLedger(question, START, 30)
        p1 = answer(ledger, PlayerKey.PLAYER1, AnswerColor.BLUE, 1_000)
        p2 = answer(ledger, PlayerKey.PLAYER2, AnswerColor.GREEN, 2_000, score=80)
        _, second = resolve_round(question, [p1, p2], ledger, self.settings())
        assert second.penalty == 0
        assert second.new_score == 80
