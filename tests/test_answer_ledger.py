"""Tests for the per-round answer ledger."""

from datetime import datetime, timedelta, timezone

from buzz_app.core.models import AnswerColor, Player, PlayerKey
from buzz_app.core.services.answer_ledger import AnswerLedger

from conftest import make_question

START = datetime(2000, 1, 1, tzinfo=timezone.utc)


def joined(key):
    return Player(key=key, joined=True)


def make_ledger(exclusive=False):
    return AnswerLedger(make_question(1), START, 30, exclusive_first_commit=exclusive)


class TestSelect:
    def test_selection_can_change_before_commit(self):
        ledger = make_ledger()
        player = joined(PlayerKey.PLAYER1)
        assert ledger.select(player, AnswerColor.BLUE)
        assert ledger.select(player, AnswerColor.YELLOW)
        assert player.selection is AnswerColor.YELLOW

    def test_unjoined_player_cannot_select(self):
        ledger = make_ledger()
        player = Player(key=PlayerKey.PLAYER2)
        assert not ledger.select(player, AnswerColor.BLUE)
        assert player.selection is None

    def test_selection_frozen_after_commit(self):
        ledger = make_ledger()
        player = joined(PlayerKey.PLAYER1)
        ledger.select(player, AnswerColor.GREEN)
        ledger.commit(player, START)
        assert not ledger.select(player, AnswerColor.BLUE)
        assert player.selection is AnswerColor.GREEN


class TestCommit:
    def test_commit_requires_selection(self):
        ledger = make_ledger()
        player = joined(PlayerKey.PLAYER1)
        assert not ledger.commit(player, START)
        assert not player.committed

    def test_second_commit_fails(self):
        ledger = make_ledger()
        player = joined(PlayerKey.PLAYER1)
        ledger.select(player, AnswerColor.GREEN)
        assert ledger.commit(player, START + timedelta(seconds=2))
        assert not ledger.commit(player, START + timedelta(seconds=3))
        assert player.committed_at == START + timedelta(seconds=2)
        assert ledger.first_committer is PlayerKey.PLAYER1

    def test_first_committer_latched_once(self):
        ledger = make_ledger()
        first, second = joined(PlayerKey.PLAYER3), joined(PlayerKey.PLAYER1)
        for player in (first, second):
            ledger.select(player, AnswerColor.BLUE)
        # Same timestamp: the first one processed wins.
        ledger.commit(first, START)
        ledger.commit(second, START)
        assert ledger.first_committer is PlayerKey.PLAYER3
        assert ledger.is_first_committer(PlayerKey.PLAYER3)
        assert not ledger.is_first_committer(PlayerKey.PLAYER1)

    def test_exclusive_mode_blocks_later_commits(self):
        ledger = make_ledger(exclusive=True)
        first, second = joined(PlayerKey.PLAYER1), joined(PlayerKey.PLAYER2)
        for player in (first, second):
            ledger.select(player, AnswerColor.ORANGE)
        assert ledger.commit(first, START)
        assert not ledger.commit(second, START)
        assert not second.committed

    def test_resolved_ledger_rejects_everything(self):
        ledger = make_ledger()
        player = joined(PlayerKey.PLAYER1)
        ledger.mark_resolved()
        assert not ledger.select(player, AnswerColor.BLUE)
        assert not ledger.commit(player, START)


class TestElapsed:
    def test_elapsed_none_without_commit(self):
        ledger = make_ledger()
        assert ledger.elapsed_ms(joined(PlayerKey.PLAYER1)) is None

    def test_elapsed_from_round_start(self):
        ledger = make_ledger()
        player = joined(PlayerKey.PLAYER1)
        ledger.select(player, AnswerColor.BLUE)
        ledger.commit(player, START + timedelta(milliseconds=4_200))
        assert ledger.elapsed_ms(player) == 4_200
        assert ledger.time_limit_ms == 30_000
