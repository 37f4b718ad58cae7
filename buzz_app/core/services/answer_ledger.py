"""Per-round record of selections and commits."""

from __future__ import annotations

import logging
from datetime import datetime

from buzz_app.core.models import AnswerColor, Player, PlayerKey, QuizQuestion

logger = logging.getLogger(__name__)


class AnswerLedger:
    """Scratch state for the question currently in play.

    The ledger enforces the player-level preconditions of selecting and
    committing, and writes the outcome onto the ``Player`` records it is given.
    Once a player has committed, their selection is frozen until the round is
    reset.
    """

    def __init__(
        self,
        question: QuizQuestion,
        started_at: datetime,
        time_limit_seconds: int,
        *,
        exclusive_first_commit: bool = False,
    ) -> None:
        self.question = question
        self.started_at = started_at
        self.time_limit_seconds = time_limit_seconds
        self.exclusive_first_commit = exclusive_first_commit
        self.first_committer: PlayerKey | None = None
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def time_limit_ms(self) -> int:
        return self.time_limit_seconds * 1000

    def select(self, player: Player, color: AnswerColor) -> bool:
        if self._resolved or not player.joined or player.committed:
            return False
        player.selection = color
        return True

    def commit(self, player: Player, at: datetime) -> bool:
        if self._resolved or not player.joined or player.committed:
            return False
        if player.selection is None:
            return False
        if self.exclusive_first_commit and self.first_committer is not None:
            logger.debug("%s commit rejected: round locked by %s", player.key.value, self.first_committer.value)
            return False
        player.committed = True
        player.committed_at = at
        if self.first_committer is None:
            self.first_committer = player.key
        return True

    def is_first_committer(self, key: PlayerKey) -> bool:
        return self.first_committer is key

    def elapsed_ms(self, player: Player) -> float | None:
        """Milliseconds from round start to the player's commit, or None."""
        if not player.committed or player.committed_at is None:
            return None
        elapsed = (player.committed_at - self.started_at).total_seconds() * 1000
        return max(0.0, elapsed)

    def mark_resolved(self) -> None:
        self._resolved = True
