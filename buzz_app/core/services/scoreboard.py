"""Final standings."""

from __future__ import annotations

from typing import Iterable

from buzz_app.core.models import Player, RankedPlayer


def rank_players(players: Iterable[Player]) -> list[RankedPlayer]:
    """Rank joined players by score, then by total time-to-commit, then slot."""
    ordered = sorted(
        (player for player in players if player.joined),
        key=lambda p: (-p.score, p.total_commit_ms, p.key.index),
    )
    return [
        RankedPlayer(
            rank=position,
            player=player.key,
            score=player.score,
            total_commit_ms=player.total_commit_ms,
            correct_answers=player.correct_answers,
            best_streak=player.best_streak,
            name=player.display_name,
        )
        for position, player in enumerate(ordered, start=1)
    ]
