"""Round resolution: turns a finished round into score deltas.

Everything here is a pure function of its arguments. Nothing reads the wall
clock; elapsed times come from the commit timestamps already captured in the
ledger, so replaying the same round always yields the same results.

Policies:

* ``RACING``: only the latched first committer can win ``first_bonus`` or lose
  ``first_penalty`` (clamped so the score never drops below zero). Everyone
  else earns the multiplied base value when correct and nothing when wrong.
* ``OPEN_FLAT``: each joined player is scored independently at
  ``base * multiplier``.
* ``OPEN_SPEED``: like ``OPEN_FLAT`` with a linear speed bonus that is added
  before the multiplier is applied.

The streak multiplier is ``min(streak + 1, max_streak_multiplier)`` when streak
scoring is enabled. Wrong or missing answers always reset the streak.
"""

from __future__ import annotations

import math
from typing import Iterable

from buzz_app.core.models import Player, QuizQuestion, RoundResult, ScoringPolicy
from buzz_app.core.services.answer_ledger import AnswerLedger
from buzz_app.core.settings import GameSettings


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def base_points(question: QuizQuestion, settings: GameSettings) -> int:
    if question.points is not None:
        return question.points
    return settings.points_correct


def streak_multiplier(streak: int, settings: GameSettings) -> int:
    if not settings.streak_enabled:
        return 1
    return min(streak + 1, settings.max_streak_multiplier)


def speed_bonus(elapsed_ms: float, total_ms: float, bonus_max: int) -> int:
    """Linear bonus: full at 0 ms, nothing at or beyond ``total_ms``."""
    if total_ms <= 0 or bonus_max <= 0:
        return 0
    fraction = max(0.0, 1.0 - elapsed_ms / total_ms)
    return round_half_up(bonus_max * fraction)


def resolve_round(
    question: QuizQuestion,
    players: Iterable[Player],
    ledger: AnswerLedger,
    settings: GameSettings,
) -> list[RoundResult]:
    """Score every joined player for the round, in slot order."""
    base = base_points(question, settings)
    return [
        _score_player(player, question, ledger, settings, base)
        for player in players
        if player.joined
    ]


def _score_player(
    player: Player,
    question: QuizQuestion,
    ledger: AnswerLedger,
    settings: GameSettings,
    base: int,
) -> RoundResult:
    policy = settings.scoring_policy
    elapsed = ledger.elapsed_ms(player)
    is_first = policy is ScoringPolicy.RACING and ledger.is_first_committer(player.key)
    selection = player.selection
    is_correct = selection is not None and selection is question.correct_color

    if not is_correct:
        penalty = 0
        if is_first and selection is not None:
            penalty = min(player.score, settings.first_penalty)
        return RoundResult(
            player=player.key,
            selection=selection,
            committed=player.committed,
            is_correct=False,
            is_first_commit=is_first,
            base_points=0,
            speed_bonus=0,
            multiplier=1,
            first_bonus=0,
            penalty=penalty,
            points_earned=-penalty,
            new_score=player.score - penalty,
            streak=0,
            commit_ms=elapsed,
        )

    multiplier = streak_multiplier(player.streak, settings)
    bonus = 0
    if policy is ScoringPolicy.OPEN_SPEED and elapsed is not None:
        bonus = speed_bonus(elapsed, ledger.time_limit_ms, settings.speed_bonus_max)
    first_bonus = settings.first_bonus if is_first else 0
    earned = (base + bonus) * multiplier + first_bonus
    return RoundResult(
        player=player.key,
        selection=selection,
        committed=player.committed,
        is_correct=True,
        is_first_commit=is_first,
        base_points=base,
        speed_bonus=bonus,
        multiplier=multiplier,
        first_bonus=first_bonus,
        penalty=0,
        points_earned=earned,
        new_score=player.score + earned,
        streak=player.streak + 1,
        commit_ms=elapsed,
    )
