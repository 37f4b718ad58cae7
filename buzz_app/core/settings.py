"""Runtime game settings."""

from __future__ import annotations

from dataclasses import dataclass, replace

from buzz_app.constants.game_constants import (
    DEFAULT_FIRST_BONUS,
    DEFAULT_FIRST_PENALTY,
    DEFAULT_POINTS_CORRECT,
    DEFAULT_SPEED_BONUS_MAX,
    DEFAULT_TIME_LIMIT_SECONDS,
    MAX_STREAK_MULTIPLIER,
)
from buzz_app.core.models import ScoringPolicy


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Scoring and timing configuration for one game."""

    seconds_per_question: int = DEFAULT_TIME_LIMIT_SECONDS
    points_correct: int = DEFAULT_POINTS_CORRECT
    scoring_policy: ScoringPolicy = ScoringPolicy.OPEN_FLAT
    streak_enabled: bool = True
    max_streak_multiplier: int = MAX_STREAK_MULTIPLIER
    first_bonus: int = DEFAULT_FIRST_BONUS
    first_penalty: int = DEFAULT_FIRST_PENALTY
    speed_bonus_max: int = DEFAULT_SPEED_BONUS_MAX
    # Racing only: the first commit locks everyone else out and ends the round.
    racing_lockout: bool = False
    # Shuffle the question order at every game start; a seed makes it repeatable.
    shuffle_questions: bool = False
    shuffle_seed: int | None = None

    def validate(self) -> GameSettings:
        if self.seconds_per_question <= 0:
            raise ValueError("Seconds per question must be a positive integer.")
        if self.points_correct < 0:
            raise ValueError("Points for a correct answer cannot be negative.")
        if self.first_bonus < 0 or self.first_penalty < 0:
            raise ValueError("Bonus and penalty magnitudes cannot be negative.")
        if self.speed_bonus_max < 0:
            raise ValueError("Speed bonus cannot be negative.")
        if self.max_streak_multiplier < 1:
            raise ValueError("Streak multiplier cap must be at least 1.")
        return self

    def with_changes(self, **changes: object) -> GameSettings:
        return replace(self, **changes).validate()
