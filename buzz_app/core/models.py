"""Domain models for the buzzer quiz engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class PlayerKey(Enum):
    """One of the four fixed controller slots."""

    PLAYER1 = "player1"
    PLAYER2 = "player2"
    PLAYER3 = "player3"
    PLAYER4 = "player4"

    @property
    def index(self) -> int:
        return _PLAYER_ORDER.index(self)

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def label(self) -> str:
        return f"P{self.number}"


_PLAYER_ORDER: tuple[PlayerKey, ...] = tuple(PlayerKey)


class AnswerColor(Enum):
    """Answer labels, in controller order (first to fourth)."""

    BLUE = "blue"
    ORANGE = "orange"
    GREEN = "green"
    YELLOW = "yellow"


class ButtonRole(Enum):
    """The five buttons of a controller: the red buzzer and four answers."""

    COMMIT = "red"
    BLUE = "blue"
    ORANGE = "orange"
    GREEN = "green"
    YELLOW = "yellow"

    @property
    def color(self) -> AnswerColor | None:
        if self is ButtonRole.COMMIT:
            return None
        return AnswerColor(self.value)


class SessionPhase(Enum):
    """Phases of a game session."""

    LOBBY = "LOBBY"
    QUESTION_ACTIVE = "QUESTION_ACTIVE"
    ROUND_LOCKED = "ROUND_LOCKED"
    REVEAL = "REVEAL"
    SCOREBOARD = "SCOREBOARD"
    GAME_OVER = "GAME_OVER"


class ScoringPolicy(Enum):
    """How a round is resolved into points."""

    RACING = "racing"
    OPEN_FLAT = "open_flat"
    OPEN_SPEED = "open_speed"


@dataclass(frozen=True, slots=True)
class ButtonPress:
    """A debounced button press reported by the input device layer."""

    player: PlayerKey
    role: ButtonRole
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    """Multiple-choice question with one option per answer color."""

    id: int
    question_text: str
    options: Mapping[AnswerColor, str]
    correct_color: AnswerColor
    points: int | None = None
    time_limit_seconds: int | None = None

    def __post_init__(self) -> None:
        # Freeze the option mapping along with the dataclass.
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def option_text(self, color: AnswerColor) -> str:
        return self.options.get(color, "")


@dataclass(slots=True)
class Player:
    """Per-slot player record; score mutation belongs to the session."""

    key: PlayerKey
    joined: bool = False
    name: str = ""
    score: int = 0
    streak: int = 0
    selection: AnswerColor | None = None
    committed: bool = False
    committed_at: datetime | None = None
    correct_answers: int = 0
    best_streak: int = 0
    total_commit_ms: float = 0.0

    @property
    def display_name(self) -> str:
        return self.name or self.key.label

    def reset_round(self) -> None:
        self.selection = None
        self.committed = False
        self.committed_at = None

    def reset_game(self) -> None:
        self.score = 0
        self.streak = 0
        self.correct_answers = 0
        self.best_streak = 0
        self.total_commit_ms = 0.0
        self.reset_round()


@dataclass(frozen=True, slots=True)
class RoundResult:
    """Outcome of one round for one joined player."""

    player: PlayerKey
    selection: AnswerColor | None
    committed: bool
    is_correct: bool
    is_first_commit: bool
    base_points: int
    speed_bonus: int
    multiplier: int
    first_bonus: int
    penalty: int
    points_earned: int
    new_score: int
    streak: int
    commit_ms: float | None = None


@dataclass(frozen=True, slots=True)
class RankedPlayer:
    """Final standing of a player at game over."""

    rank: int
    player: PlayerKey
    score: int
    total_commit_ms: float
    correct_answers: int
    best_streak: int
    name: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.player.label


@dataclass(slots=True)
class QuizProgress:
    """Position of the quiz cursor, one-based for display."""

    current: int
    total: int
