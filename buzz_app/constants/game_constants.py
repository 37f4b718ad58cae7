"""Game-related constants shared across UI and core layers."""

DEFAULT_TIME_LIMIT_SECONDS: int = 30
DEFAULT_POINTS_CORRECT: int = 100
DEFAULT_FIRST_BONUS: int = 50
DEFAULT_FIRST_PENALTY: int = 50
DEFAULT_SPEED_BONUS_MAX: int = 100
MAX_STREAK_MULTIPLIER: int = 5

CLOCK_TICK_INTERVAL_MS: int = 1000
TIME_LIMIT_WARNING_SECONDS: int = 10

# Lobby start sequence: blue, orange, green, yellow pressed in order.
START_SEQUENCE_TIMEOUT_MS: int = 2000

REVEAL_HOLD_MS: int = 4000
SCOREBOARD_HOLD_MS: int = 3000
NEXT_QUESTION_COUNTDOWN_SECONDS: int = 3

PLAYER_NAME_MAX_LENGTH: int = 12

HIGH_SCORE_KEY: str = "buzz_quiz_high_score"
HIGH_SCORE_FILE_NAME: str = "high_score.json"
DEFAULT_QUIZ_PATH: str = "quiz.json"

LED_FLASH_TIMES: int = 3
LED_FLASH_INTERVAL_MS: int = 200
