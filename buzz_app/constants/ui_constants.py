"""Qt UI constants used across widgets."""

from buzz_app.core.models import ButtonRole, PlayerKey

WINDOW_TITLE: str = "BuzzQuiz"

MODE_BUTTON_IMPORT: str = "Import Quiz"
MODE_BUTTON_ABORT: str = "Abort Game"

IMPORT_DIALOG_TITLE: str = "Select quiz file"
IMPORT_FILE_FILTER: str = "Quiz files (*.json *.txt);;All files (*.*)"

LOBBY_JOIN_PROMPT: str = "PRESS THE RED BUZZER TO JOIN"
LOBBY_START_PROMPT: str = "TO START: BLUE → ORANGE → GREEN → YELLOW"
LOBBY_SLOT_WAITING: str = "Press red to join"
LOBBY_SLOT_READY: str = "READY!"
LOBBY_NAME_PLACEHOLDER: str = "Name (default {label})"
LOBBY_START_BUTTON: str = "Start Game"

STATUS_SELECTING: str = "SELECTING..."
STATUS_LOCKED: str = "✓ LOCKED"
PLAY_AGAIN_BUTTON: str = "Play Again"
NEW_HIGH_SCORE_TEMPLATE: str = "NEW HIGH SCORE: {score}"
HIGH_SCORE_TEMPLATE: str = "High score: {score}"

# key -> (player, button); mirrors the five buttons of each controller.
KEYBOARD_BINDINGS: dict[str, tuple[PlayerKey, ButtonRole]] = {}
for _player, _keys in (
    (PlayerKey.PLAYER1, "12345"),
    (PlayerKey.PLAYER2, "QWERT"),
    (PlayerKey.PLAYER3, "ASDFG"),
    (PlayerKey.PLAYER4, "ZXCVB"),
):
    for _key, _role in zip(_keys, ButtonRole):
        KEYBOARD_BINDINGS[_key] = (_player, _role)
del _player, _keys, _key, _role
