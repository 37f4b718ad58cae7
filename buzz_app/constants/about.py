"""Static metadata describing BuzzQuiz."""

APP_NAME = "BuzzQuiz"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "BuzzQuiz is a party trivia game for up to four players on five-button buzzer controllers. "
    "Players race or answer openly against the clock, build answer streaks, and chase the high score."
)

HELP_TEXT = (
    "Lobby: press your red buzzer to join, then press blue, orange, green, yellow in order to start.\n"
    "Question: press a color to select an answer (you may change it), then the red buzzer to lock it in.\n"
    "Game over: press a red buzzer to return to the lobby.\n\n"
    "Keyboard controllers (buzzer, blue, orange, green, yellow):\n"
    "  P1: 1 2 3 4 5\n"
    "  P2: Q W E R T\n"
    "  P3: A S D F G\n"
    "  P4: Z X C V B\n\n"
    "Quiz files can be JSON (quizTitle/questions) or the plain-text format:\n\n"
    "Q: Which console introduced the D-pad?\n"
    "A: Atari 2600\nB: Game & Watch\nC: ColecoVision\nD: Intellivision\n"
    "CORRECT: B\nPOINTS: 100\nTIMELIMIT: 20"
)
