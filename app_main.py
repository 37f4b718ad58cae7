"""Application entry point for BuzzQuiz."""

from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from buzz_app.constants.game_constants import DEFAULT_QUIZ_PATH
from buzz_app.core.quiz_importer import load_quiz_or_fallback
from buzz_app.core.services.game_session import GameSession
from buzz_app.core.services.high_score_store import HighScoreStore
from buzz_app.core.services.quiz_repository import QuizRepository
from buzz_app.ui.game_main_window import GameMainWindow
from buzz_app.ui.qt_timer_backend import QtTimerBackend
from buzz_app.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, load the quiz, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting BuzzQuiz…")

    quiz_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(DEFAULT_QUIZ_PATH)
    imported = load_quiz_or_fallback(quiz_path)
    quiz = QuizRepository()
    quiz.load_questions(imported.questions, imported.title)
    logger.info("Loaded \"%s\" (%d questions)", imported.title, len(imported.questions))

    app = QApplication(sys.argv)
    high_scores = HighScoreStore()
    logger.info("High score %d from %s", high_scores.value, high_scores.path)
    session = GameSession(quiz, high_scores, QtTimerBackend(app))
    window = GameMainWindow(session=session, quiz=quiz)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
