"""Qt UI components for the buzzer quiz."""

from .dialog_helpers import (
    confirm_abort_game,
    confirm_import_quiz,
    show_error,
    show_info,
    show_warning,
)
from .game_main_window import GameMainWindow
from .qt_timer_backend import QtTimerBackend
from .question_renderer import render_option_html, render_question_html

__all__ = [
    "GameMainWindow",
    "QtTimerBackend",
    "confirm_abort_game",
    "confirm_import_quiz",
    "show_error",
    "show_info",
    "show_warning",
    "render_option_html",
    "render_question_html",
]
