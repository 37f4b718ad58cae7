"""Qt main window hosting the lobby, live game and game-over screens."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum, auto
from pathlib import Path

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from buzz_app.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from buzz_app.constants.game_constants import (
    NEXT_QUESTION_COUNTDOWN_SECONDS,
    REVEAL_HOLD_MS,
    SCOREBOARD_HOLD_MS,
)
from buzz_app.constants.ui_constants import (
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    KEYBOARD_BINDINGS,
    MODE_BUTTON_ABORT,
    MODE_BUTTON_IMPORT,
    WINDOW_TITLE,
)
from buzz_app.core.events import (
    AnswerCommitted,
    AnswerSelected,
    GameOver,
    NewHighScore,
    PlayerJoined,
    RoundResolved,
    StateChanged,
    Subscription,
    TimerTick,
)
from buzz_app.core.input_router import START_SEQUENCE, InputRouter
from buzz_app.core.models import ButtonPress, SessionPhase
from buzz_app.core.quiz_importer import QuizImportError, load_quiz_from_file
from buzz_app.core.services.game_session import GameSession
from buzz_app.core.services.indicator_feedback import IndicatorFeedback, NullIndicatorDevice
from buzz_app.core.services.quiz_repository import QuizRepository
from buzz_app.core.services.round_clock import RoundClock
from buzz_app.styling.styles import Styles
from buzz_app.ui.components.game_over_panel import GameOverPanel
from buzz_app.ui.components.live_panel import LivePanel
from buzz_app.ui.components.lobby_panel import LobbyPanel
from buzz_app.ui.qt_timer_backend import QtTimerBackend
from buzz_app.ui.dialog_helpers import (
    confirm_abort_game,
    confirm_import_quiz,
    show_error,
    show_info,
    show_warning,
)
from buzz_app.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


class ScreenMode(Enum):
    """Which panel the stacked widget shows."""

    LOBBY = auto()
    LIVE = auto()
    GAME_OVER = auto()


class GameMainWindow(QMainWindow):
    """Main Qt window; panels only read session state and call its operations."""

    def __init__(self, session: GameSession, quiz: QuizRepository) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setFocusPolicy(Qt.StrongFocus)

        self.session = session
        self.quiz = quiz
        self.router = InputRouter(session)
        self.indicators = IndicatorFeedback(session.events, NullIndicatorDevice())

        self._ui_font_size: int = 10
        self._game_font_size: int = 20
        self._new_high_score: bool = False

        self._build_ui()
        self._configure_timers()
        self._subscriptions: list[Subscription] = self._subscribe()
        self._apply_styles()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.lobby_panel = LobbyPanel(self.session, on_start_game=self._handle_start_game, parent=self)
        self.live_panel = LivePanel(self.session, parent=self)
        self.game_over_panel = GameOverPanel(on_play_again=self._handle_play_again, parent=self)
        self.game_over_panel.ranking_list.setFocusPolicy(Qt.NoFocus)

        self.mode_stack.addWidget(self.lobby_panel)
        self.mode_stack.addWidget(self.live_panel)
        self.mode_stack.addWidget(self.game_over_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(ScreenMode.LOBBY)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.import_button = QPushButton(MODE_BUTTON_IMPORT, self)
        self.import_button.clicked.connect(self._handle_import_quiz)
        button_row.addWidget(self.import_button)

        self.abort_button = QPushButton(MODE_BUTTON_ABORT, self)
        self.abort_button.clicked.connect(self._handle_abort)
        button_row.addWidget(self.abort_button)

        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        # Buttons must not swallow the controller keys.
        for button in self._toolbar_buttons():
            button.setFocusPolicy(Qt.NoFocus)

        layout.addLayout(button_row)

    def _toolbar_buttons(self) -> list[QPushButton]:
        return [
            self.import_button,
            self.abort_button,
            self.about_button,
            self.help_button,
            self.settings_button,
        ]

    def _configure_timers(self) -> None:
        self.hold_timer = QTimer(self)
        self.hold_timer.setSingleShot(True)
        self.hold_timer.timeout.connect(self._handle_hold_elapsed)

        self.countdown = RoundClock(
            QtTimerBackend(self), self.live_panel.show_countdown, self._handle_countdown_finished
        )

    def _subscribe(self) -> list[Subscription]:
        events = self.session.events
        return [
            events.subscribe(StateChanged, self._on_state_changed),
            events.subscribe(PlayerJoined, self._on_player_joined),
            events.subscribe(AnswerSelected, self._on_answer_changed),
            events.subscribe(AnswerCommitted, self._on_answer_changed),
            events.subscribe(TimerTick, self._on_timer_tick),
            events.subscribe(RoundResolved, self._on_round_resolved),
            events.subscribe(NewHighScore, self._on_new_high_score),
            events.subscribe(GameOver, self._on_game_over),
        ]

    # --- Session events ---

    def _on_state_changed(self, event: StateChanged) -> None:
        phase = event.to_phase
        if phase is SessionPhase.LOBBY:
            self.hold_timer.stop()
            self.countdown.stop()
            self._new_high_score = False
            self.lobby_panel.refresh()
            self.lobby_panel.set_sequence_progress(0, len(START_SEQUENCE))
            self._set_mode(ScreenMode.LOBBY)
        elif phase is SessionPhase.QUESTION_ACTIVE:
            question = self.session.current_question()
            if question is not None:
                self.live_panel.show_question(question)
            self._set_mode(ScreenMode.LIVE)
        elif phase is SessionPhase.SCOREBOARD:
            self.live_panel.show_scoreboard()
            self.hold_timer.start(SCOREBOARD_HOLD_MS)
        elif phase is SessionPhase.GAME_OVER:
            self.hold_timer.stop()
            self.countdown.stop()
            self._set_mode(ScreenMode.GAME_OVER)

    def _on_player_joined(self, event: PlayerJoined) -> None:
        self.lobby_panel.refresh()

    def _on_answer_changed(self, event: AnswerSelected | AnswerCommitted) -> None:
        self.live_panel.refresh_players()

    def _on_timer_tick(self, event: TimerTick) -> None:
        self.live_panel.update_timer(event.value)

    def _on_round_resolved(self, event: RoundResolved) -> None:
        self.live_panel.show_reveal(event.correct_color, event.results)
        self.hold_timer.start(REVEAL_HOLD_MS)

    def _on_new_high_score(self, event: NewHighScore) -> None:
        self._new_high_score = True

    def _on_game_over(self, event: GameOver) -> None:
        self.game_over_panel.show_results(list(event.ranking), self.session.high_score, self._new_high_score)

    def _handle_hold_elapsed(self) -> None:
        # Operations reject stale phases, so a late timeout is harmless.
        if self.session.phase is SessionPhase.REVEAL:
            self.session.show_scoreboard()
        elif self.session.phase is SessionPhase.SCOREBOARD:
            if self.session.has_next_question():
                self.countdown.start(NEXT_QUESTION_COUNTDOWN_SECONDS)
            else:
                self.session.advance()

    def _handle_countdown_finished(self) -> None:
        self.session.advance()

    # --- Controller input ---

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802 (Qt override)
        binding = KEYBOARD_BINDINGS.get(event.text().upper())
        if binding is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        player, role = binding
        self.router.handle(ButtonPress(player, role, datetime.now(timezone.utc)))
        if self.session.phase is SessionPhase.LOBBY:
            self.lobby_panel.set_sequence_progress(self.router.start_sequence_progress, len(START_SEQUENCE))

    # --- Toolbar actions ---

    def _set_mode(self, mode: ScreenMode) -> None:
        index_map = {
            ScreenMode.LOBBY: 0,
            ScreenMode.LIVE: 1,
            ScreenMode.GAME_OVER: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])
        in_lobby = mode == ScreenMode.LOBBY
        self.import_button.setEnabled(in_lobby)
        self.abort_button.setEnabled(not in_lobby)

    def _handle_start_game(self) -> None:
        if not self.session.start_session():
            show_warning(self, "Cannot start", "Make sure a player has joined and a quiz is loaded.")

    def _handle_play_again(self) -> None:
        self.session.restart()

    def _handle_abort(self) -> None:
        if self.session.phase is SessionPhase.LOBBY:
            return
        if confirm_abort_game(self):
            self.session.restart(force=True)

    def _handle_import_quiz(self) -> None:
        if self.session.phase is not SessionPhase.LOBBY:
            return
        if self.quiz.has_questions() and not confirm_import_quiz(self):
            return

        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            imported = load_quiz_from_file(Path(file_path))
        except (OSError, QuizImportError) as exc:
            logger.warning("Import of %s failed: %s", file_path, exc)
            show_error(self, "Import failed", str(exc))
            return

        try:
            self.quiz.load_questions(imported.questions, imported.title)
        except ValueError as exc:
            show_error(self, "Quiz rejected", str(exc))
            return

        self.lobby_panel.refresh()
        show_info(
            self,
            "Quiz imported",
            f"Loaded \"{imported.title}\" with {len(imported.questions)} questions.",
        )

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self.session.settings,
            self._ui_font_size,
            self._game_font_size,
        )
        if not dialog.exec():
            return

        self._ui_font_size = dialog.get_ui_font_size()
        self._game_font_size = dialog.get_game_font_size()
        try:
            settings = dialog.get_game_settings()
        except ValueError as exc:
            show_error(self, "Invalid settings", str(exc))
            return
        if settings != self.session.settings and not self.session.update_settings(settings):
            show_warning(self, "Game in progress", "Rule changes can only be made in the lobby.")
        self._apply_styles()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        for button in self._toolbar_buttons():
            button.setStyleSheet(ui_style)

        self.lobby_panel.apply_font_size(self._game_font_size)
        self.live_panel.apply_font_size(self._game_font_size)
        self.game_over_panel.apply_font_size(self._game_font_size)

    def closeEvent(self, event) -> None:  # noqa: N802 (Qt override)
        self.hold_timer.stop()
        self.countdown.stop()
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self.indicators.close()
        self.session.restart(force=True)
        super().closeEvent(event)
