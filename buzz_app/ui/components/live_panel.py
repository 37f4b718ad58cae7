"""Component for the question, reveal and scoreboard screens."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QVBoxLayout,
    QWidget,
)

from buzz_app.constants.game_constants import TIME_LIMIT_WARNING_SECONDS
from buzz_app.constants.ui_constants import STATUS_LOCKED, STATUS_SELECTING
from buzz_app.core.models import AnswerColor, PlayerKey, QuizQuestion, RoundResult, ScoringPolicy
from buzz_app.core.services.game_session import GameSession
from buzz_app.core.services.scoreboard import rank_players
from buzz_app.styling.styles import Styles
from buzz_app.ui.question_renderer import render_option_html, render_question_html


class LivePanel(QWidget):
    """UI component for a running game."""

    def __init__(self, session: GameSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = session
        self._game_font_size: int = 20
        self._time_limit_seconds: int = 0
        self._revealed_color: AnswerColor | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Progress and timer row
        timer_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        timer_row.addWidget(self.progress_label)

        self.time_limit_progress = QProgressBar(self)
        self.time_limit_progress.setRange(0, 1000)
        self.time_limit_progress.setTextVisible(False)
        timer_row.addWidget(self.time_limit_progress, stretch=1)

        self.time_limit_label = QLabel("", self)
        timer_row.addWidget(self.time_limit_label)
        layout.addLayout(timer_row)

        self.question_label = QLabel(self)
        self.question_label.setTextFormat(Qt.RichText)
        self.question_label.setWordWrap(True)
        self.question_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.question_label, stretch=1)

        # Answer tiles in controller order
        tile_grid = QGridLayout()
        self.answer_tiles: dict[AnswerColor, QLabel] = {}
        for idx, color in enumerate(AnswerColor):
            tile = QLabel(self)
            tile.setTextFormat(Qt.RichText)
            tile.setWordWrap(True)
            tile.setAlignment(Qt.AlignCenter)
            tile.setMinimumHeight(80)
            tile_grid.addWidget(tile, idx // 2, idx % 2)
            self.answer_tiles[color] = tile
        layout.addLayout(tile_grid, stretch=1)

        # Player status boxes
        player_row = QHBoxLayout()
        self.player_labels: dict[PlayerKey, QLabel] = {}
        for key in PlayerKey:
            label = QLabel(self)
            label.setAlignment(Qt.AlignCenter)
            player_row.addWidget(label)
            self.player_labels[key] = label
        layout.addLayout(player_row)

        self.scoreboard_label = QLabel("", self)
        self.scoreboard_label.setAlignment(Qt.AlignCenter)
        self.scoreboard_label.setVisible(False)
        layout.addWidget(self.scoreboard_label)

        self.countdown_label = QLabel("", self)
        self.countdown_label.setAlignment(Qt.AlignCenter)
        self.countdown_label.setVisible(False)
        layout.addWidget(self.countdown_label)

    def show_question(self, question: QuizQuestion) -> None:
        self._revealed_color = None
        self._time_limit_seconds = question.time_limit_seconds or self.session.settings.seconds_per_question
        progress = self.session.question_progress()
        self.progress_label.setText(f"Question {progress.current} of {progress.total}")
        self.question_label.setText(render_question_html(question, self._game_font_size))
        self._render_tiles(question)
        self.scoreboard_label.setVisible(False)
        self.countdown_label.setVisible(False)
        self.update_timer(self._time_limit_seconds)
        self.refresh_players()

    def update_timer(self, remaining: int) -> None:
        total = self._time_limit_seconds
        fraction = 0.0 if total <= 0 else max(0.0, min(1.0, remaining / total))
        self.time_limit_progress.setValue(int(fraction * 1000))
        self.time_limit_label.setText(f"{remaining}s")
        warning = 0 < remaining <= TIME_LIMIT_WARNING_SECONDS
        self.time_limit_label.setStyleSheet(Styles.get_timer_style(self._game_font_size, warning))

    def refresh_players(self, results: tuple[RoundResult, ...] = ()) -> None:
        by_player = {result.player: result for result in results}
        first_committer = self.session.first_committer
        for player in self.session.players():
            label = self.player_labels[player.key]
            label.setVisible(player.joined)
            if not player.joined:
                continue
            result = by_player.get(player.key)
            if result is not None:
                status = f"{result.points_earned:+d}"
            elif player.committed:
                status = STATUS_LOCKED
            elif player.selection is not None:
                status = STATUS_SELECTING
            else:
                status = ""
            if first_committer is player.key and self.session.settings.scoring_policy is ScoringPolicy.RACING:
                status = f"⚡ {status}"
            streak = f"  🔥{player.streak}" if player.streak > 1 else ""
            label.setText(f"{player.display_name}: {player.score}{streak}\n{status}")
            label.setStyleSheet(
                Styles.get_player_box_style(player.key, player.committed or result is not None)
                + f" font-size: {max(10, self._game_font_size - 6)}pt;"
            )

    def show_reveal(self, correct_color: AnswerColor, results: tuple[RoundResult, ...]) -> None:
        self._revealed_color = correct_color
        question = self.session.current_question()
        if question is not None:
            self._render_tiles(question)
        self.refresh_players(results)

    def show_scoreboard(self) -> None:
        standings = rank_players(self.session.players())
        lines = [f"{entry.rank}. {entry.display_name}  {entry.score}" for entry in standings]
        self.scoreboard_label.setText("\n".join(lines))
        self.scoreboard_label.setVisible(True)

    def show_countdown(self, value: int) -> None:
        """Show the get-ready number between questions; 0 hides it."""
        self.countdown_label.setVisible(value > 0)
        if value > 0:
            self.scoreboard_label.setVisible(False)
            self.countdown_label.setText(str(value))

    def _render_tiles(self, question: QuizQuestion) -> None:
        tile_font = max(10, self._game_font_size - 4)
        for color, tile in self.answer_tiles.items():
            tile.setText(render_option_html(question, color))
            revealed = self._revealed_color is not None
            tile.setStyleSheet(
                Styles.get_answer_tile_style(
                    color,
                    tile_font,
                    faded=revealed and color is not self._revealed_color,
                    highlighted=color is self._revealed_color,
                )
            )

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        game_label_style = f"font-size: {font_size}pt;"
        self.progress_label.setStyleSheet(game_label_style)
        self.scoreboard_label.setStyleSheet(game_label_style + " font-weight: bold;")
        self.countdown_label.setStyleSheet(f"font-size: {font_size * 4}pt; font-weight: bold;")
        self.time_limit_label.setStyleSheet(Styles.get_timer_style(font_size, warning=False))

        # Refresh the question if one is on screen
        question = self.session.current_question()
        if question is not None:
            self.question_label.setText(render_question_html(question, font_size))
            self._render_tiles(question)
