"""Component for the final standings."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QPushButton, QVBoxLayout, QWidget

from buzz_app.constants.ui_constants import (
    HIGH_SCORE_TEMPLATE,
    NEW_HIGH_SCORE_TEMPLATE,
    PLAY_AGAIN_BUTTON,
)
from buzz_app.core.models import RankedPlayer
from buzz_app.styling.styles import Styles


class GameOverPanel(QWidget):
    """Ranking, winner and high score after the last question."""

    def __init__(self, on_play_again: callable, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.on_play_again = on_play_again
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.winner_label = QLabel("", self)
        self.winner_label.setAlignment(Qt.AlignCenter)
        self.winner_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.winner_label)

        self.ranking_list = QListWidget(self)
        layout.addWidget(self.ranking_list, stretch=1)

        self.high_score_label = QLabel("", self)
        self.high_score_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.high_score_label)

        self.play_again_button = QPushButton(PLAY_AGAIN_BUTTON, self)
        self.play_again_button.clicked.connect(self.on_play_again)
        layout.addWidget(self.play_again_button)

    def show_results(self, ranking: list[RankedPlayer], high_score: int, is_new_high_score: bool) -> None:
        self.ranking_list.clear()
        for entry in ranking:
            QListWidgetItem(
                f"{entry.rank}. {entry.display_name}  {entry.score} pts"
                f"  ({entry.correct_answers} correct, best streak {entry.best_streak})",
                self.ranking_list,
            )
        if ranking:
            self.winner_label.setText(f"{ranking[0].display_name} WINS!")
        else:
            self.winner_label.setText("Game over")
        template = NEW_HIGH_SCORE_TEMPLATE if is_new_high_score else HIGH_SCORE_TEMPLATE
        self.high_score_label.setText(template.format(score=high_score))

    def apply_font_size(self, font_size: int) -> None:
        game_label_style = f"font-size: {font_size}pt;"
        self.ranking_list.setStyleSheet(game_label_style)
        self.high_score_label.setStyleSheet(game_label_style + " font-weight: bold;")
        self.play_again_button.setStyleSheet(game_label_style)
