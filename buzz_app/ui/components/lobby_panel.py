"""Component for the lobby where players buzz in."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from buzz_app.constants.game_constants import PLAYER_NAME_MAX_LENGTH
from buzz_app.constants.ui_constants import (
    HIGH_SCORE_TEMPLATE,
    LOBBY_JOIN_PROMPT,
    LOBBY_NAME_PLACEHOLDER,
    LOBBY_SLOT_READY,
    LOBBY_SLOT_WAITING,
    LOBBY_START_BUTTON,
    LOBBY_START_PROMPT,
)
from buzz_app.core.models import PlayerKey
from buzz_app.core.services.game_session import GameSession
from buzz_app.styling.styles import Styles
from buzz_app.ui.dialog_helpers import show_warning


class LobbyPanel(QWidget):
    """Shows the four controller slots and who has joined."""

    def __init__(
        self,
        session: GameSession,
        on_start_game: callable,
        parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.session = session
        self.on_start_game = on_start_game
        self._game_font_size = 20

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(self.session.quiz_title, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.join_label = QLabel(LOBBY_JOIN_PROMPT, self)
        self.join_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.join_label)

        slot_grid = QGridLayout()
        self.slot_labels: dict[PlayerKey, QLabel] = {}
        self.name_edits: dict[PlayerKey, QLineEdit] = {}
        for key in PlayerKey:
            row, column = (key.index // 2) * 2, key.index % 2
            slot = QLabel(self)
            slot.setAlignment(Qt.AlignCenter)
            slot.setMinimumHeight(90)
            slot_grid.addWidget(slot, row, column)
            self.slot_labels[key] = slot

            name_edit = QLineEdit(self)
            name_edit.setPlaceholderText(LOBBY_NAME_PLACEHOLDER.format(label=key.label))
            name_edit.setMaxLength(PLAYER_NAME_MAX_LENGTH)
            name_edit.setAlignment(Qt.AlignCenter)
            name_edit.editingFinished.connect(lambda key=key: self._handle_name_edited(key))
            slot_grid.addWidget(name_edit, row + 1, column)
            self.name_edits[key] = name_edit
        layout.addLayout(slot_grid, stretch=1)

        self.start_prompt_label = QLabel(LOBBY_START_PROMPT, self)
        self.start_prompt_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.start_prompt_label)

        self.sequence_label = QLabel("", self)
        self.sequence_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.sequence_label)

        self.high_score_label = QLabel("", self)
        self.high_score_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.high_score_label)

        self.start_button = QPushButton(LOBBY_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start_click)
        layout.addWidget(self.start_button)

        self.refresh()

    def _handle_start_click(self) -> None:
        if not self.session.joined_players():
            show_warning(self, "No players", "At least one player must press the red buzzer before starting.")
            return
        self.on_start_game()

    def _handle_name_edited(self, key: PlayerKey) -> None:
        self.session.set_player_name(key, self.name_edits[key].text())
        # Controller keys are read by the window, not the name field.
        self.window().setFocus()
        self.refresh()

    def refresh(self) -> None:
        self.title_label.setText(self.session.quiz_title)
        for player in self.session.players():
            slot = self.slot_labels[player.key]
            status = LOBBY_SLOT_READY if player.joined else LOBBY_SLOT_WAITING
            slot.setText(f"{player.display_name}\n{status}")
            name_edit = self.name_edits[player.key]
            if not name_edit.hasFocus():
                name_edit.setText(player.name)
            slot.setStyleSheet(
                Styles.get_player_box_style(player.key, player.joined)
                + f" font-size: {self._game_font_size}pt;"
            )
        self.high_score_label.setText(HIGH_SCORE_TEMPLATE.format(score=self.session.high_score))
        self.start_button.setEnabled(bool(self.session.joined_players()))

    def set_sequence_progress(self, progress: int, total: int) -> None:
        self.sequence_label.setText("" if progress == 0 else "● " * progress + "○ " * (total - progress))

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        game_label_style = f"font-size: {font_size}pt;"
        self.join_label.setStyleSheet(game_label_style + " font-weight: bold;")
        self.start_prompt_label.setStyleSheet(game_label_style)
        self.sequence_label.setStyleSheet(game_label_style)
        for name_edit in self.name_edits.values():
            name_edit.setStyleSheet(f"font-size: {max(10, font_size - 6)}pt;")
        self.high_score_label.setStyleSheet(game_label_style)
        self.start_button.setStyleSheet(game_label_style)
        self.refresh()
