"""Settings dialog for scoring, timing and display preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from buzz_app.core.models import ScoringPolicy
from buzz_app.core.settings import GameSettings

_POLICY_LABELS: dict[ScoringPolicy, str] = {
    ScoringPolicy.OPEN_FLAT: "Open answer (flat points)",
    ScoringPolicy.OPEN_SPEED: "Open answer (speed bonus)",
    ScoringPolicy.RACING: "Racing (first buzzer bonus/penalty)",
}


class SettingsDialog(QDialog):
    """Dialog for configuring game rules and font sizes."""

    def __init__(
        self,
        parent=None,
        settings: GameSettings | None = None,
        ui_font_size: int = 10,
        game_font_size: int = 20,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(420)

        self._settings = settings or GameSettings()
        self._ui_font_size = ui_font_size
        self._game_font_size = game_font_size

        self._build_ui()
        self._sync_policy_controls()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Rules
        rules_group = QGroupBox("Game Rules")
        rules_layout = QVBoxLayout()
        rules_group.setLayout(rules_layout)

        policy_row = QHBoxLayout()
        policy_row.addWidget(QLabel("Scoring:"))
        policy_row.addStretch()
        self.policy_combo = QComboBox()
        for policy, label in _POLICY_LABELS.items():
            self.policy_combo.addItem(label, policy)
        self.policy_combo.setCurrentIndex(list(_POLICY_LABELS).index(self._settings.scoring_policy))
        self.policy_combo.currentIndexChanged.connect(self._sync_policy_controls)
        policy_row.addWidget(self.policy_combo)
        rules_layout.addLayout(policy_row)

        self.seconds_spinbox = self._add_spin_row(
            rules_layout, "Seconds per question:", 5, 120, self._settings.seconds_per_question, " s"
        )
        self.points_spinbox = self._add_spin_row(
            rules_layout, "Points for a correct answer:", 0, 1000, self._settings.points_correct
        )
        self.speed_bonus_spinbox = self._add_spin_row(
            rules_layout, "Maximum speed bonus:", 0, 1000, self._settings.speed_bonus_max
        )
        self.first_bonus_spinbox = self._add_spin_row(
            rules_layout, "First buzzer bonus:", 0, 1000, self._settings.first_bonus
        )
        self.first_penalty_spinbox = self._add_spin_row(
            rules_layout, "First buzzer penalty:", 0, 1000, self._settings.first_penalty
        )

        self.lockout_checkbox = QCheckBox("First buzzer locks everyone else out")
        self.lockout_checkbox.setToolTip(
            "Racing only: the first lock-in ends the round immediately."
        )
        self.lockout_checkbox.setChecked(self._settings.racing_lockout)
        rules_layout.addWidget(self.lockout_checkbox)

        self.streak_checkbox = QCheckBox("Streak multiplier")
        self.streak_checkbox.setChecked(self._settings.streak_enabled)
        rules_layout.addWidget(self.streak_checkbox)

        self.streak_cap_spinbox = self._add_spin_row(
            rules_layout, "Maximum multiplier:", 1, 10, self._settings.max_streak_multiplier, "x"
        )
        self.streak_checkbox.toggled.connect(self.streak_cap_spinbox.setEnabled)
        self.streak_cap_spinbox.setEnabled(self._settings.streak_enabled)

        self.shuffle_checkbox = QCheckBox("Shuffle question order")
        self.shuffle_checkbox.setChecked(self._settings.shuffle_questions)
        rules_layout.addWidget(self.shuffle_checkbox)

        layout.addWidget(rules_group)

        # Fonts
        font_group = QGroupBox("Font Sizes")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)
        self.ui_font_spinbox = self._add_spin_row(
            font_layout, "UI Font Size (buttons, menus):", 8, 24, self._ui_font_size, " pt"
        )
        self.game_font_spinbox = self._add_spin_row(
            font_layout, "Game Font Size (questions, scores):", 12, 48, self._game_font_size, " pt"
        )
        layout.addWidget(font_group)

        # Buttons
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def _add_spin_row(
        self,
        layout: QVBoxLayout,
        caption: str,
        minimum: int,
        maximum: int,
        value: int,
        suffix: str = "",
    ) -> QSpinBox:
        row = QHBoxLayout()
        row.addWidget(QLabel(caption))
        row.addStretch()
        spinbox = QSpinBox()
        spinbox.setRange(minimum, maximum)
        spinbox.setValue(value)
        if suffix:
            spinbox.setSuffix(suffix)
        row.addWidget(spinbox)
        layout.addLayout(row)
        return spinbox

    def _sync_policy_controls(self, *_args) -> None:
        policy = self.policy_combo.currentData()
        racing = policy is ScoringPolicy.RACING
        self.first_bonus_spinbox.setEnabled(racing)
        self.first_penalty_spinbox.setEnabled(racing)
        self.lockout_checkbox.setEnabled(racing)
        self.speed_bonus_spinbox.setEnabled(policy is ScoringPolicy.OPEN_SPEED)

    def get_game_settings(self) -> GameSettings:
        """Build validated settings from the dialog fields."""
        return self._settings.with_changes(
            scoring_policy=self.policy_combo.currentData(),
            seconds_per_question=self.seconds_spinbox.value(),
            points_correct=self.points_spinbox.value(),
            speed_bonus_max=self.speed_bonus_spinbox.value(),
            first_bonus=self.first_bonus_spinbox.value(),
            first_penalty=self.first_penalty_spinbox.value(),
            racing_lockout=self.lockout_checkbox.isChecked(),
            streak_enabled=self.streak_checkbox.isChecked(),
            max_streak_multiplier=self.streak_cap_spinbox.value(),
            shuffle_questions=self.shuffle_checkbox.isChecked(),
        )

    def get_ui_font_size(self) -> int:
        return self.ui_font_spinbox.value()

    def get_game_font_size(self) -> int:
        return self.game_font_spinbox.value()
