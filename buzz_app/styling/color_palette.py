"""Color palette for BuzzQuiz supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from buzz_app.core.models import AnswerColor, PlayerKey


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(
        light="#000000",      # Black
        dark="#F5F7FF"        # Off-white
    )

    BACKGROUND_PRIMARY = ThemeColors(
        light="#FFFFFF",
        dark="#0B1120"        # Arcade night
    )

    BACKGROUND_SECONDARY = ThemeColors(
        light="#F5F5F5",
        dark="#111A30"
    )

    BORDER_PRIMARY = ThemeColors(
        light="#D1D1D1",
        dark="#334155"
    )

    BUTTON_SECONDARY_BG = ThemeColors(
        light="#F5F5F5",
        dark="#1E293B"
    )

    BUTTON_HOVER_BG = ThemeColors(
        light="#E8E8E8",
        dark="#334155"
    )

    TIMER_WARNING = ThemeColors(
        light="#B91C1C",
        dark="#EF4444"
    )

    # Controller button colors, identical in both themes.
    ANSWER_COLORS: dict[AnswerColor, str] = {
        AnswerColor.BLUE: "#2563EB",
        AnswerColor.ORANGE: "#EA580C",
        AnswerColor.GREEN: "#16A34A",
        AnswerColor.YELLOW: "#CA8A04",
    }

    PLAYER_COLORS: dict[PlayerKey, str] = {
        PlayerKey.PLAYER1: "#F43F5E",
        PlayerKey.PLAYER2: "#8B5CF6",
        PlayerKey.PLAYER3: "#14B8A6",
        PlayerKey.PLAYER4: "#F59E0B",
    }
