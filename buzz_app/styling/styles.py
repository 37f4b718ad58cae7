"""Centralized styles and font definitions for the application."""

from buzz_app.core.models import AnswerColor, PlayerKey

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.DARK) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QSpinBox, QComboBox {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_answer_tile_style(color: AnswerColor, font_size: int, faded: bool = False, highlighted: bool = False) -> str:
        background = ColorPalette.ANSWER_COLORS[color]
        border = "4px solid #FFFFFF" if highlighted else "2px solid transparent"
        opacity_color = "rgba(255, 255, 255, 0.45)" if faded else "#FFFFFF"
        return (
            f"background-color: {background}; color: {opacity_color}; border: {border};"
            f" border-radius: 10px; padding: 12px; font-size: {font_size}pt;"
        )

    @staticmethod
    def get_player_box_style(player: PlayerKey, active: bool, theme: Theme = Theme.DARK) -> str:
        border_color = ColorPalette.PLAYER_COLORS[player] if active else ColorPalette.BORDER_PRIMARY.get(theme)
        return (
            f"border: 2px solid {border_color}; border-radius: 8px; padding: 6px;"
            f" background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};"
        )

    @staticmethod
    def get_timer_style(font_size: int, warning: bool, theme: Theme = Theme.DARK) -> str:
        base_style = f"padding: 2px 6px; border-radius: 4px; font-size: {font_size}pt;"
        if not warning:
            return base_style
        return base_style + f" color: #fff; background-color: {ColorPalette.TIMER_WARNING.get(theme)};"
