"""Shared helpers for rendering quiz questions in rich-text labels."""

from __future__ import annotations

import html

from buzz_app.core.markdown_renderer import renderer
from buzz_app.core.models import AnswerColor, QuizQuestion


def render_question_html(question: QuizQuestion, font_size: int = 20) -> str:
    """Return the question prompt as HTML sized for the live screen."""
    body = renderer.render_fragment(question.question_text)
    return f"<div style=\"font-size: {font_size}pt; text-align: center;\">{body}</div>"


def render_option_html(question: QuizQuestion, color: AnswerColor) -> str:
    """Return one answer option prefixed with its color name."""
    option_text = question.option_text(color)
    label = html.escape(color.value.upper())
    if not option_text:
        return f"<b>{label}</b>"
    return f"<b>{label}</b><br/>{renderer.render_inline(option_text)}"
