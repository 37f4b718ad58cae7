"""Built-in question set used when no quiz file can be loaded."""

from __future__ import annotations

from buzz_app.core.models import AnswerColor, QuizQuestion

SAMPLE_QUIZ_TITLE = "Retro Arcade Trivia"


def build_sample_questions() -> list[QuizQuestion]:
    return [
        QuizQuestion(
            id=1,
            question_text="What was the most popular arcade game of 1982?",
            options={
                AnswerColor.BLUE: "Pac-Man",
                AnswerColor.ORANGE: "Donkey Kong",
                AnswerColor.GREEN: "Space Invaders",
                AnswerColor.YELLOW: "Galaga",
            },
            correct_color=AnswerColor.BLUE,
            points=100,
        )
    ]
