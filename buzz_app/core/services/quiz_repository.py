"""Service holding the loaded question list and the cursor through it."""

from __future__ import annotations

import random

from buzz_app.core.models import AnswerColor, QuizProgress, QuizQuestion


class QuizRepository:
    """Quiz provider consumed by the game session."""

    def __init__(self) -> None:
        self._questions: list[QuizQuestion] = []
        self._index: int = 0
        self._title: str = "Quiz"
        self._question_counter: int = 0

    @property
    def title(self) -> str:
        return self._title

    def load_questions(self, questions: list[QuizQuestion], title: str | None = None) -> None:
        """Replace the current quiz with a new list of questions."""
        if not questions:
            raise ValueError("Quiz must contain at least one question.")
        prepared = [self._prepare_question(q) for q in questions]
        self._questions = prepared
        self._index = 0
        if title:
            self._title = title.strip() or self._title

    def get_questions(self) -> list[QuizQuestion]:
        return list(self._questions)

    def has_questions(self) -> bool:
        return bool(self._questions)

    def current(self) -> QuizQuestion | None:
        if not 0 <= self._index < len(self._questions):
            return None
        return self._questions[self._index]

    def advance(self) -> QuizQuestion | None:
        """Move to the next question. Returns None when already on the last."""
        if not self.has_more():
            return None
        self._index += 1
        return self.current()

    def has_more(self) -> bool:
        return self._index < len(self._questions) - 1

    def reset(self) -> None:
        self._index = 0

    def shuffle(self, seed: int | None = None) -> None:
        random.Random(seed).shuffle(self._questions)
        self._index = 0

    def progress(self) -> QuizProgress:
        return QuizProgress(current=self._index + 1, total=len(self._questions))

    def _prepare_question(self, question: QuizQuestion) -> QuizQuestion:
        """Validate and normalize a question before storage."""
        cleaned_text = question.question_text.strip()
        if not cleaned_text:
            raise ValueError("Question text must not be empty.")
        options = self._validate_options(question.options)
        if question.correct_color not in options:
            raise ValueError("Correct answer must be one of the four colors.")
        if question.points is not None and question.points < 0:
            raise ValueError("Question points cannot be negative.")
        if question.time_limit_seconds is not None and question.time_limit_seconds <= 0:
            raise ValueError("Time limit must be a positive integer.")

        return QuizQuestion(
            id=question.id if question.id > 0 else self._next_question_id(),
            question_text=cleaned_text,
            options=options,
            correct_color=question.correct_color,
            points=question.points,
            time_limit_seconds=question.time_limit_seconds,
        )

    def _next_question_id(self) -> int:
        self._question_counter += 1
        return self._question_counter

    @staticmethod
    def _validate_options(options) -> dict[AnswerColor, str]:
        if set(options) != set(AnswerColor):
            raise ValueError("Each question must have exactly one option per answer color.")
        cleaned = {color: options[color].strip() for color in AnswerColor}
        if any(not text for text in cleaned.values()):
            raise ValueError("Option text cannot be empty.")
        return cleaned
