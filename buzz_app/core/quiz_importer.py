"""Utilities for importing quizzes from disk.

Two formats are accepted, chosen by file extension.

JSON (``.json``), the layout written by the quiz authoring sheet::

    {
      "quizTitle": "Retro Arcade Trivia",
      "questions": [
        {
          "id": 1,
          "question": "What was the most popular arcade game of 1982?",
          "answers": {"blue": "Pac-Man", "orange": "Donkey Kong",
                      "green": "Space Invaders", "yellow": "Galaga"},
          "correct": "blue",
          "points": 100
        }
      ]
    }

Plain text (anything else), blocks separated by blank lines or ``---``::

    Q: Question text (supports markdown). Additional lines until the next
       marker are treated as part of the question.
    A: Blue option
    B: Orange option
    C: Green option
    D: Yellow option
    CORRECT: A|B|C|D
    POINTS: 100        (optional, defaults to the game setting)
    TIMELIMIT: 20      (optional, defaults to the game setting)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from buzz_app.core.models import AnswerColor, QuizQuestion
from buzz_app.core.sample_quiz import SAMPLE_QUIZ_TITLE, build_sample_questions

logger = logging.getLogger(__name__)


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be loaded or parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path | None
    title: str
    questions: list[QuizQuestion]
    is_fallback: bool = False


_OPTION_ORDER = ["A", "B", "C", "D"]
_LETTER_TO_COLOR = dict(zip(_OPTION_ORDER, AnswerColor))


class _QuestionDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    question: str
    answers: dict[AnswerColor, str]
    correct: AnswerColor
    points: int | None = Field(default=None, ge=0)
    time_limit_seconds: int | None = Field(default=None, alias="timeLimit", gt=0)

    @field_validator("question")
    @classmethod
    def _question_not_blank(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("question text cannot be empty")
        return cleaned

    @model_validator(mode="after")
    def _four_answers(self) -> _QuestionDocument:
        missing = [color.value for color in AnswerColor if not self.answers.get(color, "").strip()]
        if missing:
            raise ValueError(f"answers missing for: {', '.join(missing)}")
        return self


class _QuizDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quiz_title: str = Field(default="Quiz", alias="quizTitle")
    questions: list[_QuestionDocument]


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise QuizImportError(f"Could not read quiz file {file_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise QuizImportError(f"Quiz file {file_path} is not valid UTF-8: {exc}") from exc

    if file_path.suffix.lower() == ".json":
        title, questions = _parse_quiz_json(text)
    else:
        title, questions = file_path.stem, _parse_quiz_text(text)
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=file_path, title=title, questions=questions)


def load_quiz_or_fallback(file_path: Path) -> ImportedQuiz:
    """Load a quiz, substituting the built-in sample when it cannot be read."""
    try:
        return load_quiz_from_file(file_path)
    except QuizImportError as exc:
        logger.warning("Could not load %s, using sample quiz: %s", file_path, exc)
    return ImportedQuiz(
        source_path=None,
        title=SAMPLE_QUIZ_TITLE,
        questions=build_sample_questions(),
        is_fallback=True,
    )


def _parse_quiz_json(text: str) -> tuple[str, list[QuizQuestion]]:
    try:
        document = _QuizDocument.model_validate_json(text)
    except ValidationError as exc:
        raise QuizImportError(f"Invalid quiz document: {exc}") from exc

    questions = [
        QuizQuestion(
            id=entry.id if entry.id is not None else position,
            question_text=entry.question,
            options={color: entry.answers[color].strip() for color in AnswerColor},
            correct_color=entry.correct,
            points=entry.points,
            time_limit_seconds=entry.time_limit_seconds,
        )
        for position, entry in enumerate(document.questions, start=1)
    ]
    return document.quiz_title, questions


def _parse_quiz_text(text: str) -> list[QuizQuestion]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [_parse_block(block, position) for position, block in enumerate(blocks, start=1) if block]


def _parse_block(block: str, position: int) -> QuizQuestion:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letter: str | None = None
    points: int | None = None
    time_limit_seconds: int | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if upper.startswith("POINTS:"):
            points = _parse_int_field("POINTS", line, minimum=0)
            current_section = None
            continue

        if upper.startswith("TIMELIMIT:"):
            time_limit_seconds = _parse_int_field("TIMELIMIT", line, minimum=1)
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_ORDER and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in _OPTION_ORDER:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(f"Encountered text outside of a known section: '{line}'.")

    if not question_lines:
        raise QuizImportError("Question text missing (Q: ...)")
    if len(options) != 4:
        raise QuizImportError("Each question must define exactly four options (A-D).")
    if any(not options[letter].strip() for letter in _OPTION_ORDER):
        raise QuizImportError("Option text cannot be empty.")
    if correct_letter is None:
        raise QuizImportError("Each question needs a CORRECT: line.")
    if correct_letter not in _OPTION_ORDER:
        raise QuizImportError("CORRECT must be one of A, B, C, or D.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text cannot be empty.")

    return QuizQuestion(
        id=position,
        question_text=question_text,
        options={_LETTER_TO_COLOR[letter]: options[letter].strip() for letter in _OPTION_ORDER},
        correct_color=_LETTER_TO_COLOR[correct_letter],
        points=points,
        time_limit_seconds=time_limit_seconds,
    )


def _parse_int_field(name: str, line: str, minimum: int) -> int:
    raw_value = line.split(":", 1)[1].strip()
    if not raw_value:
        raise QuizImportError(f"{name} must include an integer value.")
    try:
        parsed_value = int(raw_value)
    except ValueError as exc:
        raise QuizImportError(f"{name} must be an integer.") from exc
    if parsed_value < minimum:
        raise QuizImportError(f"{name} must be at least {minimum}.")
    return parsed_value
