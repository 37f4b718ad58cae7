"""Durable best-score record."""

from __future__ import annotations

import contextlib
import json
import logging
from pathlib import Path

from buzz_app.constants.game_constants import HIGH_SCORE_FILE_NAME, HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


def default_high_score_path() -> Path:
    return Path.home() / ".buzzquiz" / HIGH_SCORE_FILE_NAME


class HighScoreStore:
    """Single integer persisted as JSON under a fixed key.

    The in-memory value never decreases. A failed write is logged and the
    session carries on with the in-memory value.
    """

    def __init__(self, path: Path | None = None, key: str = HIGH_SCORE_KEY) -> None:
        self._path = path or default_high_score_path()
        self._key = key
        self._value = self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def value(self) -> int:
        return self._value

    def record(self, score: int) -> bool:
        """Store ``score`` if it beats the current best. Returns True if it did."""
        if score <= self._value:
            return False
        self._value = score
        self._save()
        return True

    def _load(self) -> int:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except OSError as exc:
            logger.warning("Could not read high score from %s: %s", self._path, exc)
            return 0
        try:
            data = json.loads(text)
            value = int(data.get(self._key, 0))
        except (ValueError, TypeError, AttributeError, OverflowError) as exc:
            logger.warning("Ignoring malformed high score file %s: %s", self._path, exc)
            return 0
        return max(0, value)

    def _save(self) -> None:
        # The on-disk record is only ever replaced whole.
        temp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps({self._key: self._value}), encoding="utf-8")
            temp_path.replace(self._path)
        except OSError as exc:
            logger.warning("Could not persist high score %s to %s: %s", self._value, self._path, exc)
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)
