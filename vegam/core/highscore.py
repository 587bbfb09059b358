from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "typePracticeHighScore"
DEFAULT_DATA_DIR = Path.home() / ".vegam"


class HighScoreSaveError(OSError):
    """The new record could not be written to disk."""


class HighScoreStore:
    """Best WPM ever achieved. Persists to disk across app restarts.
    File: ~/.vegam/highscore.json unless another path is given."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._file_path = Path(path) if path is not None else DEFAULT_DATA_DIR / "highscore.json"
        self._value = self._load()

    @property
    def path(self) -> Path:
        return self._file_path

    def read(self) -> int:
        return self._value

    def write_if_greater(self, candidate: int) -> bool:
        """Record ``candidate`` if it beats the current best.

        Returns True when the record changed. Raises HighScoreSaveError if
        the new record could not be persisted; the in-memory value is kept
        either way.
        """
        if candidate <= self._value:
            return False
        self._value = int(candidate)
        self._save()
        return True

    def _load(self) -> int:
        if not self._file_path.exists():
            return 0
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load high score from %s: %s", self._file_path, e)
            return 0
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed high score file %s", self._file_path)
            return 0
        try:
            return max(0, int(payload.get(HIGH_SCORE_KEY, 0)))
        except (TypeError, ValueError, OverflowError):
            logger.warning("Ignoring invalid high score value in %s", self._file_path)
            return 0

    def _save(self) -> None:
        payload = {HIGH_SCORE_KEY: self._value}
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            raise HighScoreSaveError(f"Could not save high score to {self._file_path}: {e}") from e
