from __future__ import annotations

import math
from dataclasses import dataclass

CHARS_PER_WORD = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    The built-in ``round`` rounds ties to even (``round(0.5) == 0``), which
    would under-report short tests.
    """
    if value < 0:
        return -round_half_up(-value)
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class SessionMetrics:
    """Result of a typing test, frozen at the moment it finishes."""

    elapsed_seconds: int
    total_characters: int
    error_count: int
    wpm: int
    accuracy: int

    @property
    def words(self) -> int:
        """Characters typed expressed as standard five-character words."""
        return round_half_up(self.total_characters / CHARS_PER_WORD)


def compute(elapsed_seconds: int, total_characters: int, error_count: int) -> SessionMetrics:
    """Derive speed and accuracy.

    * **WPM** – (characters / 5) / elapsed minutes, 0 when no time elapsed.
    * **Accuracy** – share of typed characters at the right position,
      0–100, and 100 when nothing was typed.
    """
    for name, value in (
        ("elapsed_seconds", elapsed_seconds),
        ("total_characters", total_characters),
        ("error_count", error_count),
    ):
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")

    if elapsed_seconds == 0:
        wpm = 0
    else:
        wpm = round_half_up((total_characters / CHARS_PER_WORD) / (elapsed_seconds / 60.0))

    if total_characters == 0:
        accuracy = 100
    else:
        raw = (total_characters - error_count) / total_characters * 100.0
        accuracy = max(0, min(100, round_half_up(raw)))

    return SessionMetrics(
        elapsed_seconds=elapsed_seconds,
        total_characters=total_characters,
        error_count=error_count,
        wpm=wpm,
        accuracy=accuracy,
    )
