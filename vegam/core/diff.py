"""Per-character comparison of typed text against the reference text."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class Verdict(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURRENT = "current"
    UNTYPED = "untyped"


def classify(reference: Sequence[str], typed: Sequence[str]) -> Tuple[Verdict, ...]:
    """Return one verdict per reference position.

    Positions before ``len(typed)`` are CORRECT or INCORRECT by exact
    character equality, the next position is CURRENT and everything after it
    UNTYPED. Typed text longer than the reference is reported and only the
    first ``len(reference)`` positions are classified.
    """
    if len(typed) > len(reference):
        logger.warning(
            "Typed text is longer than the reference (%d > %d); extra characters ignored",
            len(typed),
            len(reference),
        )
        typed = typed[: len(reference)]

    verdicts = [
        Verdict.CORRECT if a == b else Verdict.INCORRECT
        for a, b in zip(typed, reference)
    ]
    if len(verdicts) < len(reference):
        verdicts.append(Verdict.CURRENT)
        verdicts.extend(Verdict.UNTYPED for _ in range(len(reference) - len(verdicts)))
    return tuple(verdicts)


def count_errors(reference: Sequence[str], typed: Sequence[str]) -> int:
    """Number of INCORRECT positions, always from a full rescan."""
    return sum(1 for v in classify(reference, typed) if v is Verdict.INCORRECT)


def first_mismatch(reference: Sequence[str], typed: Sequence[str]) -> Optional[int]:
    for i, (a, b) in enumerate(zip(typed, reference)):
        if a != b:
            return i
    return None
