from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Protocol, Tuple

from vegam.core.clock import CountdownClock
from vegam.core.diff import Verdict, classify, count_errors, first_mismatch
from vegam.core.highscore import HighScoreSaveError, HighScoreStore
from vegam.core.metrics import SessionMetrics, compute

logger = logging.getLogger(__name__)

Listener = Callable[["SessionSnapshot"], None]


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


class TextSource(Protocol):
    def next_reference_text(self) -> str: ...


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a renderer needs to draw one moment of a typing test."""

    reference: str
    duration: int
    remaining: int
    state: SessionState = SessionState.IDLE
    typed: str = ""
    error_count: int = 0
    metrics: Optional[SessionMetrics] = None
    high_score: int = 0
    new_record: bool = False
    score_saved: bool = True

    @classmethod
    def new(cls, reference: str, duration: int, high_score: int = 0) -> "SessionSnapshot":
        if not reference:
            raise ValueError("reference text must not be empty")
        return cls(reference=reference, duration=duration, remaining=duration, high_score=high_score)

    @property
    def verdicts(self) -> Tuple[Verdict, ...]:
        return classify(self.reference, self.typed)

    @property
    def characters_typed(self) -> int:
        return len(self.typed)

    @property
    def elapsed(self) -> int:
        return self.duration - self.remaining

    @property
    def has_error(self) -> bool:
        """True while any typed character is wrong."""
        return first_mismatch(self.reference, self.typed) is not None

    @property
    def is_complete(self) -> bool:
        return self.typed == self.reference

    def live_metrics(self) -> SessionMetrics:
        """Metrics for the values on screen right now; frozen ones once finished."""
        if self.metrics is not None:
            return self.metrics
        return compute(self.elapsed, self.characters_typed, self.error_count)


def advance(snapshot: SessionSnapshot, typed: str) -> SessionSnapshot:
    """Apply one input event and return the resulting snapshot.

    Returns ``snapshot`` itself when the event changes nothing: input after
    the test finished, or empty input before it started. The caller checks
    ``is_complete`` on the result to decide whether to finish.
    """
    if snapshot.state is SessionState.FINISHED:
        logger.debug("Ignoring input after the test finished")
        return snapshot
    if len(typed) > len(snapshot.reference):
        logger.warning(
            "Input longer than the reference (%d > %d); truncating",
            len(typed),
            len(snapshot.reference),
        )
        typed = typed[: len(snapshot.reference)]
    if snapshot.state is SessionState.IDLE and not typed:
        return snapshot
    return replace(
        snapshot,
        state=SessionState.ACTIVE,
        typed=typed,
        error_count=count_errors(snapshot.reference, typed),
    )


def count_down(snapshot: SessionSnapshot, remaining: int) -> SessionSnapshot:
    if snapshot.state is not SessionState.ACTIVE:
        return snapshot
    return replace(snapshot, remaining=max(0, remaining))


def finish(snapshot: SessionSnapshot) -> SessionSnapshot:
    """Freeze the metrics. Finishing twice returns the first result."""
    if snapshot.state is SessionState.FINISHED:
        return snapshot
    metrics = compute(snapshot.elapsed, snapshot.characters_typed, snapshot.error_count)
    return replace(snapshot, state=SessionState.FINISHED, metrics=metrics)


class TypingTest:
    """Drives one typing test at a time.

    Input arrives through :meth:`text_changed` and :meth:`reset`; the clock
    calls back once per second. Every change is published to subscribers as
    a new :class:`SessionSnapshot`. The clock is always stopped on the way
    out of the active state.
    """

    def __init__(self, texts: TextSource, clock: CountdownClock, high_scores: HighScoreStore) -> None:
        self._texts = texts
        self._clock = clock
        self._high_scores = high_scores
        self._listeners: List[Listener] = []
        self._clock.connect(on_tick=self._on_tick, on_expired=self._on_expired)
        self._snapshot = self._fresh_snapshot()

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def text_changed(self, typed: str) -> None:
        before = self._snapshot
        after = advance(before, typed)
        if after is before:
            return
        if before.state is SessionState.IDLE:
            logger.info("Typing test started (%d characters, %ds)", len(after.reference), after.duration)
            self._clock.start()
        self._snapshot = after
        if after.is_complete:
            self._finish()
        else:
            self._publish()

    def reset(self) -> None:
        """Abandon the current test and prepare a new one with a fresh text."""
        self._clock.stop()
        if self._snapshot.state is SessionState.ACTIVE:
            logger.info("Typing test abandoned after %ds", self._snapshot.elapsed)
        self._snapshot = self._fresh_snapshot()
        self._publish()

    def close(self) -> None:
        """Release the clock; the engine accepts no more ticks afterwards."""
        self._clock.stop()

    def _fresh_snapshot(self) -> SessionSnapshot:
        return SessionSnapshot.new(
            self._texts.next_reference_text(),
            duration=self._clock.duration,
            high_score=self._high_scores.read(),
        )

    def _on_tick(self, remaining: int) -> None:
        if remaining == 0:
            # _on_expired publishes the finished snapshot
            return
        after = count_down(self._snapshot, remaining)
        if after is self._snapshot:
            return
        self._snapshot = after
        self._publish()

    def _on_expired(self) -> None:
        if self._snapshot.state is SessionState.ACTIVE:
            logger.info("Time is up")
            self._finish()

    def _finish(self) -> None:
        self._clock.stop()
        # the clock may have ticked since the last published snapshot
        snapshot = finish(replace(self._snapshot, remaining=self._clock.remaining))
        metrics = snapshot.metrics
        logger.info(
            "Typing test finished: %d wpm, %d%% accuracy, %d errors in %ds",
            metrics.wpm,
            metrics.accuracy,
            metrics.error_count,
            metrics.elapsed_seconds,
        )

        new_record = False
        score_saved = True
        try:
            new_record = self._high_scores.write_if_greater(metrics.wpm)
        except HighScoreSaveError as e:
            new_record = True
            score_saved = False
            logger.warning("%s", e)
        if new_record:
            logger.info("New high score: %d wpm", metrics.wpm)

        self._snapshot = replace(
            snapshot,
            high_score=self._high_scores.read(),
            new_record=new_record,
            score_saved=score_saved,
        )
        self._publish()

    def _publish(self) -> None:
        snapshot = self._snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener %r failed", listener)
