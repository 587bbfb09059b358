"""Countdown clock driven by a cancellable repeating tick source."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 60
DEFAULT_INTERVAL_MS = 1000


@runtime_checkable
class CancelToken(Protocol):
    """Handle for a scheduled repeating task."""

    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None:
        """Stop the task. Calling it more than once has no effect."""
        ...


@runtime_checkable
class TickScheduler(Protocol):
    """Source of repeating ticks.

    The Qt application uses :class:`vegam.ui.qt_scheduler.QtTickScheduler`;
    tests drive ticks by hand.
    """

    def schedule_repeating(self, interval_ms: int, callback: Callable[[], None]) -> CancelToken: ...


class CountdownClock:
    """Counts down from ``duration`` by one unit per tick.

    ``on_tick(remaining)`` is called after every decrement and
    ``on_expired()`` exactly once when the count reaches zero. Once stopped
    (explicitly or by expiring) no further ticks are processed.
    """

    def __init__(
        self,
        scheduler: TickScheduler,
        duration: int = DEFAULT_DURATION,
        on_tick: Optional[Callable[[int], None]] = None,
        on_expired: Optional[Callable[[], None]] = None,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ) -> None:
        if duration < 1:
            raise ValueError(f"duration must be at least 1, got {duration}")
        self._scheduler = scheduler
        self._duration = duration
        self._interval_ms = interval_ms
        self._on_tick = on_tick
        self._on_expired = on_expired
        self._remaining = duration
        self._token: Optional[CancelToken] = None

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def elapsed(self) -> int:
        return self._duration - self._remaining

    @property
    def running(self) -> bool:
        return self._token is not None

    def connect(
        self,
        on_tick: Optional[Callable[[int], None]] = None,
        on_expired: Optional[Callable[[], None]] = None,
    ) -> None:
        """Replace the tick and expiry callbacks."""
        self._on_tick = on_tick
        self._on_expired = on_expired

    def start(self) -> None:
        """Begin counting down from the full duration."""
        if self._token is not None:
            return
        self._remaining = self._duration
        self._token = self._scheduler.schedule_repeating(self._interval_ms, self.tick)

    def tick(self) -> None:
        """Advance the countdown by one unit."""
        if self._token is None:
            logger.debug("Ignoring tick on a stopped clock")
            return
        self._remaining = max(0, self._remaining - 1)
        if self._on_tick is not None:
            self._on_tick(self._remaining)
        # on_tick may have stopped us
        if self._token is not None and self._remaining == 0:
            self.stop()
            if self._on_expired is not None:
                self._on_expired()

    def stop(self) -> None:
        """Cancel the tick source. Safe to call repeatedly."""
        token, self._token = self._token, None
        if token is not None:
            token.cancel()

    def __enter__(self) -> "CountdownClock":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
