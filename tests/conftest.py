"""Shared fixtures: a hand-driven tick source so clock tests are deterministic."""

from __future__ import annotations

from typing import Callable, List, Optional

import pytest


class ManualToken:
    def __init__(self, scheduler: "ManualScheduler", callback: Callable[[], None]) -> None:
        self._scheduler = scheduler
        self.callback = callback
        self.cancelled = False
        self.cancel_calls = 0

    def cancel(self) -> None:
        self.cancel_calls += 1
        self.cancelled = True


class ManualScheduler:
    """Records scheduled tasks; ``fire`` runs every live one."""

    def __init__(self) -> None:
        self.tokens: List[ManualToken] = []
        self.intervals: List[int] = []

    def schedule_repeating(self, interval_ms: int, callback: Callable[[], None]) -> ManualToken:
        token = ManualToken(self, callback)
        self.tokens.append(token)
        self.intervals.append(interval_ms)
        return token

    @property
    def live(self) -> List[ManualToken]:
        return [t for t in self.tokens if not t.cancelled]

    @property
    def last(self) -> Optional[ManualToken]:
        return self.tokens[-1] if self.tokens else None

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            for token in self.live:
                token.callback()


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()
