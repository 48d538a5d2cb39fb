"""Manually advanced clock for testing."""

from __future__ import annotations

from typing import Callable


class ManualClock:
    """Mock implementation of ClockPort.

    ``sleep`` records the requested duration, advances ``now`` by it and
    calls ``on_sleep`` so a test can react (for example, cancel the loop).
    """

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self._now = start
        self.sleeps: list[float] = []
        self.on_sleep: Callable[[float], None] | None = None

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self._now += seconds
        if self.on_sleep is not None:
            self.on_sleep(seconds)
