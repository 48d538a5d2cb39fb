"""Wall clock whose sleep can be cut short on shutdown."""

from __future__ import annotations

import threading
import time


class SystemClock:
    """Implementation of ClockPort.

    When given a wake event, ``sleep`` returns as soon as the event is set
    so a shutdown signal does not wait out the poll interval.
    """

    def __init__(self, wake: threading.Event | None = None) -> None:
        self._wake = wake

    def now(self) -> float:
        return time.time()

    def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            return
        if self._wake is None:
            time.sleep(seconds)
        else:
            self._wake.wait(seconds)
