"""Termination signal handling.

SIGINT and SIGTERM do not raise into the loop. The first one ignores any
further SIGINT/SIGTERM (the group-wide SIGTERM sent during shutdown comes
back to this process too), records the signal and sets an event. The
supervision loop checks the event between ticks and every sleep waits on
it, so shutdown starts promptly even in the middle of an interval.
"""

from __future__ import annotations

import signal
import threading
from types import FrameType
from typing import Any, Iterable

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class ShutdownSignal:
    """Cancellation context driven by termination signals.

    Usage:
        with ShutdownSignal() as shutdown:
            supervisor.run(shutdown)
    """

    def __init__(self, signals: Iterable[signal.Signals] = DEFAULT_SIGNALS) -> None:
        self._signals = tuple(signals)
        self._event = threading.Event()
        self._previous: dict[signal.Signals, Any] = {}
        self.received: signal.Signals | None = None

    @property
    def event(self) -> threading.Event:
        """Set once shutdown was requested."""
        return self._event

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def install(self) -> None:
        """Install the handlers, remembering the previous ones."""
        for signum in self._signals:
            self._previous[signum] = signal.signal(signum, self._handle)

    def restore(self) -> None:
        """Put back the handlers that were active before ``install``."""
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()

    def cancel(self, signum: signal.Signals | None = None) -> None:
        """Request shutdown without a signal (or on behalf of one)."""
        if self._event.is_set():
            return
        self.received = signum
        self._event.set()

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        for handled in self._signals:
            signal.signal(handled, signal.SIG_IGN)
        self.cancel(signal.Signals(signum))

    def __enter__(self) -> ShutdownSignal:
        self.install()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.restore()
