"""Outbound ports - External dependency interfaces for binlog sync.

Outbound ports define the interfaces for everything outside this process:
the backup directory, the streaming client, the process table, the
compression tool and the wall clock.
"""

from __future__ import annotations

import signal
from abc import abstractmethod
from typing import Protocol

from binlog_sync.domain.entities import ProcessHandle, SegmentFile
from binlog_sync.domain.errors import (
    CompressionError,
    SegmentRemovalError,
    SubprocessLaunchError,
)
from binlog_sync.domain.value_objects import ProcessId, SegmentName


# =============================================================================
# Segment Directory Port
# =============================================================================


class SegmentDirectoryPort(Protocol):
    """Protocol for reading and pruning the backup directory.

    The streaming client writes into the same directory concurrently, so a
    file returned by ``scan`` may be gone by the time it is used.
    """

    @property
    @abstractmethod
    def root(self) -> str:
        """Absolute path of the backup directory."""
        ...

    @abstractmethod
    def scan(self) -> list[SegmentFile]:
        """List regular files in the backup directory.

        Returns:
            Files ordered by (mtime, name) ascending.
        """
        ...

    @abstractmethod
    def exists(self, name: str) -> bool:
        """Check whether ``name`` is still present."""
        ...

    @abstractmethod
    def path_of(self, name: str) -> str:
        """Absolute path of ``name`` for handing to external tools."""
        ...

    @abstractmethod
    def remove(self, name: str) -> None:
        """Delete ``name``.

        Raises:
            SegmentRemovalError: If the file cannot be deleted.
        """
        ...


# =============================================================================
# Stream Launcher Port
# =============================================================================


class StreamLauncherPort(Protocol):
    """Protocol for starting the binlog streaming client."""

    @property
    @abstractmethod
    def command_name(self) -> str:
        """Process command name the launched client runs under."""
        ...

    @abstractmethod
    def launch(self, start_segment: SegmentName) -> ProcessHandle:
        """Start streaming from the beginning of ``start_segment``.

        The client is left running in the background.

        Raises:
            SubprocessLaunchError: If the client cannot be started.
        """
        ...


# =============================================================================
# Process Table Port
# =============================================================================


class ProcessTablePort(Protocol):
    """Protocol for inspecting and signalling processes."""

    @abstractmethod
    def command_name(self, pid: ProcessId) -> str | None:
        """Command name of ``pid``, or None if no such process exists."""
        ...

    @abstractmethod
    def terminate(self, handle: ProcessHandle, grace_seconds: float) -> None:
        """Send SIGTERM, wait up to ``grace_seconds``, then SIGKILL."""
        ...

    @abstractmethod
    def signal_group(self, handle: ProcessHandle, signum: int = signal.SIGTERM) -> None:
        """Send ``signum`` to the process group the client leads, if any."""
        ...


# =============================================================================
# Compressor Port
# =============================================================================


class CompressorPort(Protocol):
    """Protocol for compressing a closed segment in place."""

    @abstractmethod
    def compress(self, path: str) -> None:
        """Replace ``path`` with its compressed form.

        Raises:
            CompressionError: If the tool fails.
        """
        ...


# =============================================================================
# Clock Port
# =============================================================================


class ClockPort(Protocol):
    """Protocol for time so the loop can be driven without real sleeps."""

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds since the epoch."""
        ...

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block for ``seconds``; may return early on shutdown."""
        ...


__all__ = [
    "SegmentDirectoryPort",
    "StreamLauncherPort",
    "ProcessTablePort",
    "CompressorPort",
    "ClockPort",
    "CompressionError",
    "SegmentRemovalError",
    "SubprocessLaunchError",
]
