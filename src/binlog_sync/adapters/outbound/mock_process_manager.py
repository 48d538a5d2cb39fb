"""Mock process table and streaming launcher for testing and development.

These adapters simulate the streaming client in memory: launches allocate
fake pids, tests can crash a process or hand its pid to an unrelated
command, and terminations are recorded instead of signalled.
"""

from __future__ import annotations

import signal
from dataclasses import dataclass, field

from binlog_sync.domain.entities import ProcessHandle
from binlog_sync.domain.value_objects import ProcessId, SegmentName
from binlog_sync.ports.outbound import SubprocessLaunchError


class MockProcessTable:
    """Mock implementation of ProcessTablePort."""

    def __init__(self, first_pid: int = 1000) -> None:
        self._processes: dict[ProcessId, str] = {}
        self._next_pid = first_pid
        self.terminated: list[ProcessId] = []
        self.group_signals: list[tuple[ProcessId, int]] = []

    def spawn(self, command_name: str) -> ProcessId:
        """Register a new running process."""
        pid = ProcessId(self._next_pid)
        self._next_pid += 1
        self._processes[pid] = command_name
        return pid

    def crash(self, pid: ProcessId) -> None:
        """Simulate the process exiting on its own."""
        self._processes.pop(pid, None)

    def reuse(self, pid: ProcessId, command_name: str) -> None:
        """Simulate the kernel handing ``pid`` to another program."""
        self._processes[pid] = command_name

    def is_running(self, pid: ProcessId) -> bool:
        return pid in self._processes

    def command_name(self, pid: ProcessId) -> str | None:
        return self._processes.get(pid)

    def terminate(self, handle: ProcessHandle, grace_seconds: float) -> None:
        self.terminated.append(handle.pid)
        self._processes.pop(handle.pid, None)

    def signal_group(self, handle: ProcessHandle, signum: int = signal.SIGTERM) -> None:
        self.group_signals.append((handle.pid, signum))


@dataclass
class MockStreamLauncher:
    """Mock implementation of StreamLauncherPort backed by MockProcessTable."""

    table: MockProcessTable
    name: str = "mysqlbinlog"
    failures: int = 0  # Number of upcoming launches that fail
    launches: list[SegmentName] = field(default_factory=list)

    @property
    def command_name(self) -> str:
        return self.name

    def launch(self, start_segment: SegmentName) -> ProcessHandle:
        self.launches.append(start_segment)
        if self.failures > 0:
            self.failures -= 1
            raise SubprocessLaunchError(f"Cannot start {self.name}: simulated failure")

        pid = self.table.spawn(self.name)
        return ProcessHandle(pid=pid, command_name=self.name, start_segment=start_segment)
