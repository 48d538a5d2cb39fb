"""Streaming process entities."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum

from binlog_sync.domain.value_objects import ProcessId, SegmentName


# Linux truncates the command name (comm) to 15 characters
COMMAND_NAME_LENGTH = 15


def matches_command(actual: str | None, expected: str) -> bool:
    """Compare a process table command name against the expected one."""
    if not actual:
        return False
    return actual[:COMMAND_NAME_LENGTH] == expected[:COMMAND_NAME_LENGTH]


class SupervisorState(Enum):
    """Outcome of a single supervisor tick."""
    RUNNING = "running"
    RELAUNCHING = "relaunching"


@dataclass
class ProcessHandle:
    """Handle on a launched streaming client.

    ``process`` is only set when this process spawned the client itself;
    polling it reaps the child once it exits so a dead client does not
    linger as a zombie under the same pid.
    """
    pid: ProcessId
    command_name: str
    start_segment: SegmentName
    process: subprocess.Popen | None = None

    def exit_code(self) -> int | None:
        """Exit code if the spawned child has exited, else None."""
        if self.process is None:
            return None
        return self.process.poll()
