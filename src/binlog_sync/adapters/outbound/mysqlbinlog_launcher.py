"""Launches ``mysqlbinlog`` as a raw, never-stopping remote log tail.

The client runs in the backup directory with an empty ``--result-file``
prefix, so every segment lands there under its server name. Its stdout and
stderr are appended to the status log. The child starts its own session,
so shutdown can signal it and its children as a group without touching
this process or whatever started it.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from binlog_sync.domain.entities import ProcessHandle
from binlog_sync.domain.value_objects import ProcessId, SegmentName
from binlog_sync.infrastructure.config import MySQLConfig
from binlog_sync.infrastructure.logging import get_logger
from binlog_sync.ports.outbound import SubprocessLaunchError

logger = get_logger(__name__)

STREAM_FLAGS: tuple[str, ...] = (
    "--raw",
    "--read-from-remote-server",
    "--stop-never",
    "--verify-binlog-checksum",
    "--result-file=",
)


class MySQLBinlogLauncher:
    """Implementation of StreamLauncherPort for mysqlbinlog."""

    def __init__(self, mysql: MySQLConfig, backup_dir: str | Path, status_log: str | Path) -> None:
        """Initialize the launcher.

        Args:
            mysql: Connection options and the client executable.
            backup_dir: Working directory for the client.
            status_log: File receiving the client's output.
        """
        self._mysql = mysql
        self._backup_dir = Path(backup_dir)
        self._status_log = Path(status_log)

    @property
    def command_name(self) -> str:
        return os.path.basename(self._mysql.binary)

    def build_command(self, start_segment: SegmentName) -> list[str]:
        """Full argv for streaming from ``start_segment``."""
        return [
            self._mysql.binary,
            *self._mysql.connection_options(),
            *STREAM_FLAGS,
            start_segment,
        ]

    def launch(self, start_segment: SegmentName) -> ProcessHandle:
        command = self.build_command(start_segment)
        logger.debug("Launching streaming client", argv=_redact(command))

        try:
            with open(self._status_log, "a") as log_file:
                process = subprocess.Popen(  # noqa: S603
                    command,
                    stdin=subprocess.DEVNULL,
                    stdout=log_file,
                    stderr=subprocess.STDOUT,
                    cwd=self._backup_dir,
                    start_new_session=True,
                )
        except OSError as e:
            raise SubprocessLaunchError(f"Cannot start {self._mysql.binary}: {e}") from e

        return ProcessHandle(
            pid=ProcessId(process.pid),
            command_name=self.command_name,
            start_segment=start_segment,
            process=process,
        )


def _redact(command: list[str]) -> list[str]:
    return ["--password=***" if arg.startswith("--password=") else arg for arg in command]
