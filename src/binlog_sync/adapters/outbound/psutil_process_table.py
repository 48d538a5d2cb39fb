"""Process table access through psutil and POSIX process groups."""

from __future__ import annotations

import os
import signal

import psutil

from binlog_sync.domain.entities import ProcessHandle
from binlog_sync.domain.value_objects import ProcessId
from binlog_sync.infrastructure.logging import get_logger

logger = get_logger(__name__)


class PsutilProcessTable:
    """Implementation of ProcessTablePort.

    A zombie counts as gone: its pid is still taken but the client behind
    it no longer streams.
    """

    def command_name(self, pid: ProcessId) -> str | None:
        if pid <= 0:
            return None
        try:
            proc = psutil.Process(pid)
            if proc.status() == psutil.STATUS_ZOMBIE:
                return None
            return proc.name()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return None

    def terminate(self, handle: ProcessHandle, grace_seconds: float) -> None:
        if handle.exit_code() is not None:
            return
        try:
            proc = psutil.Process(handle.pid)
            proc.terminate()
            _, alive = psutil.wait_procs([proc], timeout=grace_seconds)
            for proc in alive:
                logger.warning("Streaming client ignored SIGTERM, killing", pid=proc.pid)
                proc.kill()
            psutil.wait_procs(alive, timeout=grace_seconds)
        except psutil.NoSuchProcess:
            pass
        except psutil.AccessDenied as e:
            raise PermissionError(f"Cannot signal pid {handle.pid}: {e}") from e
        finally:
            # Record the exit status when we spawned the client ourselves
            handle.exit_code()

    def signal_group(self, handle: ProcessHandle, signum: int = signal.SIGTERM) -> None:
        """Send ``signum`` to the process group led by the client.

        Nothing is sent unless the client leads its own group, which keeps
        the signal away from this process and whoever started it.
        """
        try:
            pgid = os.getpgid(handle.pid)
            if pgid != handle.pid or pgid == os.getpgrp():
                logger.debug("Streaming client does not lead a process group", pid=handle.pid)
                return
            os.killpg(pgid, signum)
        except ProcessLookupError:
            pass
