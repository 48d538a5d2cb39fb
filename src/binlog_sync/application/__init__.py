"""Application layer - supervision loop, shutdown handling and wiring."""

from binlog_sync.application.service import BinlogSyncService
from binlog_sync.application.shutdown import ShutdownSignal
from binlog_sync.application.supervisor import Supervisor, SupervisorContext

__all__ = [
    "BinlogSyncService",
    "ShutdownSignal",
    "Supervisor",
    "SupervisorContext",
]
