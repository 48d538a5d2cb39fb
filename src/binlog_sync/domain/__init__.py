"""Domain layer - segments, process handles and the maintenance services.

Domain services live in ``binlog_sync.domain.services`` and are imported
from there directly.
"""

from binlog_sync.domain.entities import ProcessHandle, SegmentFile, SupervisorState
from binlog_sync.domain.errors import (
    BinlogSyncError,
    CompressionError,
    ConfigurationError,
    DirectoryError,
    MissingStartPointError,
    SegmentRemovalError,
    SubprocessLaunchError,
)
from binlog_sync.domain.value_objects import ProcessId, SegmentName

__all__ = [
    "ProcessHandle",
    "SegmentFile",
    "SupervisorState",
    "ProcessId",
    "SegmentName",
    "BinlogSyncError",
    "CompressionError",
    "ConfigurationError",
    "DirectoryError",
    "MissingStartPointError",
    "SegmentRemovalError",
    "SubprocessLaunchError",
]
