"""Domain entities for binlog sync."""

from binlog_sync.domain.entities.process import (
    ProcessHandle,
    SupervisorState,
    matches_command,
)
from binlog_sync.domain.entities.segment import (
    SegmentFile,
    by_mtime,
    open_segment,
    plain_segments,
)

__all__ = [
    "ProcessHandle",
    "SupervisorState",
    "matches_command",
    "SegmentFile",
    "by_mtime",
    "open_segment",
    "plain_segments",
]
