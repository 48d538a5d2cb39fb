"""Domain services - resume point, compression and retention."""

from binlog_sync.domain.services.resume_resolver import ResumePointResolver
from binlog_sync.domain.services.retention_manager import RetentionManager, RetentionReport
from binlog_sync.domain.services.segment_compressor import CompressionReport, SegmentCompressor

__all__ = [
    "ResumePointResolver",
    "RetentionManager",
    "RetentionReport",
    "SegmentCompressor",
    "CompressionReport",
]
