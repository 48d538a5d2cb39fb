"""Value objects for the binlog sync domain."""

from binlog_sync.domain.value_objects.identifiers import (
    COMPRESSED_SUFFIXES,
    ProcessId,
    SEGMENT_NAME_PATTERN,
    SegmentName,
    is_segment_name,
    segment_sequence,
    strip_compressed_suffix,
)

__all__ = [
    "SegmentName",
    "ProcessId",
    "SEGMENT_NAME_PATTERN",
    "COMPRESSED_SUFFIXES",
    "is_segment_name",
    "segment_sequence",
    "strip_compressed_suffix",
]
