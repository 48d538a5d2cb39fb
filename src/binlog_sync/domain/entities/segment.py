"""Segment file entity.

A segment file is whatever the directory scan reports: a name, the last
modification time and the size. Ordering is always by ``(mtime, name)`` so
that files written within the same timestamp resolution still sort
deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from binlog_sync.domain.value_objects import (
    SegmentName,
    is_segment_name,
    segment_sequence,
    strip_compressed_suffix,
)


@dataclass(frozen=True, slots=True)
class SegmentFile:
    """A regular file in the backup directory.

    Attributes:
        name: File name relative to the backup directory
        mtime: Last modification time (seconds since the epoch)
        size: Size in bytes
    """

    name: str
    mtime: float
    size: int = 0

    @property
    def identity(self) -> SegmentName:
        """Segment name with any compression suffix removed."""
        return SegmentName(strip_compressed_suffix(self.name))

    @property
    def is_compressed(self) -> bool:
        """Whether this is the compressed form of a segment."""
        return self.identity != self.name

    @property
    def is_segment(self) -> bool:
        """Whether the name (plain or compressed) is a binlog segment name."""
        return is_segment_name(self.identity)

    @property
    def is_plain_segment(self) -> bool:
        return self.is_segment and not self.is_compressed

    @property
    def sequence(self) -> int:
        """Sequence index encoded in the name."""
        return segment_sequence(self.identity)

    @property
    def sort_key(self) -> tuple[float, str]:
        return (self.mtime, self.name)

    def is_older_than(self, cutoff: float) -> bool:
        """Strictly older than ``cutoff``; a file exactly at the cutoff is not."""
        return self.mtime < cutoff


def by_mtime(files: Iterable[SegmentFile]) -> list[SegmentFile]:
    """Sort files by modification time ascending, then by name."""
    return sorted(files, key=lambda f: f.sort_key)


def plain_segments(files: Iterable[SegmentFile]) -> list[SegmentFile]:
    """Uncompressed segment files ordered by modification time."""
    return by_mtime(f for f in files if f.is_plain_segment)


def open_segment(files: Iterable[SegmentFile]) -> SegmentFile | None:
    """The plain segment presumed to be receiving writes (newest mtime)."""
    segments = plain_segments(files)
    return segments[-1] if segments else None
