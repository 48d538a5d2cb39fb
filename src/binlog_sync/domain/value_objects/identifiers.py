"""Identifiers used throughout binlog sync.

A binlog segment is identified by its file name, exactly as the server
names it (``mysql-bin.000042``). The trailing digits are the sequence
index; the streaming client writes segments strictly in that order.
"""

from __future__ import annotations

import re
from typing import NewType

SegmentName = NewType("SegmentName", str)
"""Name of a binlog segment as known to the server, e.g. ``mysql-bin.000042``."""

ProcessId = NewType("ProcessId", int)
"""Operating system process id."""

SEGMENT_NAME_PATTERN = re.compile(r"^(?P<base>.+)\.(?P<sequence>[0-9]+)$")

# Suffixes written by the usual compression tools (pigz/gzip, bzip2, xz, zstd, lz4)
COMPRESSED_SUFFIXES: tuple[str, ...] = (".gz", ".bz2", ".xz", ".zst", ".lz4")


def strip_compressed_suffix(file_name: str) -> str:
    """Return ``file_name`` without a trailing compression suffix."""
    for suffix in COMPRESSED_SUFFIXES:
        if file_name.endswith(suffix):
            return file_name[: -len(suffix)]
    return file_name


def is_segment_name(name: str) -> bool:
    """Check whether ``name`` looks like a binlog segment name."""
    return SEGMENT_NAME_PATTERN.match(name) is not None


def segment_sequence(name: str) -> int:
    """Return the sequence index encoded in a segment name.

    Raises:
        ValueError: If ``name`` is not a segment name.
    """
    match = SEGMENT_NAME_PATTERN.match(name)
    if match is None:
        raise ValueError(f"Not a binlog segment name: {name!r}")
    return int(match.group("sequence"))
