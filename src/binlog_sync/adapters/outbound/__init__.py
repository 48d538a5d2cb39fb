"""Outbound adapters - implementations of outbound ports.

Production adapters talk to the filesystem, ``mysqlbinlog``, the process
table and the compression tool. The in-memory and mock adapters implement the same ports
for tests and local development.
"""

from binlog_sync.adapters.outbound.external_compressor import ExternalCompressor
from binlog_sync.adapters.outbound.in_memory_segment_directory import (
    InMemoryCompressor,
    InMemorySegmentDirectory,
)
from binlog_sync.adapters.outbound.local_segment_directory import LocalSegmentDirectory
from binlog_sync.adapters.outbound.manual_clock import ManualClock
from binlog_sync.adapters.outbound.mock_process_manager import MockProcessTable, MockStreamLauncher
from binlog_sync.adapters.outbound.mysqlbinlog_launcher import MySQLBinlogLauncher
from binlog_sync.adapters.outbound.psutil_process_table import PsutilProcessTable
from binlog_sync.adapters.outbound.system_clock import SystemClock

__all__ = [
    "ExternalCompressor",
    "LocalSegmentDirectory",
    "MySQLBinlogLauncher",
    "PsutilProcessTable",
    "SystemClock",
    # Test doubles
    "InMemoryCompressor",
    "InMemorySegmentDirectory",
    "ManualClock",
    "MockProcessTable",
    "MockStreamLauncher",
]
