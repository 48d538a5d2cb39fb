"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: the cancellation token entry points hand to the loop
- Outbound ports: backup directory, streaming client, process table,
  compression tool and clock

Adapters implement these ports with concrete functionality.
"""

from binlog_sync.ports.inbound import CancellationToken
from binlog_sync.ports.outbound import (
    ClockPort,
    CompressorPort,
    ProcessTablePort,
    SegmentDirectoryPort,
    StreamLauncherPort,
)

__all__ = [
    # Inbound ports
    "CancellationToken",
    # Outbound ports
    "ClockPort",
    "CompressorPort",
    "ProcessTablePort",
    "SegmentDirectoryPort",
    "StreamLauncherPort",
]
