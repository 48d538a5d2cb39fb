"""Error taxonomy for binlog sync.

Startup errors (configuration, directories, missing start point) are fatal
and end the process with a non-zero exit code. Everything raised while the
supervision loop is running is logged and swallowed at the component
boundary, so the loop keeps going.
"""

from __future__ import annotations


class BinlogSyncError(Exception):
    """Base class for all binlog sync errors."""


class ConfigurationError(BinlogSyncError):
    """Raised when required options are missing or an option is unknown."""


class MissingStartPointError(ConfigurationError):
    """Raised when there are no backups yet and no start file was given."""

    def __init__(self, backup_dir: str) -> None:
        super().__init__(
            f"No backup file found in {backup_dir} and no start file given; "
            "specify one with --start-file"
        )
        self.backup_dir = backup_dir


class DirectoryError(BinlogSyncError):
    """Raised when the backup or log directory cannot be created."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot create directory {path}: {reason}")
        self.path = path
        self.reason = reason


class SubprocessLaunchError(BinlogSyncError):
    """Raised when the streaming client cannot be started."""


class CompressionError(BinlogSyncError):
    """Raised when the compression tool fails on a segment."""

    def __init__(self, name: str, returncode: int | None, reason: str = "") -> None:
        detail = reason or f"exit code {returncode}"
        super().__init__(f"Compression of {name} failed: {detail}")
        self.name = name
        self.returncode = returncode


class SegmentRemovalError(BinlogSyncError):
    """Raised when an expired segment cannot be deleted."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Cannot delete {name}: {reason}")
        self.name = name
        self.reason = reason
