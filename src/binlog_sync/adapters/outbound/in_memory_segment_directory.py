"""In-memory backup directory for testing and development.

This adapter provides a mock implementation of SegmentDirectoryPort and
CompressorPort so the maintenance logic can be exercised without touching
the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from binlog_sync.domain.entities import SegmentFile, by_mtime
from binlog_sync.ports.outbound import CompressionError, SegmentRemovalError

ROOT = "/backup"


class InMemorySegmentDirectory:
    """Mock implementation of SegmentDirectoryPort.

    Example:
        directory = InMemorySegmentDirectory()
        directory.add("mysql-bin.000001", mtime=100.0)
        directory.add("mysql-bin.000002", mtime=200.0)
        directory.scan()
    """

    def __init__(self, root: str = ROOT) -> None:
        self._root = root.rstrip("/") or "/"
        self._files: dict[str, SegmentFile] = {}
        self.undeletable: set[str] = set()
        self.removed: list[str] = []

    @property
    def root(self) -> str:
        return self._root

    def add(self, name: str, mtime: float, size: int = 0) -> SegmentFile:
        """Create or overwrite a file."""
        segment = SegmentFile(name=name, mtime=mtime, size=size)
        self._files[name] = segment
        return segment

    def discard(self, name: str) -> None:
        """Drop a file behind the scanner's back."""
        self._files.pop(name, None)

    def names(self) -> set[str]:
        return set(self._files)

    def scan(self) -> list[SegmentFile]:
        return by_mtime(self._files.values())

    def exists(self, name: str) -> bool:
        return name in self._files

    def path_of(self, name: str) -> str:
        return f"{self._root.rstrip('/')}/{name}"

    def name_of(self, path: str) -> str:
        prefix = f"{self._root.rstrip('/')}/"
        return path[len(prefix):] if path.startswith(prefix) else path

    def remove(self, name: str) -> None:
        if name in self.undeletable:
            raise SegmentRemovalError(name, "Permission denied")
        self._files.pop(name, None)
        self.removed.append(name)


@dataclass
class InMemoryCompressor:
    """Mock implementation of CompressorPort.

    Replaces ``<name>`` with ``<name>.gz`` in the directory, keeping the
    modification time like gzip does.
    """

    directory: InMemorySegmentDirectory
    suffix: str = ".gz"
    failing: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    def compress(self, path: str) -> None:
        name = self.directory.name_of(path)
        self.calls.append(name)
        if name in self.failing:
            raise CompressionError(name, 1)

        source = next(f for f in self.directory.scan() if f.name == name)
        self.directory.discard(name)
        self.directory.add(name + self.suffix, mtime=source.mtime, size=source.size // 4)
