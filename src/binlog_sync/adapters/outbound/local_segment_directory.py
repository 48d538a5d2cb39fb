"""Backup directory on the local filesystem."""

from __future__ import annotations

import os
from pathlib import Path

from binlog_sync.domain.entities import SegmentFile, by_mtime
from binlog_sync.infrastructure.logging import get_logger
from binlog_sync.ports.outbound import SegmentRemovalError


logger = get_logger(__name__)


class LocalSegmentDirectory:
    """Implementation of SegmentDirectoryPort over a flat directory.

    Only regular files directly inside ``root`` are considered; symlinks
    and subdirectories are ignored.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> str:
        return str(self._root)

    def scan(self) -> list[SegmentFile]:
        files = []
        with os.scandir(self._root) as entries:
            for entry in entries:
                try:
                    if not entry.is_file(follow_symlinks=False):
                        continue
                    stat = entry.stat(follow_symlinks=False)
                except FileNotFoundError:
                    # Compressed or deleted between listing and stat
                    continue
                files.append(SegmentFile(name=entry.name, mtime=stat.st_mtime, size=stat.st_size))
        return by_mtime(files)

    def exists(self, name: str) -> bool:
        return (self._root / name).is_file()

    def path_of(self, name: str) -> str:
        return str(self._root / name)

    def remove(self, name: str) -> None:
        try:
            (self._root / name).unlink()
        except FileNotFoundError:
            logger.debug("Already removed", file=name)
        except OSError as e:
            raise SegmentRemovalError(name, e.strerror or str(e)) from e
