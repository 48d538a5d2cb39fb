"""Resume point resolution.

mysqlbinlog does not expose a byte offset that survives a restart, so a
restarted client always begins at the start of the segment that was open
when the previous one died. The bytes already captured for that segment are
streamed again and overwrite the local copy.

If the newest local segment has already been purged on the server the
launch fails and keeps failing; that gap is surfaced through the launch
errors in the status log rather than skipped silently.
"""

from __future__ import annotations

from binlog_sync.domain.entities import by_mtime
from binlog_sync.domain.errors import MissingStartPointError
from binlog_sync.domain.value_objects import SegmentName
from binlog_sync.infrastructure.logging import get_logger
from binlog_sync.ports.outbound import SegmentDirectoryPort

logger = get_logger(__name__)


class ResumePointResolver:
    """Picks the segment a relaunched streaming client should request."""

    def __init__(self, directory: SegmentDirectoryPort, start_file: str | None = None) -> None:
        """Initialize the resolver.

        Args:
            directory: Backup directory to inspect.
            start_file: Segment to start from when nothing was backed up yet.
        """
        self._directory = directory
        self._start_file = start_file or None

    def resolve(self) -> SegmentName:
        """Return the identity of the most recently modified segment.

        Compressed segments count under their uncompressed identity. The
        result only depends on the directory listing, so repeated calls on
        an unchanged directory agree.

        Returns:
            Segment name to pass to the streaming client.

        Raises:
            MissingStartPointError: If no segment exists and no start file
                was configured.
        """
        segments = by_mtime(f for f in self._directory.scan() if f.is_segment)

        if not segments:
            logger.info("No backup file found", backup_dir=self._directory.root)
            if self._start_file is None:
                raise MissingStartPointError(self._directory.root)
            logger.info("Starting to copy from start file", segment=self._start_file)
            return SegmentName(self._start_file)

        last = segments[-1]
        logger.info("Last used backup file", segment=last.name)
        return last.identity
