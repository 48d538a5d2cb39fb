"""Time based retention of backed up segments."""

from __future__ import annotations

from dataclasses import dataclass, field

from binlog_sync.domain.entities import open_segment
from binlog_sync.domain.errors import SegmentRemovalError
from binlog_sync.infrastructure.logging import get_logger
from binlog_sync.infrastructure.metrics import MetricsRegistry
from binlog_sync.ports.outbound import ClockPort, SegmentDirectoryPort

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400


@dataclass
class RetentionReport:
    """Result of one retention pass."""

    enabled: bool = True
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    kept_open_segment: str | None = None


class RetentionManager:
    """Deletes backup files older than the retention period.

    Age alone decides; plain and compressed files are treated the same.
    A period of 0 days disables retention.
    """

    def __init__(
        self,
        directory: SegmentDirectoryPort,
        clock: ClockPort,
        days: int = 0,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        if days < 0:
            raise ValueError(f"Retention days must be non-negative, got {days}")
        self._directory = directory
        self._clock = clock
        self._days = days
        self._metrics = metrics

    @property
    def enabled(self) -> bool:
        return self._days > 0

    def cutoff(self) -> float:
        """Files modified strictly before this timestamp are expired."""
        return self._clock.now() - self._days * SECONDS_PER_DAY

    def apply(self) -> RetentionReport:
        """Delete expired files.

        The open segment is kept even when it is past the cutoff (an idle
        server stops touching it).

        Returns:
            What was deleted and what could not be.
        """
        if not self.enabled:
            return RetentionReport(enabled=False)

        report = RetentionReport()
        files = self._directory.scan()
        cutoff = self.cutoff()
        current = open_segment(files)

        for f in files:
            if not f.is_older_than(cutoff):
                continue

            if current is not None and f.name == current.name:
                report.kept_open_segment = f.name
                continue

            logger.info("Rotation: deleting", file=self._directory.path_of(f.name))
            try:
                self._directory.remove(f.name)
            except SegmentRemovalError as e:
                logger.error("Rotation failed", file=f.name, error=e.reason)
                report.failed.append(f.name)
                self._count("error")
                continue

            report.deleted.append(f.name)
            self._count("success")

        return report

    def _count(self, status: str) -> None:
        if self._metrics is not None:
            self._metrics.segments_deleted_total.labels(status=status).inc()
