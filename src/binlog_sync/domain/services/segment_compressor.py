"""Compression of closed binlog segments."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from binlog_sync.domain.entities import plain_segments
from binlog_sync.domain.errors import CompressionError
from binlog_sync.infrastructure.logging import get_logger
from binlog_sync.infrastructure.metrics import MetricsRegistry
from binlog_sync.ports.inbound import CancellationToken
from binlog_sync.ports.outbound import CompressorPort, SegmentDirectoryPort

logger = get_logger(__name__)


@dataclass
class CompressionReport:
    """Result of one compression pass."""

    compressed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    open_segment: str | None = None  # Left alone
    stopped_early: bool = False


class SegmentCompressor:
    """Compresses every closed segment, never the open one.

    The newest plain segment by modification time is taken to be the one
    the streaming client is still appending to. This holds because the
    client writes segments strictly in sequence and only ever appends to
    the latest; it is an approximation, not something the client reports.
    """

    def __init__(
        self,
        directory: SegmentDirectoryPort,
        compressor: CompressorPort,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._directory = directory
        self._compressor = compressor
        self._metrics = metrics

    def compress_closed(self, cancel: CancellationToken | None = None) -> CompressionReport:
        """Compress closed segments oldest first.

        A segment that disappeared since the scan ends the pass; another
        pass (or the retention manager) already dealt with it. A failing
        segment stays uncompressed and is picked up by the next pass.

        Args:
            cancel: Stop between segments once this is cancelled.

        Returns:
            What was compressed, what failed and which segment was skipped.
        """
        report = CompressionReport()
        segments = plain_segments(self._directory.scan())
        if not segments:
            return report

        started = time.monotonic()
        report.open_segment = segments[-1].name

        for segment in segments[:-1]:
            if cancel is not None and cancel.cancelled:
                report.stopped_early = True
                break

            if not self._directory.exists(segment.name):
                logger.debug("Segment no longer exists, ending pass", segment=segment.name)
                report.stopped_early = True
                break

            path = self._directory.path_of(segment.name)
            logger.info("Compressing", segment=path)
            try:
                self._compressor.compress(path)
            except CompressionError as e:
                logger.error("Compression failed", segment=path, error=str(e))
                report.failed.append(segment.name)
                self._count("error")
                continue

            logger.info("Compressed", segment=path)
            report.compressed.append(segment.name)
            self._count("success")

        if self._metrics is not None:
            self._metrics.compression_pass_seconds.observe(time.monotonic() - started)
        return report

    def _count(self, status: str) -> None:
        if self._metrics is not None:
            self._metrics.segments_compressed_total.labels(status=status).inc()
