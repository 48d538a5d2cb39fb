"""Prometheus metrics for binlog sync.

There is no HTTP listener; metrics are written in the text exposition
format for the node exporter's textfile collector.
"""

from __future__ import annotations

from pathlib import Path

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    REGISTRY,
    CollectorRegistry,
    write_to_textfile,
)


class MetricsRegistry:
    """Registry of all binlog sync metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Supervisor metrics
        self.poll_iterations_total = Counter(
            "binlog_sync_poll_iterations_total",
            "Total supervisor poll iterations",
            ["state"],  # running, relaunching
            registry=self._registry,
        )

        self.stream_running = Gauge(
            "binlog_sync_stream_running",
            "Whether the streaming client was alive at the last poll",
            registry=self._registry,
        )

        self.stream_launches_total = Counter(
            "binlog_sync_stream_launches_total",
            "Total streaming client launches",
            ["status"],  # success, error
            registry=self._registry,
        )

        # Maintenance metrics
        self.segments_compressed_total = Counter(
            "binlog_sync_segments_compressed_total",
            "Total segment compressions",
            ["status"],  # success, error
            registry=self._registry,
        )

        self.compression_pass_seconds = Histogram(
            "binlog_sync_compression_pass_seconds",
            "Duration of a compression pass in seconds",
            buckets=(0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0, 300.0),
            registry=self._registry,
        )

        self.segments_deleted_total = Counter(
            "binlog_sync_segments_deleted_total",
            "Total segment deletions by retention",
            ["status"],  # success, error
            registry=self._registry,
        )

        # Build info
        self.info = Info(
            "binlog_sync",
            "Binlog sync information",
            registry=self._registry,
        )

    def write_textfile(self, path: Path) -> None:
        """Write the registry in text format to ``path`` (atomically)."""
        write_to_textfile(str(path), self._registry)


def setup_metrics(registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """Create the metrics registry and record build info."""
    from binlog_sync import __version__

    metrics = MetricsRegistry(registry)
    metrics.info.info({"version": __version__})
    return metrics
