"""Binlog Sync Service - wires the supervisor from configuration.

Usage:
    from binlog_sync.application import BinlogSyncService

    service = BinlogSyncService(config)
    service.run()  # Blocks until SIGINT/SIGTERM

Adapters are resolved from a DI container. Production adapters are only
registered for ports the caller did not provide, so tests can swap in the
in-memory directory, the mock process table or a manual clock.
"""

from __future__ import annotations

from binlog_sync.adapters.outbound import (
    ExternalCompressor,
    LocalSegmentDirectory,
    MySQLBinlogLauncher,
    PsutilProcessTable,
    SystemClock,
)
from binlog_sync.application.shutdown import ShutdownSignal
from binlog_sync.application.supervisor import Supervisor
from binlog_sync.domain.services import ResumePointResolver, RetentionManager, SegmentCompressor
from binlog_sync.infrastructure.config import Config, get_config
from binlog_sync.infrastructure.container import Container
from binlog_sync.infrastructure.logging import get_logger
from binlog_sync.infrastructure.metrics import MetricsRegistry
from binlog_sync.ports.outbound import (
    ClockPort,
    CompressorPort,
    ProcessTablePort,
    SegmentDirectoryPort,
    StreamLauncherPort,
)

logger = get_logger(__name__)


class BinlogSyncService:
    """Entry point that assembles and runs the supervision loop."""

    def __init__(
        self,
        config: Config | None = None,
        container: Container | None = None,
        metrics: MetricsRegistry | None = None,
        shutdown: ShutdownSignal | None = None,
    ) -> None:
        self._config = config or get_config()
        self._container = container or Container()
        self._metrics = metrics
        self._shutdown = shutdown or ShutdownSignal()
        self._register_defaults()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def shutdown(self) -> ShutdownSignal:
        return self._shutdown

    def _register_defaults(self) -> None:
        config = self._config
        status_log = config.observability.status_log

        self._container.setdefault_factory(
            SegmentDirectoryPort, lambda _: LocalSegmentDirectory(config.backup_dir)
        )
        self._container.setdefault_factory(
            StreamLauncherPort,
            lambda _: MySQLBinlogLauncher(config.mysql, config.backup_dir, status_log),
        )
        self._container.setdefault_factory(ProcessTablePort, lambda _: PsutilProcessTable())
        self._container.setdefault_factory(
            CompressorPort, lambda _: ExternalCompressor(config.compression.command, status_log)
        )
        self._container.setdefault_factory(
            ClockPort, lambda _: SystemClock(self._shutdown.event)
        )

    def build_supervisor(self) -> Supervisor:
        """Create the supervisor and its domain services."""
        config = self._config
        directory = self._container.resolve(SegmentDirectoryPort)
        clock = self._container.resolve(ClockPort)

        compressor = None
        if config.compression.enabled:
            compressor = SegmentCompressor(
                directory, self._container.resolve(CompressorPort), self._metrics
            )

        return Supervisor(
            launcher=self._container.resolve(StreamLauncherPort),
            process_table=self._container.resolve(ProcessTablePort),
            resolver=ResumePointResolver(directory, config.backup.start_file),
            retention=RetentionManager(directory, clock, config.retention.days, self._metrics),
            clock=clock,
            compressor=compressor,
            settings=config.supervisor,
            metrics=self._metrics,
            metrics_textfile=config.observability.metrics_textfile,
        )

    def run(self) -> None:
        """Run until a termination signal arrives.

        Raises:
            MissingStartPointError: No backups exist and no start file is set.
        """
        config = self._config
        logger.info("Initializing binlog sync")
        logger.info("Backup destination", path=str(config.backup_dir))
        logger.info("Log destination", path=str(config.observability.log_dir))
        if config.compression.enabled:
            logger.info("Compression enabled", command=config.compression.command)
        if config.retention.days:
            logger.info("Rotation enabled", days=config.retention.days)

        supervisor = self.build_supervisor()
        with self._shutdown:
            supervisor.run(self._shutdown)
        logger.info("Binlog sync stopped")
