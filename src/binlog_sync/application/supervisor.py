"""Supervision loop for the binlog streaming client.

Each tick is one step of a two-state machine:

    RUNNING      the tracked client is alive: compress closed segments,
                 apply retention, then sleep for the poll interval.
    RELAUNCHING  the client is gone (or its pid now belongs to another
                 program): resolve the resume point and start a new client.
                 No sleep, so a dead client is replaced at once.

A failed launch is retried on the next tick without any delay unless
``relaunch_delay_seconds`` is set. With a persistent failure (e.g. the
resume segment was purged upstream) the loop spins; the default keeps the
immediate retry and the delay is opt-in.
"""

from __future__ import annotations

import signal
from dataclasses import dataclass
from pathlib import Path

from binlog_sync.domain.entities import ProcessHandle, SupervisorState, matches_command
from binlog_sync.domain.errors import SubprocessLaunchError
from binlog_sync.domain.services import ResumePointResolver, RetentionManager, SegmentCompressor
from binlog_sync.domain.value_objects import SegmentName
from binlog_sync.infrastructure.config import SupervisorConfig
from binlog_sync.infrastructure.logging import get_logger
from binlog_sync.infrastructure.metrics import MetricsRegistry
from binlog_sync.infrastructure.tracing import trace_span
from binlog_sync.ports.inbound import CancellationToken
from binlog_sync.ports.outbound import ClockPort, ProcessTablePort, StreamLauncherPort

logger = get_logger(__name__)


@dataclass
class SupervisorContext:
    """Mutable state owned by the supervisor."""

    handle: ProcessHandle | None = None
    state: SupervisorState | None = None
    resume_point: SegmentName | None = None
    iterations: int = 0
    launches: int = 0
    launch_failures: int = 0


class Supervisor:
    """Keeps exactly one streaming client alive and drives maintenance.

    Thread Safety:
        Not thread-safe. The loop, the maintenance passes and shutdown all
        run on the main thread.
    """

    def __init__(
        self,
        launcher: StreamLauncherPort,
        process_table: ProcessTablePort,
        resolver: ResumePointResolver,
        retention: RetentionManager,
        clock: ClockPort,
        compressor: SegmentCompressor | None = None,
        settings: SupervisorConfig | None = None,
        metrics: MetricsRegistry | None = None,
        metrics_textfile: Path | None = None,
    ) -> None:
        """Initialize the supervisor.

        Args:
            launcher: Starts the streaming client.
            process_table: Liveness checks and signalling.
            resolver: Picks the segment to resume from.
            retention: Deletes expired backups.
            clock: Sleeps between ticks.
            compressor: Compresses closed segments; None disables compression.
            settings: Loop timings and shutdown behavior.
            metrics: Registry to record into, if any.
            metrics_textfile: Where to write metrics after every tick.
        """
        self._launcher = launcher
        self._process_table = process_table
        self._resolver = resolver
        self._retention = retention
        self._clock = clock
        self._compressor = compressor
        self._settings = settings or SupervisorConfig()
        self._metrics = metrics
        self._metrics_textfile = metrics_textfile

        self._context = SupervisorContext()
        self._cancel: CancellationToken | None = None

    @property
    def context(self) -> SupervisorContext:
        return self._context

    def is_stream_alive(self) -> bool:
        """Check that the tracked pid is still our streaming client.

        Besides the pid existing, its command name has to match the client
        binary; after a crash the kernel may have handed the pid to an
        unrelated process.
        """
        handle = self._context.handle
        if handle is None:
            return False

        exit_code = handle.exit_code()
        if exit_code is not None:
            logger.warning("Streaming client exited", pid=handle.pid, exit_code=exit_code)
            return False

        name = self._process_table.command_name(handle.pid)
        if not matches_command(name, self._launcher.command_name):
            if name is None:
                logger.warning("Streaming client is not running", pid=handle.pid)
            else:
                logger.warning("Pid belongs to another process", pid=handle.pid, command=name)
            return False

        return True

    def poll_iteration(self) -> SupervisorState:
        """Run one tick.

        Returns:
            RUNNING if the client was alive, RELAUNCHING if a launch was
            attempted.

        Raises:
            MissingStartPointError: Nothing was backed up yet and no start
                file is configured.
        """
        self._context.iterations += 1

        with trace_span("supervisor.poll_iteration") as span:
            if self.is_stream_alive():
                state = SupervisorState.RUNNING
                self._maintain()
            else:
                state = SupervisorState.RELAUNCHING
                self._context.handle = None
                self._relaunch()
            span.set_attribute("supervisor.state", state.value)

        self._context.state = state
        self._record(state)

        if state is SupervisorState.RUNNING:
            self._clock.sleep(self._settings.poll_interval_seconds)
        elif self._settings.relaunch_delay_seconds > 0:
            self._clock.sleep(self._settings.relaunch_delay_seconds)
        return state

    def run(self, cancel: CancellationToken) -> None:
        """Tick until ``cancel`` is set.

        Child processes are terminated on the way out, also when a fatal
        error ends the loop.
        """
        self._cancel = cancel
        try:
            while not cancel.cancelled:
                self.poll_iteration()
        finally:
            self._cancel = None
            self.stop(signal_group=cancel.cancelled)

    def stop(self, signal_group: bool = False) -> None:
        """Terminate the streaming client.

        Args:
            signal_group: Also SIGTERM the client's process group first, which
                reaches the children it started.
        """
        handle = self._context.handle
        if signal_group:
            logger.info("Exit signal caught!")
            logger.info("Stopping child processes before exit")
            if handle is not None and self._settings.kill_process_group:
                try:
                    self._process_table.signal_group(handle, signal.SIGTERM)
                except OSError as e:
                    logger.warning("Cannot signal process group", pid=handle.pid, error=str(e))

        if handle is None:
            return

        logger.info("Killing streaming client", pid=handle.pid)
        try:
            self._process_table.terminate(handle, self._settings.shutdown_grace_seconds)
        except OSError as e:
            logger.error("Cannot terminate streaming client", pid=handle.pid, error=str(e))
        self._context.handle = None
        if self._metrics is not None:
            self._metrics.stream_running.set(0)

    def _maintain(self) -> None:
        try:
            if self._compressor is not None:
                with trace_span("supervisor.compress"):
                    self._compressor.compress_closed(self._cancel)
            with trace_span("supervisor.retention"):
                self._retention.apply()
        except OSError as e:
            logger.error("Backup directory maintenance failed", error=str(e))

    def _relaunch(self) -> None:
        try:
            resume_point = self._resolver.resolve()
        except OSError as e:
            logger.error("Cannot inspect backup directory", error=str(e))
            return

        self._context.resume_point = resume_point
        logger.info("Starting live binlog backup", segment=resume_point)

        try:
            handle = self._launcher.launch(resume_point)
        except SubprocessLaunchError as e:
            logger.error("Streaming client failed to start", segment=resume_point, error=str(e))
            self._context.launch_failures += 1
            if self._metrics is not None:
                self._metrics.stream_launches_total.labels(status="error").inc()
            return

        self._context.handle = handle
        self._context.launches += 1
        logger.info("Streaming client started", pid=handle.pid, command=handle.command_name)
        if self._metrics is not None:
            self._metrics.stream_launches_total.labels(status="success").inc()

    def _record(self, state: SupervisorState) -> None:
        if self._metrics is None:
            return
        self._metrics.poll_iterations_total.labels(state=state.value).inc()
        self._metrics.stream_running.set(1 if self._context.handle is not None else 0)
        if self._metrics_textfile is not None:
            try:
                self._metrics.write_textfile(self._metrics_textfile)
            except OSError as e:
                logger.warning("Cannot write metrics", path=str(self._metrics_textfile), error=str(e))
