"""Unit tests for the DI container, metrics, tracing and logging."""

from pathlib import Path

import pytest
from prometheus_client import CollectorRegistry

from binlog_sync import __version__
from binlog_sync.adapters.outbound import InMemorySegmentDirectory, ManualClock
from binlog_sync.infrastructure.container import Container
from binlog_sync.infrastructure.logging import get_logger, setup_logging
from binlog_sync.infrastructure.metrics import MetricsRegistry, setup_metrics
from binlog_sync.infrastructure.tracing import get_tracer, setup_tracing, shutdown_tracing, trace_span
from binlog_sync.ports.outbound import ClockPort, SegmentDirectoryPort


@pytest.mark.unit
class TestContainer:
    """Tests for the dependency injection container."""

    def test_register_singleton(self, container: Container):
        """Test a registered instance is returned as is."""
        clock = ManualClock()
        container.register_singleton(ClockPort, clock)
        assert container.resolve(ClockPort) is clock

    def test_factory_builds_once(self, container: Container):
        """Test factories are called on first resolve only."""
        calls = []

        def factory(_: Container) -> InMemorySegmentDirectory:
            calls.append(1)
            return InMemorySegmentDirectory()

        container.register_factory(SegmentDirectoryPort, factory)
        first = container.resolve(SegmentDirectoryPort)
        assert container.resolve(SegmentDirectoryPort) is first
        assert len(calls) == 1

    def test_setdefault_keeps_existing(self, container: Container):
        """Test a default does not replace an earlier registration."""
        clock = ManualClock()
        container.register_singleton(ClockPort, clock)
        container.setdefault_factory(ClockPort, lambda _: ManualClock(start=0))
        assert container.resolve(ClockPort) is clock

    def test_setdefault_registers_missing(self, container: Container):
        """Test a default is used when nothing was registered."""
        container.setdefault_factory(ClockPort, lambda _: ManualClock(start=5.0))
        assert container.resolve(ClockPort).now() == 5.0

    def test_unregistered_port(self, container: Container):
        """Test resolving an unknown port names it."""
        with pytest.raises(KeyError, match="ClockPort"):
            container.resolve(ClockPort)

    def test_clear(self, container: Container):
        """Test clearing drops every registration."""
        container.register_singleton(ClockPort, ManualClock())
        container.clear()
        assert not container.has(ClockPort)


@pytest.mark.unit
class TestMetricsRegistry:
    """Tests for the metrics registry."""

    def test_write_textfile(self, metrics_registry: MetricsRegistry, temp_dir: Path):
        """Test metrics are written in the text exposition format."""
        metrics_registry.poll_iterations_total.labels(state="running").inc()
        metrics_registry.stream_running.set(1)

        path = temp_dir / "binlog_sync.prom"
        metrics_registry.write_textfile(path)

        text = path.read_text()
        assert 'binlog_sync_poll_iterations_total{state="running"} 1.0' in text
        assert "binlog_sync_stream_running 1.0" in text

    def test_setup_records_version(self):
        """Test build info carries the package version."""
        registry = CollectorRegistry()
        setup_metrics(registry)
        assert registry.get_sample_value("binlog_sync_info", {"version": __version__}) == 1.0


@pytest.mark.unit
class TestTracing:
    """Tests for tracing helpers."""

    def test_trace_span_without_setup(self):
        """Test spans work before tracing is configured."""
        with trace_span("supervisor.poll_iteration", {"supervisor.state": "running"}) as span:
            span.set_attribute("segments", 2)

    def test_setup_and_shutdown(self):
        """Test a configured tracer can be shut down and falls back afterwards."""
        tracer = setup_tracing("binlog_sync_test")
        assert get_tracer() is tracer

        shutdown_tracing()
        assert get_tracer() is not tracer


@pytest.mark.unit
class TestLogging:
    """Tests for the status log."""

    def test_writes_status_log(self, temp_dir: Path):
        """Test entries are appended to the status log."""
        status_log = temp_dir / "status.log"
        setup_logging(status_log)

        get_logger("test").info("Compressing", segment="/backup/a.000001")

        text = status_log.read_text()
        assert "Compressing" in text
        assert "segment=/backup/a.000001" in text

    def test_appends(self, temp_dir: Path):
        """Test an existing status log is not truncated."""
        status_log = temp_dir / "status.log"
        status_log.write_text("previous run\n")
        setup_logging(status_log)

        get_logger("test").info("Initializing binlog sync")

        lines = status_log.read_text().splitlines()
        assert lines[0] == "previous run"
        assert "Initializing binlog sync" in lines[-1]

    def test_json_format(self, temp_dir: Path):
        """Test JSON lines output."""
        status_log = temp_dir / "status.log"
        setup_logging(status_log, log_format="json")

        get_logger("test").warning("Pid belongs to another process", pid=42)

        text = status_log.read_text()
        assert '"event": "Pid belongs to another process"' in text
        assert '"pid": 42' in text

    def test_level_filter(self, temp_dir: Path):
        """Test entries below the level are dropped."""
        status_log = temp_dir / "status.log"
        setup_logging(status_log, level="WARNING")

        get_logger("test").info("quiet")

        assert "quiet" not in status_log.read_text()

    def test_verbose_mirrors_to_stdout(self, temp_dir: Path, capsys: pytest.CaptureFixture):
        """Test verbose mode also prints entries."""
        setup_logging(temp_dir / "status.log", verbose=True)

        get_logger("test").info("Exit signal caught!")

        assert "Exit signal caught!" in capsys.readouterr().out
