"""Pytest configuration and fixtures for binlog_sync tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
import structlog
from prometheus_client import CollectorRegistry

from binlog_sync.adapters.outbound import (
    InMemoryCompressor,
    InMemorySegmentDirectory,
    ManualClock,
    MockProcessTable,
    MockStreamLauncher,
)
from binlog_sync.infrastructure.config import (
    BackupConfig,
    Config,
    ObservabilityConfig,
    SupervisorConfig,
)
from binlog_sync.infrastructure.container import Container
from binlog_sync.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with temporary directories."""
    return Config(
        backup=BackupConfig(backup_dir=temp_dir / "backup", start_file="mysql-bin.000001"),
        observability=ObservabilityConfig(log_dir=temp_dir / "log"),
        supervisor=SupervisorConfig(
            poll_interval_seconds=0.01,
            shutdown_grace_seconds=2.0,
            kill_process_group=False,
        ),
    )


@pytest.fixture
def container() -> Generator[Container, None, None]:
    """Provide a fresh DI container."""
    c = Container()
    yield c
    c.clear()


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def directory() -> InMemorySegmentDirectory:
    """In-memory backup directory."""
    return InMemorySegmentDirectory()


@pytest.fixture
def compressor(directory: InMemorySegmentDirectory) -> InMemoryCompressor:
    """Compressor that rewrites files in the in-memory directory."""
    return InMemoryCompressor(directory)


@pytest.fixture
def clock() -> ManualClock:
    """Manually advanced clock."""
    return ManualClock()


@pytest.fixture
def process_table() -> MockProcessTable:
    """Simulated process table."""
    return MockProcessTable()


@pytest.fixture
def launcher(process_table: MockProcessTable) -> MockStreamLauncher:
    """Simulated mysqlbinlog launcher."""
    return MockStreamLauncher(process_table)


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Keep logging configuration from leaking between tests."""
    yield
    structlog.reset_defaults()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "requires_posix: Needs POSIX signals and ps")
