"""Infrastructure layer - cross-cutting concerns."""

from binlog_sync.infrastructure.config import Config, get_config
from binlog_sync.infrastructure.container import Container
from binlog_sync.infrastructure.logging import setup_logging, get_logger
from binlog_sync.infrastructure.metrics import setup_metrics, MetricsRegistry
from binlog_sync.infrastructure.tracing import setup_tracing, shutdown_tracing, get_tracer, trace_span

__all__ = [
    "Config",
    "get_config",
    "Container",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "shutdown_tracing",
    "get_tracer",
    "trace_span",
]
