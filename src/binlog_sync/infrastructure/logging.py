"""Structured logging configuration.

Everything goes to the append-only status log in the log directory. In
verbose mode the same lines are mirrored to stdout.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import Processor

STATUS_LOGGER = "binlog_sync"
CONSOLE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    status_log: Path,
    level: str = "INFO",
    log_format: str = "console",
    verbose: bool = False,
) -> None:
    """
    Set up structured logging with structlog.

    Args:
        status_log: File the status log is appended to
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
        verbose: Also write every entry to stdout
    """
    handlers: list[logging.Handler] = [logging.FileHandler(status_log, mode="a")]
    if verbose:
        handlers.append(logging.StreamHandler(sys.stdout))

    # Standard library logging only carries the rendered line
    status_logger = logging.getLogger(STATUS_LOGGER)
    for handler in list(status_logger.handlers):
        status_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
        status_logger.addHandler(handler)
    status_logger.setLevel(getattr(logging, level.upper()))
    status_logger.propagate = False

    # Build processor chain
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.TimeStamper(fmt=CONSOLE_TIMESTAMP_FORMAT),
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=lambda *args: status_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger instance.

    Args:
        name: Logger name (module name typically)
        **initial_context: Initial context to bind to the logger

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
