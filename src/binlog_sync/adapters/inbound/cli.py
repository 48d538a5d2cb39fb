"""Command line entry point.

Each option can also be set through the environment
(``BINLOG_SYNC_BACKUP__BACKUP_DIR`` and so on); command line values take
precedence.

Usage:
    binlog-sync --backup-dir=/backup/binlogs --start-file=mysql-bin.000001 \\
        --user=repl --password=secret --host=db1 --compress --rotate=14
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, NoReturn, Sequence

from prometheus_client import CollectorRegistry
from pydantic import ValidationError

from binlog_sync.application import BinlogSyncService
from binlog_sync.domain.errors import (
    ConfigurationError,
    DirectoryError,
    MissingStartPointError,
)
from binlog_sync.infrastructure.config import MISSING_BACKUP_DIR, Config
from binlog_sync.infrastructure.logging import get_logger, setup_logging
from binlog_sync.infrastructure.metrics import setup_metrics
from binlog_sync.infrastructure.tracing import setup_tracing, shutdown_tracing

logger = get_logger(__name__)


class _Parser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting on bad input."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="binlog-sync",
        description="Starts live binlog sync using mysqlbinlog utility",
        allow_abbrev=False,
    )
    parser.add_argument("--user", help="username to login to mysql")
    parser.add_argument("--password", help="password for the username")
    parser.add_argument("--host", help="mysql host")
    parser.add_argument("--start-file", help="start copying logs from this file")
    parser.add_argument("--backup-dir", type=Path, help="Backup destination directory (required)")
    parser.add_argument(
        "--log-dir", type=Path, help="Log directory (defaults to '/var/log/syncbinlog')"
    )
    parser.add_argument(
        "--compress", action="store_true", default=None, help="Compress backuped binlog files"
    )
    parser.add_argument(
        "--compress-app",
        help="Compression app (defaults to 'pigz'). Compression parameters can be given as "
        "well (e.g. pigz -p6 for 6 threaded compression)",
    )
    parser.add_argument(
        "--rotate",
        type=int,
        metavar="X",
        help="Rotate backup files for X days, 0 for no deletion (defaults to 0)",
    )
    parser.add_argument(
        "--verbose", action="store_true", default=None, help="Write logs to stdout as well"
    )
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-format", choices=["json", "console"])
    parser.add_argument(
        "--poll-interval", type=float, help="Seconds between checks of the running client"
    )
    parser.add_argument(
        "--metrics-file", type=Path, help="Write Prometheus metrics to this textfile"
    )
    return parser


# (section, field) each command line option maps onto
_OPTION_FIELDS: dict[str, tuple[str, str]] = {
    "user": ("mysql", "user"),
    "password": ("mysql", "password"),
    "host": ("mysql", "host"),
    "start_file": ("backup", "start_file"),
    "backup_dir": ("backup", "backup_dir"),
    "log_dir": ("observability", "log_dir"),
    "compress": ("compression", "enabled"),
    "compress_app": ("compression", "command"),
    "rotate": ("retention", "days"),
    "verbose": ("observability", "verbose"),
    "log_level": ("observability", "log_level"),
    "log_format": ("observability", "log_format"),
    "poll_interval": ("supervisor", "poll_interval_seconds"),
    "metrics_file": ("observability", "metrics_textfile"),
}


def parse_config(argv: Sequence[str] | None = None) -> Config:
    """Build the configuration from the environment and ``argv``.

    Raises:
        ConfigurationError: On unknown options, invalid values or a
            missing backup directory.
    """
    args = build_parser().parse_args(argv)

    overrides: dict[str, dict[str, Any]] = {}
    for option, (section, field) in _OPTION_FIELDS.items():
        value = getattr(args, option)
        if value is not None:
            overrides.setdefault(section, {})[field] = value

    try:
        config = Config(**overrides)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e

    if config.backup.backup_dir is None:
        raise ConfigurationError(MISSING_BACKUP_DIR)
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """Run binlog sync; returns the process exit code."""
    try:
        config = parse_config(argv)
        config.ensure_directories()
    except (ConfigurationError, DirectoryError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        build_parser().print_usage(sys.stderr)
        return 1

    observability = config.observability
    setup_logging(
        observability.status_log,
        level=observability.log_level,
        log_format=observability.log_format,
        verbose=observability.verbose,
    )
    setup_tracing(observability.otel_service_name, observability.otel_endpoint)
    metrics = setup_metrics(CollectorRegistry())

    service = BinlogSyncService(config, metrics=metrics)
    try:
        service.run()
    except MissingStartPointError as e:
        logger.error("Cannot start", error=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_tracing()
    return 0
