"""Inbound adapters - the command line entry point."""

from binlog_sync.adapters.inbound.cli import build_parser, main, parse_config

__all__ = [
    "build_parser",
    "main",
    "parse_config",
]
