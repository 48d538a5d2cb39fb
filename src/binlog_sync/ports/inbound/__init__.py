"""Inbound ports - the API binlog sync offers to its entry points."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from binlog_sync.domain.errors import (
    ConfigurationError,
    DirectoryError,
    MissingStartPointError,
)


class CancellationToken(Protocol):
    """Anything the supervision loop can ask whether it should stop."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


__all__ = [
    "CancellationToken",
    "ConfigurationError",
    "DirectoryError",
    "MissingStartPointError",
]
