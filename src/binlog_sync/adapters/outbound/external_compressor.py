"""Compression through an external tool such as pigz or gzip."""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path

from binlog_sync.domain.errors import ConfigurationError
from binlog_sync.ports.outbound import CompressionError


class ExternalCompressor:
    """Implementation of CompressorPort running ``<command> --force <path>``.

    ``--force`` makes gzip-compatible tools overwrite a stale compressed
    file left by an interrupted pass and replace the original in place.
    Tool output is appended to the status log.
    """

    def __init__(self, command: str, status_log: str | Path) -> None:
        self._argv = shlex.split(command)
        if not self._argv:
            raise ConfigurationError("Compression command must not be empty")
        self._status_log = Path(status_log)

    @property
    def argv(self) -> list[str]:
        return list(self._argv)

    def compress(self, path: str) -> None:
        name = os.path.basename(path)
        try:
            with open(self._status_log, "a") as log_file:
                result = subprocess.run(  # noqa: S603
                    [*self._argv, "--force", path],
                    stdin=subprocess.DEVNULL,
                    stdout=log_file,
                    stderr=subprocess.STDOUT,
                    check=False,
                )
        except OSError as e:
            raise CompressionError(name, None, str(e)) from e

        if result.returncode != 0:
            raise CompressionError(name, result.returncode)
