"""Unit tests for the filesystem, compressor, launcher and clock adapters."""

import gzip
import os
import shutil
import stat
import threading
import time
from pathlib import Path

import pytest

from binlog_sync.adapters.outbound import (
    ExternalCompressor,
    LocalSegmentDirectory,
    MySQLBinlogLauncher,
    SystemClock,
)
from binlog_sync.domain.errors import (
    CompressionError,
    ConfigurationError,
    SegmentRemovalError,
    SubprocessLaunchError,
)
from binlog_sync.domain.value_objects import SegmentName
from binlog_sync.infrastructure.config import MySQLConfig


def write_file(path: Path, mtime: float, content: bytes = b"binlog") -> Path:
    path.write_bytes(content)
    os.utime(path, (mtime, mtime))
    return path


@pytest.mark.unit
class TestLocalSegmentDirectory:
    """Tests for LocalSegmentDirectory."""

    def test_scan_orders_by_mtime(self, temp_dir: Path):
        """Test regular files are listed oldest first."""
        write_file(temp_dir / "a.000002", 200.0)
        write_file(temp_dir / "a.000001", 100.0)
        write_file(temp_dir / "a.000003.gz", 300.0)

        files = LocalSegmentDirectory(temp_dir).scan()

        assert [f.name for f in files] == ["a.000001", "a.000002", "a.000003.gz"]
        assert files[0].mtime == 100.0
        assert files[0].size == len(b"binlog")

    def test_scan_skips_directories_and_symlinks(self, temp_dir: Path):
        """Test only regular files count."""
        write_file(temp_dir / "a.000001", 100.0)
        (temp_dir / "a.000009").mkdir()
        (temp_dir / "a.000010").symlink_to(temp_dir / "a.000001")

        names = [f.name for f in LocalSegmentDirectory(temp_dir).scan()]
        assert names == ["a.000001"]

    def test_exists_and_path_of(self, temp_dir: Path):
        """Test lookups relative to the root."""
        write_file(temp_dir / "a.000001", 100.0)
        directory = LocalSegmentDirectory(temp_dir)

        assert directory.exists("a.000001")
        assert not directory.exists("a.000002")
        assert directory.path_of("a.000001") == str(temp_dir / "a.000001")
        assert directory.root == str(temp_dir)

    def test_remove(self, temp_dir: Path):
        """Test files are deleted."""
        write_file(temp_dir / "a.000001", 100.0)
        directory = LocalSegmentDirectory(temp_dir)

        directory.remove("a.000001")
        assert not (temp_dir / "a.000001").exists()

    def test_remove_missing_is_ignored(self, temp_dir: Path):
        """Test removing an already deleted file is not an error."""
        LocalSegmentDirectory(temp_dir).remove("a.000001")

    def test_remove_failure(self, temp_dir: Path):
        """Test other removal errors are wrapped."""
        (temp_dir / "a.000001").mkdir()
        with pytest.raises(SegmentRemovalError):
            LocalSegmentDirectory(temp_dir).remove("a.000001")


@pytest.mark.unit
@pytest.mark.skipif(shutil.which("gzip") is None, reason="gzip not installed")
class TestExternalCompressor:
    """Tests for ExternalCompressor using gzip."""

    def test_compress_replaces_file(self, temp_dir: Path):
        """Test the segment is replaced by its compressed form."""
        segment = write_file(temp_dir / "a.000001", 100.0, b"x" * 4096)
        compressor = ExternalCompressor("gzip", temp_dir / "status.log")

        compressor.compress(str(segment))

        assert not segment.exists()
        compressed = temp_dir / "a.000001.gz"
        assert gzip.decompress(compressed.read_bytes()) == b"x" * 4096
        assert compressed.stat().st_mtime == 100.0

    def test_overwrites_stale_output(self, temp_dir: Path):
        """Test leftovers of an interrupted pass are overwritten."""
        segment = write_file(temp_dir / "a.000001", 100.0, b"fresh")
        (temp_dir / "a.000001.gz").write_bytes(b"partial")

        ExternalCompressor("gzip", temp_dir / "status.log").compress(str(segment))

        assert gzip.decompress((temp_dir / "a.000001.gz").read_bytes()) == b"fresh"

    def test_command_with_flags(self, temp_dir: Path):
        """Test the command may carry its own options."""
        compressor = ExternalCompressor("gzip -1", temp_dir / "status.log")
        assert compressor.argv == ["gzip", "-1"]

    def test_tool_failure(self, temp_dir: Path):
        """Test a non-zero exit raises CompressionError."""
        compressor = ExternalCompressor("gzip", temp_dir / "status.log")
        with pytest.raises(CompressionError) as exc_info:
            compressor.compress(str(temp_dir / "missing.000001"))
        assert exc_info.value.returncode != 0
        assert (temp_dir / "status.log").read_text()

    def test_missing_tool(self, temp_dir: Path):
        """Test an unknown executable raises CompressionError."""
        segment = write_file(temp_dir / "a.000001", 100.0)
        compressor = ExternalCompressor("no-such-compressor-xyz", temp_dir / "status.log")
        with pytest.raises(CompressionError):
            compressor.compress(str(segment))
        assert segment.exists()

    def test_empty_command(self, temp_dir: Path):
        """Test an empty command is rejected."""
        with pytest.raises(ConfigurationError):
            ExternalCompressor("  ", temp_dir / "status.log")


@pytest.mark.unit
class TestMySQLBinlogLauncher:
    """Tests for MySQLBinlogLauncher."""

    def test_build_command(self, temp_dir: Path):
        """Test the client is started as a raw, never-stopping remote tail."""
        mysql = MySQLConfig(user="repl", password="pw", host="db1")
        launcher = MySQLBinlogLauncher(mysql, temp_dir, temp_dir / "status.log")

        assert launcher.build_command(SegmentName("mysql-bin.000007")) == [
            "mysqlbinlog",
            "--user=repl",
            "--password=pw",
            "--host=db1",
            "--raw",
            "--read-from-remote-server",
            "--stop-never",
            "--verify-binlog-checksum",
            "--result-file=",
            "mysql-bin.000007",
        ]

    def test_command_name_is_basename(self, temp_dir: Path):
        """Test a full binary path still matches the process table name."""
        mysql = MySQLConfig(binary="/usr/local/mysql/bin/mysqlbinlog")
        launcher = MySQLBinlogLauncher(mysql, temp_dir, temp_dir / "status.log")
        assert launcher.command_name == "mysqlbinlog"

    def test_missing_binary(self, temp_dir: Path):
        """Test a missing executable raises SubprocessLaunchError."""
        mysql = MySQLConfig(binary=str(temp_dir / "mysqlbinlog"))
        launcher = MySQLBinlogLauncher(mysql, temp_dir, temp_dir / "status.log")
        with pytest.raises(SubprocessLaunchError):
            launcher.launch(SegmentName("mysql-bin.000001"))

    def test_launch_runs_in_backup_dir(self, temp_dir: Path):
        """Test the client writes into the backup directory."""
        backup = temp_dir / "backup"
        backup.mkdir()
        script = temp_dir / "mysqlbinlog"
        script.write_text('#!/bin/sh\nfor last; do :; done\ntouch "$last"\n')
        script.chmod(script.stat().st_mode | stat.S_IXUSR)

        launcher = MySQLBinlogLauncher(
            MySQLConfig(binary=str(script)), backup, temp_dir / "status.log"
        )
        handle = launcher.launch(SegmentName("mysql-bin.000003"))
        assert handle.process.wait(timeout=10) == 0

        assert (backup / "mysql-bin.000003").exists()
        assert handle.start_segment == "mysql-bin.000003"
        assert handle.exit_code() == 0


@pytest.mark.unit
class TestSystemClock:
    """Tests for SystemClock."""

    def test_now(self):
        """Test now follows the wall clock."""
        assert abs(SystemClock().now() - time.time()) < 5

    def test_sleep_wakes_on_event(self):
        """Test a set wake event cuts the sleep short."""
        wake = threading.Event()
        wake.set()
        started = time.monotonic()
        SystemClock(wake).sleep(30)
        assert time.monotonic() - started < 5

    def test_non_positive_sleep_returns(self):
        """Test zero sleeps do not block."""
        started = time.monotonic()
        SystemClock().sleep(0)
        assert time.monotonic() - started < 1
