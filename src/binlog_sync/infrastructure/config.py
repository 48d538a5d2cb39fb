"""Configuration management for binlog sync."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from binlog_sync.domain.errors import ConfigurationError, DirectoryError

MISSING_BACKUP_DIR = (
    "Please, specify a destination directory for backups using --backup-dir parameter."
)


def default_compress_command() -> str:
    """Return ``pigz`` pinned to all but one CPU (at least one thread)."""
    threads = max((os.cpu_count() or 1) - 1, 1)
    return f"pigz -p{threads}"


class MySQLConfig(BaseModel):
    """Connection options forwarded to the streaming client."""

    model_config = ConfigDict(frozen=True)

    user: str | None = Field(default=None, description="MySQL user")
    password: SecretStr | None = Field(default=None, description="MySQL password")
    host: str | None = Field(default=None, description="MySQL host")
    binary: str = Field(default="mysqlbinlog", description="Streaming client executable")

    def connection_options(self) -> list[str]:
        """Render the options in mysqlbinlog ``--name=value`` form."""
        options = []
        if self.user is not None:
            options.append(f"--user={self.user}")
        if self.password is not None:
            options.append(f"--password={self.password.get_secret_value()}")
        if self.host is not None:
            options.append(f"--host={self.host}")
        return options


class BackupConfig(BaseModel):
    """Backup destination configuration."""

    model_config = ConfigDict(frozen=True)

    backup_dir: Path | None = Field(default=None, description="Backup destination directory")
    start_file: str | None = Field(
        default=None, description="Binlog file to start from when no backup exists yet"
    )

    @field_validator("backup_dir")
    @classmethod
    def _absolute(cls, value: Path | None) -> Path | None:
        return value.expanduser().resolve() if value is not None else None


class CompressionConfig(BaseModel):
    """Compression of closed segments."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Compress closed segments")
    command: str = Field(
        default_factory=default_compress_command,
        description="Compression command, may carry its own flags",
    )


class RetentionConfig(BaseModel):
    """Retention of old segments."""

    model_config = ConfigDict(frozen=True)

    days: int = Field(default=0, ge=0, description="Delete backups older than N days, 0 disables")


class SupervisorConfig(BaseModel):
    """Supervision loop configuration."""

    model_config = ConfigDict(frozen=True)

    poll_interval_seconds: float = Field(
        default=30.0, gt=0, description="Sleep between maintenance passes"
    )
    relaunch_delay_seconds: float = Field(
        default=0.0, ge=0, description="Pause after a relaunch, 0 retries immediately"
    )
    shutdown_grace_seconds: float = Field(
        default=10.0, ge=0, description="Wait for the stream to exit before SIGKILL"
    )
    kill_process_group: bool = Field(
        default=True, description="Send SIGTERM to the client's process group on shutdown"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    model_config = ConfigDict(frozen=True)

    log_dir: Path = Field(default=Path("/var/log/syncbinlog"), description="Status log directory")
    verbose: bool = Field(default=False, description="Mirror the status log to stdout")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    metrics_textfile: Path | None = Field(
        default=None, description="Prometheus textfile collector output"
    )
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="binlog_sync", description="Service name for tracing")

    @field_validator("log_dir")
    @classmethod
    def _absolute(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @property
    def status_log(self) -> Path:
        """Path of the append-only status log."""
        return self.log_dir / "status.log"


class Config(BaseSettings):
    """Main configuration for binlog sync."""

    model_config = SettingsConfigDict(
        env_prefix="BINLOG_SYNC_",
        env_nested_delimiter="__",
        case_sensitive=False,
        frozen=True,
    )

    mysql: MySQLConfig = Field(default_factory=MySQLConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)
    compression: CompressionConfig = Field(default_factory=CompressionConfig)
    retention: RetentionConfig = Field(default_factory=RetentionConfig)
    supervisor: SupervisorConfig = Field(default_factory=SupervisorConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def backup_dir(self) -> Path:
        """The backup directory, which must be configured."""
        if self.backup.backup_dir is None:
            raise ConfigurationError(MISSING_BACKUP_DIR)
        return self.backup.backup_dir

    def ensure_directories(self) -> None:
        """Ensure log and backup directories exist."""
        for path in (self.observability.log_dir, self.backup_dir):
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryError(str(path), e.strerror or str(e)) from e
            if not os.access(path, os.W_OK | os.X_OK):
                raise DirectoryError(str(path), "not writable")


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    config = Config()
    config.ensure_directories()
    return config
