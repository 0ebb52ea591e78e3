"""Application settings."""

import enum
import typing as t
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Environment(enum.StrEnum):
    """Runtime environment for the application."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(enum.StrEnum):
    """Log levels understood by loguru."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_STATE_FILE = Path.home() / ".mediaingest" / "batch-queue.json"


class Settings(BaseModel):
    """Settings container used to bootstrap the app.

    Core code depends only on this shape; the CLI layer decides how values
    are populated.
    """

    model_config = ConfigDict(frozen=True)

    environment: Environment = Environment.PRODUCTION
    log_level: LogLevel = LogLevel.INFO
    state_file: Path = Field(
        default=DEFAULT_STATE_FILE,
        description="Where the batch queue checkpoints its state",
    )
    network_mount_prefixes: tuple[str, ...] = Field(
        default=(),
        description="Destination roots that get the extended retry budget",
    )
    local_max_retries: int = Field(default=3, ge=0)
    network_max_retries: int = Field(default=5, ge=0)
    transient_base_delay_ms: int = Field(default=1000, ge=0)
    network_base_delay_ms: int = Field(default=2000, ge=0)
    rate_limit_capacity: float = Field(default=100.0, gt=0)
    rate_limit_per_second: float = Field(default=100 / 60, gt=0)


def build_settings(**overrides: t.Any) -> Settings:
    """Build Settings, ignoring overrides that are None.

    Lets CLI options that were not supplied fall back to model defaults.
    """
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
