"""Integrity validation domain models."""

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

BATCH_FILE = "BATCH"


class TimestampSource(enum.StrEnum):
    """Where a capture timestamp came from."""

    EXIF = "EXIF"
    FILESYSTEM = "FILESYSTEM"


class TimestampConfidence(enum.StrEnum):
    """How far a timestamp can be trusted for chronological ordering."""

    HIGH = "HIGH"  # Embedded capture metadata
    MEDIUM = "MEDIUM"  # Filesystem fallback
    LOW = "LOW"  # Extraction failed entirely


class ValidationSeverity(enum.StrEnum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class TimestampResult(BaseModel):
    """Best-effort capture timestamp with its confidence grade."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime | None
    source: TimestampSource | None
    confidence: TimestampConfidence
    warning: str | None = None


class FileValidationResult(BaseModel):
    """Outcome of validating one transferred file."""

    file: str = Field(description="Basename of the source file")
    size_match: bool
    source_size: int = Field(ge=0)
    dest_size: int = Field(ge=0)
    timestamp: datetime | None = None
    timestamp_source: TimestampSource | None = None
    warnings: list[str] = Field(default_factory=list)


class FileTransferRecord(BaseModel):
    """What the transfer layer knows about one copied file."""

    file: str
    source: str
    destination: str
    size: int = Field(ge=0)
    duration: float = Field(default=0.0, ge=0.0, description="Copy time in seconds")
    size_validated: bool
    timestamp: datetime | None = None
    timestamp_source: TimestampSource | None = None
    warnings: list[str] = Field(default_factory=list)


class BatchWarning(BaseModel):
    """A severity-tagged finding with a suggested remediation."""

    model_config = ConfigDict(frozen=True)

    severity: ValidationSeverity
    file: str = BATCH_FILE
    message: str
    suggested_action: str


class BatchValidationResult(BaseModel):
    """Aggregate integrity report over a set of transfer records."""

    file_count_match: bool
    source_file_count: int = Field(ge=0)
    dest_file_count: int = Field(ge=0)
    size_validation_passed: int = Field(ge=0)
    exif_timestamps_found: int = Field(ge=0)
    filesystem_fallbacks: int = Field(ge=0)
    timestamps_missing: int = Field(ge=0)
    chronological_order_enforceable: bool
    warnings: list[BatchWarning] = Field(default_factory=list)

    def has_errors(self) -> bool:
        return any(w.severity == ValidationSeverity.ERROR for w in self.warnings)
