"""Batch queue domain models.

Queue models serialise with camelCase aliases so the on-disk state file
keeps the ``{"items": [...], "status": ..., "currentFile": ...}`` shape.
"""

import enum
import typing as t

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class QueueItemStatus(enum.StrEnum):
    """Per-file lifecycle.

    Flow: PENDING -> PROCESSING -> (COMPLETED | ERROR), or PENDING -> CANCELLED
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
    CANCELLED = "cancelled"


class QueueStatus(enum.StrEnum):
    """Batch lifecycle.

    Flow: IDLE -> PROCESSING -> (COMPLETED | ERROR | CANCELLED) -> IDLE
    """

    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
    CANCELLED = "cancelled"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QueueItem(_CamelModel):
    """One file in a batch."""

    file_id: str = Field(description="Opaque identifier handed to the processor")
    status: QueueItemStatus = QueueItemStatus.PENDING
    result: t.Any | None = Field(
        default=None, description="Processor result for completed items"
    )
    error: str | None = Field(default=None, description="Failure message")


class QueueState(_CamelModel):
    """Everything the queue manager persists between runs."""

    items: list[QueueItem] = Field(default_factory=list)
    status: QueueStatus = QueueStatus.IDLE
    current_file: str | None = Field(
        default=None,
        description="File whose processor call is in flight, if any",
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

    @classmethod
    def from_json(cls, payload: str | bytes) -> "QueueState":
        return cls.model_validate_json(payload)


class ProcessOutcome(BaseModel):
    """What a processor reports for one file."""

    success: bool
    result: t.Any | None = None


class BatchProgress(BaseModel):
    """Progress update for the file at ``current`` (1-based) of ``total``."""

    model_config = ConfigDict(frozen=True)

    current: int = Field(ge=1)
    total: int = Field(ge=1)
    file_id: str
    status: t.Literal["processing", "error"]
    error: str | None = None


class BatchSummary(BaseModel):
    """Final tallies for a batch run."""

    model_config = ConfigDict(frozen=True)

    status: QueueStatus
    completed: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    cancelled: int = Field(default=0, ge=0)
