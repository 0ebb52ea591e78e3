"""Events published by the batch queue and the transfer layer."""

import enum
import typing as t

from pydantic import Field

from ...domain.queue import BatchProgress, BatchSummary
from .base import BaseEvent
from .error_info import ErrorInfo


class IngestEventType(enum.StrEnum):
    BATCH_PROGRESS = "batch.progress"
    BATCH_COMPLETED = "batch.completed"
    TRANSFER_RETRYING = "transfer.retrying"


class BatchProgressEvent(BaseEvent):
    """A queue item started processing or failed."""

    queue_id: str | None = None
    progress: BatchProgress


class BatchCompletedEvent(BaseEvent):
    """A batch reached a terminal status."""

    queue_id: str | None = None
    summary: BatchSummary


class TransferRetryingEvent(BaseEvent):
    """An operation failed with a retriable error and will run again."""

    destination: str
    attempt: int = Field(ge=1, description="Attempt that just failed (1-based)")
    max_retries: int = Field(ge=0)
    delay_ms: int = Field(ge=0)
    category: str
    error: ErrorInfo

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


IngestEvent: t.TypeAlias = BatchProgressEvent | BatchCompletedEvent | TransferRetryingEvent
