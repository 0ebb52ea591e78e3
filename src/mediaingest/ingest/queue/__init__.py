"""Batch queue - manager and durable state store."""

from .manager import (
    PROCESSING_FAILED,
    BatchQueueManager,
    CompleteCallback,
    Processor,
    ProgressCallback,
)
from .store import CheckpointResult, QueueStateStore

__all__ = [
    "BatchQueueManager",
    "CheckpointResult",
    "CompleteCallback",
    "PROCESSING_FAILED",
    "Processor",
    "ProgressCallback",
    "QueueStateStore",
]
