"""Event data models."""

from .base import BaseEvent
from .batch import (
    BatchCompletedEvent,
    BatchProgressEvent,
    IngestEvent,
    IngestEventType,
    TransferRetryingEvent,
)
from .error_info import ErrorInfo

__all__ = [
    "BaseEvent",
    "BatchCompletedEvent",
    "BatchProgressEvent",
    "ErrorInfo",
    "IngestEvent",
    "IngestEventType",
    "TransferRetryingEvent",
]
