"""Event infrastructure - event emitter and event types."""

from .base import BaseEmitter
from .emitter import EventEmitter
from .models import (
    BaseEvent,
    BatchCompletedEvent,
    BatchProgressEvent,
    ErrorInfo,
    IngestEvent,
    IngestEventType,
    TransferRetryingEvent,
)
from .null import NullEmitter

__all__ = [
    # Base and implementations
    "BaseEmitter",
    "EventEmitter",
    "NullEmitter",
    # Event models
    "BaseEvent",
    "ErrorInfo",
    "IngestEvent",
    "IngestEventType",
    "BatchProgressEvent",
    "BatchCompletedEvent",
    "TransferRetryingEvent",
]
