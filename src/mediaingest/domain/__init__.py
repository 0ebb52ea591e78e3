"""Domain layer - core models and exceptions."""

from .errors import ErrorCategory, ErrorClassification
from .exceptions import (
    BatchInProgressError,
    FileAccessError,
    IngestError,
    IntegrityError,
    ManagerNotOpenError,
    QueueError,
    RetryError,
    SizeMismatchError,
    TransferFailedError,
)
from .integrity import (
    BatchValidationResult,
    BatchWarning,
    FileTransferRecord,
    FileValidationResult,
    TimestampConfidence,
    TimestampResult,
    TimestampSource,
    ValidationSeverity,
)
from .queue import (
    BatchProgress,
    BatchSummary,
    ProcessOutcome,
    QueueItem,
    QueueItemStatus,
    QueueState,
    QueueStatus,
)
from .retry import RetryOptions, RetryPolicy, RetryResult
from .transfer import (
    FileTransferTask,
    MediaType,
    TransferDestinations,
    TransferFailure,
    TransferReport,
)

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorClassification",
    # Queue
    "BatchProgress",
    "BatchSummary",
    "ProcessOutcome",
    "QueueItem",
    "QueueItemStatus",
    "QueueState",
    "QueueStatus",
    # Retry
    "RetryOptions",
    "RetryPolicy",
    "RetryResult",
    # Integrity
    "BatchValidationResult",
    "BatchWarning",
    "FileTransferRecord",
    "FileValidationResult",
    "TimestampConfidence",
    "TimestampResult",
    "TimestampSource",
    "ValidationSeverity",
    # Transfer
    "FileTransferTask",
    "MediaType",
    "TransferDestinations",
    "TransferFailure",
    "TransferReport",
    # Exceptions
    "BatchInProgressError",
    "FileAccessError",
    "IngestError",
    "IntegrityError",
    "ManagerNotOpenError",
    "QueueError",
    "RetryError",
    "SizeMismatchError",
    "TransferFailedError",
]
