"""mediaingest - resilient camera-card ingest.

Sequential batch processing with durable checkpoints, classified retry of
filesystem errors, and post-transfer integrity validation.
"""

from .app import App, create_app
from .config import Settings
from .domain import (
    BatchInProgressError,
    BatchSummary,
    ErrorCategory,
    ErrorClassification,
    IngestError,
    QueueState,
    RetryOptions,
    RetryPolicy,
    RetryResult,
)
from .ingest import (
    BatchQueueManager,
    ErrorClassifier,
    IntegrityValidator,
    RetryStrategy,
    TokenBucketRateLimiter,
    TransferService,
    scan_source_files,
)

__all__ = [
    "App",
    "BatchInProgressError",
    "BatchQueueManager",
    "BatchSummary",
    "ErrorCategory",
    "ErrorClassification",
    "ErrorClassifier",
    "IngestError",
    "IntegrityValidator",
    "QueueState",
    "RetryOptions",
    "RetryPolicy",
    "RetryResult",
    "RetryStrategy",
    "Settings",
    "TokenBucketRateLimiter",
    "TransferService",
    "create_app",
    "scan_source_files",
]
