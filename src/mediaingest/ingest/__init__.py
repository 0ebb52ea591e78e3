"""Ingest pipeline - classification, retry, validation, queueing, transfer."""

from .classifier import ErrorClassifier, error_code
from .queue import BatchQueueManager, CheckpointResult, QueueStateStore
from .rate_limiter import RateLimiter, TokenBucketRateLimiter
from .retry import BaseRetryStrategy, RetryStrategy
from .scanner import scan_source_files
from .transfer import TransferService
from .validation import ExifTimestampReader, IntegrityValidator

__all__ = [
    "BaseRetryStrategy",
    "BatchQueueManager",
    "CheckpointResult",
    "ErrorClassifier",
    "ExifTimestampReader",
    "IntegrityValidator",
    "QueueStateStore",
    "RateLimiter",
    "RetryStrategy",
    "TokenBucketRateLimiter",
    "TransferService",
    "error_code",
    "scan_source_files",
]
