"""Custom exceptions for the ingest core."""


class IngestError(Exception):
    """Base exception for mediaingest errors."""

    pass


class ManagerNotOpenError(IngestError):
    """Raised when a BatchQueueManager is used before open() or context entry."""

    pass


class QueueError(IngestError):
    """Base exception for batch queue errors."""

    pass


class BatchInProgressError(QueueError):
    """Raised when a batch is added or started while another one is running."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or (
                "Batch already in progress. Please wait for current batch to "
                "complete or cancel it."
            )
        )


class RetryError(IngestError):
    """Raised when retry logic encounters an unexpected state.

    This indicates a programming error in the retry strategy, such as
    leaving the retry loop without producing a result.
    """

    pass


class IntegrityError(IngestError):
    """Base exception for transferred-file integrity failures."""

    code: str = "INTEGRITY_ERROR"

    def __init__(self, message: str, *, file: str) -> None:
        self.file = file
        super().__init__(message)


class FileAccessError(IntegrityError):
    """Raised when a file cannot be stat'd or read for validation."""

    code = "FILE_ACCESS"


class SizeMismatchError(IntegrityError):
    """Raised when a copy does not have the same byte size as its source."""

    code = "SIZE_MISMATCH"

    def __init__(self, *, file: str, source_size: int, dest_size: int) -> None:
        self.source_size = source_size
        self.dest_size = dest_size
        super().__init__(
            f"Size mismatch for {file}: source={source_size}, dest={dest_size}",
            file=file,
        )


class TransferFailedError(IngestError):
    """Raised by queue processors when a file could not be transferred.

    Carries the user-facing message and error code of the failure.
    """

    def __init__(self, message: str, *, file: str, code: str) -> None:
        self.file = file
        self.code = code
        super().__init__(message)
