"""Classification of filesystem and network errors for retry decisions.

Every known OS error code maps to exactly one category, one user message and
one recovery action. Codes outside the known set are treated as FATAL so an
unclassified condition can never cause an endless retry loop.
"""

import errno
from pathlib import PurePath

from ..domain.errors import UNKNOWN_CODE, ErrorCategory, ErrorClassification
from ..domain.retry import RetryPolicy

UNKNOWN_RECOVERY_ACTION = "Review error log and contact support"


def error_code(error: BaseException) -> str:
    """Extract an OS-style error code (e.g. ``ENOENT``) from an exception.

    A string ``code`` attribute wins, then the ``errno`` of an OSError. A
    TimeoutError without an errno is reported as ETIMEDOUT.
    """
    code = getattr(error, "code", None)
    if isinstance(code, str) and code:
        return code
    if isinstance(error, OSError) and error.errno is not None:
        return errno.errorcode.get(error.errno, UNKNOWN_CODE)
    if isinstance(error, TimeoutError):
        return "ETIMEDOUT"
    return UNKNOWN_CODE


def _category_for(code: str) -> ErrorCategory | None:
    match code:
        case "ENOSPC" | "EACCES" | "EROFS" | "ENOTDIR" | "EISDIR":
            return ErrorCategory.FATAL
        case "ETIMEDOUT" | "ENETUNREACH" | "ECONNREFUSED" | "EHOSTUNREACH":
            return ErrorCategory.NETWORK
        case "EBUSY" | "ECONNRESET" | "ENOENT" | "ESTALE" | "EAGAIN" | "EIO":
            # ENOENT is usually a network filesystem cache repopulating
            return ErrorCategory.TRANSIENT
        case _:
            return None


def user_message_for(code: str) -> str | None:
    """Canonical user-facing message for a known code."""
    match code:
        case "ENOSPC":
            return "Destination disk is full. Cannot continue transfer."
        case "EACCES":
            return "Permission denied. Check folder access permissions."
        case "EROFS":
            return "Destination is read-only. Cannot write files."
        case "ENOTDIR":
            return "Destination path is not a folder. Cannot write files."
        case "EISDIR":
            return "Expected a file but found a folder. Cannot continue transfer."
        case "ETIMEDOUT":
            return "Network timeout. Retrying..."
        case "ENETUNREACH":
            return "Network unreachable. Retrying... (Check network mount)"
        case "ECONNREFUSED":
            return "Connection refused by storage server. Retrying..."
        case "EHOSTUNREACH":
            return "Storage server unreachable. Retrying..."
        case "EBUSY":
            return "File is busy. Retrying..."
        case "ECONNRESET":
            return "Connection reset. Retrying..."
        case "ENOENT":
            return "File not found. Retrying... (network cache may be reloading)"
        case "ESTALE":
            return "Network file handle stale. Retrying... (temporary mount issue)"
        case "EAGAIN":
            return "Resource temporarily unavailable. Retrying..."
        case "EIO":
            return "I/O error. Retrying..."
        case _:
            return None


def recovery_action_for(code: str) -> str | None:
    """Canonical recovery action for a known code."""
    match code:
        case "ENOSPC":
            return "Free up disk space on destination and restart transfer"
        case "EACCES":
            return "Check folder permissions (chmod/chown) and restart transfer"
        case "EROFS":
            return "Ensure destination is mounted read-write"
        case "ENOTDIR":
            return "Check the destination folder path and restart transfer"
        case "EISDIR":
            return "Remove or rename the conflicting folder and restart transfer"
        case "ETIMEDOUT":
            return "Check network connection stability"
        case "ENETUNREACH":
            return "Check network connection and mount status"
        case "ECONNREFUSED":
            return "Check that the storage server is running"
        case "EHOSTUNREACH":
            return "Check network routing to the storage server"
        case "EBUSY":
            return "Wait for retry - file will become available"
        case "ECONNRESET":
            return "Wait for retry - connection will be re-established"
        case "ENOENT":
            return "Wait for retry - network cache will repopulate"
        case "ESTALE":
            return "Wait for retry - network mount will recover"
        case "EAGAIN":
            return "Wait for retry - resource will become available"
        case "EIO":
            return "Check disk health and cable connections"
        case _:
            return None


def _is_under(path: str | PurePath, root: str | PurePath) -> bool:
    return PurePath(path).is_relative_to(PurePath(root))


class ErrorClassifier:
    """Maps errors to retry guidance under a configurable RetryPolicy."""

    def __init__(self, policy: RetryPolicy | None = None) -> None:
        self.policy = policy or RetryPolicy()

    def classify(self, error: BaseException) -> ErrorClassification:
        code = error_code(error)
        category = _category_for(code)

        if category is None:
            return ErrorClassification(
                category=ErrorCategory.FATAL,
                code=code,
                retriable=False,
                user_message=str(error) or type(error).__name__,
                recovery_action=UNKNOWN_RECOVERY_ACTION,
            )

        return ErrorClassification(
            category=category,
            code=code,
            retriable=category != ErrorCategory.FATAL,
            user_message=user_message_for(code) or str(error),
            recovery_action=recovery_action_for(code) or UNKNOWN_RECOVERY_ACTION,
        )

    def is_network_path(self, destination_path: str | PurePath) -> bool:
        return any(
            _is_under(destination_path, prefix)
            for prefix in self.policy.network_mount_prefixes
        )

    def get_max_retries(self, destination_path: str | PurePath) -> int:
        """Retry budget for a destination: extended for network mounts."""
        if self.is_network_path(destination_path):
            return self.policy.network_max_retries
        return self.policy.local_max_retries

    def get_backoff_delay(self, error: BaseException, attempt: int) -> int:
        """Backoff in milliseconds before retry ``attempt`` (0-indexed).

        Formula: 2^attempt * base, where base depends on the category.
        Non-retriable errors get 0.

        Examples:
            >>> classifier = ErrorClassifier()
            >>> classifier.get_backoff_delay(OSError(errno.EBUSY, "busy"), 0)
            1000
            >>> classifier.get_backoff_delay(OSError(errno.EBUSY, "busy"), 3)
            8000
        """
        classification = self.classify(error)
        if not classification.retriable:
            return 0

        base = (
            self.policy.network_base_delay_ms
            if classification.category == ErrorCategory.NETWORK
            else self.policy.transient_base_delay_ms
        )
        return (2**attempt) * base

    def is_card_removal_error(
        self,
        error: BaseException,
        source_path: str | PurePath,
        mount_root: str | PurePath,
        mount_exists: bool,
    ) -> bool:
        """True when an ENOENT is explained by the source media being gone.

        Mount existence is supplied by the caller; this method never touches
        the filesystem.
        """
        if error_code(error) != "ENOENT":
            return False
        if not _is_under(source_path, mount_root):
            return False
        return not mount_exists
