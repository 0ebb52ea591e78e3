"""Base interface for retry strategies."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

from ...domain.retry import RetryOptions, RetryResult

T = TypeVar("T")


class BaseRetryStrategy(ABC):
    """Abstract base class for retry strategies.

    Allows different strategies (classified backoff, single attempt) to be
    swapped in via dependency injection.
    """

    @abstractmethod
    async def execute_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        options: RetryOptions,
    ) -> RetryResult[T]:
        """Execute an async operation with retry logic.

        Args:
            operation: Zero-argument async callable to execute.
            options: Destination path, media-removal context, cancellation
                and observer callbacks.

        Returns:
            A RetryResult describing success or the reason retrying stopped.
            Operation failures are reported in the result, not raised.
        """
        pass
