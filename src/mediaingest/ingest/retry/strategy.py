"""Retry strategy with classified exponential backoff."""

import asyncio
import inspect
import typing as t

from ...domain.errors import ErrorClassification
from ...domain.exceptions import RetryError
from ...domain.retry import RetryOptions, RetryResult
from ...events import BaseEmitter, ErrorInfo, IngestEventType, NullEmitter
from ...events.models import TransferRetryingEvent
from ...infrastructure.logging import get_logger
from ..classifier import ErrorClassifier
from .base import BaseRetryStrategy

if t.TYPE_CHECKING:
    import loguru

T = t.TypeVar("T")


class RetryStrategy(BaseRetryStrategy):
    """Retries transient and network failures with exponential backoff.

    Stops on success, a non-retriable classification, an exhausted retry
    budget (chosen from the destination path), cancellation, or detected
    removal of the source media.
    """

    def __init__(
        self,
        classifier: ErrorClassifier | None = None,
        logger: t.Optional["loguru.Logger"] = None,
        emitter: BaseEmitter | None = None,
    ) -> None:
        """
        Initialise retry strategy.

        Args:
            classifier: Error classifier providing categories, retry budget
                and backoff delays. Defaults to ErrorClassifier().
            logger: Logger for recording retry decisions.
            emitter: Event emitter for transfer.retrying events. If None,
                a NullEmitter is used.
        """
        self.classifier = classifier or ErrorClassifier()
        self.logger = logger or get_logger(__name__)
        self.emitter = emitter or NullEmitter()

    async def execute_with_retry(
        self,
        operation: t.Callable[[], t.Awaitable[T]],
        options: RetryOptions,
    ) -> RetryResult[T]:
        """
        Execute async operation, retrying retriable failures.

        Args:
            operation: Zero-argument async callable to execute
            options: Destination path (drives retry budget), optional media
                removal context, cancel event and observer callbacks

        Returns:
            RetryResult with the value on success, otherwise the last error,
            its classification and the number of attempts made
        """
        destination = str(options.destination_path)
        max_retries = self.classifier.get_max_retries(options.destination_path)
        attempts = 0
        last_error: BaseException | None = None
        last_classification: ErrorClassification | None = None

        while attempts <= max_retries:
            if options.cancelled:
                self.logger.debug(
                    f"Retry cancelled after {attempts} attempt(s): {destination}"
                )
                return RetryResult(
                    success=False,
                    attempts=attempts,
                    error=last_error,
                    classification=last_classification,
                )

            attempts += 1

            try:
                value = await operation()
            except Exception as e:
                last_error = e
            else:
                return RetryResult(success=True, attempts=attempts, value=value)

            classification = self.classifier.classify(last_error)
            last_classification = classification
            if options.on_error:
                options.on_error(classification)

            if options.detects_media_removal and await self._media_removed(
                last_error, options
            ):
                self.logger.error(
                    f"Source media removed during transfer: {options.source_path}"
                )
                return RetryResult(
                    success=False,
                    attempts=attempts,
                    error=last_error,
                    classification=classification,
                    card_removed=True,
                )

            if not classification.retriable:
                self.logger.debug(
                    f"Non-retriable error ({classification.code}), "
                    f"not retrying {destination}: {last_error}"
                )
                return RetryResult(
                    success=False,
                    attempts=attempts,
                    error=last_error,
                    classification=classification,
                )

            if attempts > max_retries:
                self.logger.error(
                    f"Operation failed after {max_retries} retries: {destination}"
                )
                return RetryResult(
                    success=False,
                    attempts=attempts,
                    error=last_error,
                    classification=classification,
                )

            delay_ms = self.classifier.get_backoff_delay(last_error, attempts - 1)
            if options.on_retry:
                options.on_retry(attempts, delay_ms)

            await self.emitter.emit(
                IngestEventType.TRANSFER_RETRYING,
                TransferRetryingEvent(
                    destination=destination,
                    attempt=attempts,
                    max_retries=max_retries,
                    delay_ms=delay_ms,
                    category=classification.category,
                    error=ErrorInfo.from_exception(
                        last_error, code=classification.code
                    ),
                ),
            )
            self.logger.warning(
                f"Retrying (attempt {attempts + 1}/{max_retries + 1}) "
                f"in {delay_ms}ms after {classification.code}: {destination}"
            )

            await self._sleep(delay_ms, options.cancel_event)

        # Only reachable when max_retries is negative
        raise RetryError("Retry loop completed without returning a result")

    async def _media_removed(
        self, error: BaseException, options: RetryOptions
    ) -> bool:
        check = t.cast(t.Callable[[], t.Any], options.media_present)
        present = check()
        if inspect.isawaitable(present):
            present = await present
        return self.classifier.is_card_removal_error(
            error,
            t.cast(str, options.source_path),
            t.cast(str, options.media_root),
            mount_exists=bool(present),
        )

    async def _sleep(self, delay_ms: int, cancel_event: asyncio.Event | None) -> None:
        """Wait ``delay_ms``, returning early if ``cancel_event`` is set."""
        delay = delay_ms / 1000
        if cancel_event is None:
            await asyncio.sleep(delay)
            return

        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass  # Full delay elapsed
