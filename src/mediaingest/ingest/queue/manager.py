"""Batch queue manager for sequential, resumable file processing.

This module provides the BatchQueueManager class which runs one batch of
file ids at a time through a caller-supplied processor, strictly FIFO,
checkpointing queue state to disk after every item.
"""

import asyncio
import inspect
import typing as t
import uuid
from pathlib import Path

from ...domain.exceptions import BatchInProgressError, ManagerNotOpenError
from ...domain.queue import (
    BatchProgress,
    BatchSummary,
    ProcessOutcome,
    QueueItem,
    QueueItemStatus,
    QueueState,
    QueueStatus,
)
from ...events import (
    BaseEmitter,
    BatchCompletedEvent,
    BatchProgressEvent,
    IngestEventType,
    NullEmitter,
)
from ...infrastructure.logging import get_logger
from ..rate_limiter import RateLimiter
from .store import CheckpointResult, QueueStateStore

if t.TYPE_CHECKING:
    import loguru

PROCESSING_FAILED: t.Final = "Processing failed"

Processor = t.Callable[[str], t.Awaitable[ProcessOutcome | t.Mapping[str, t.Any]]]
ProgressCallback = t.Callable[[BatchProgress], None | t.Awaitable[None]]
CompleteCallback = t.Callable[[BatchSummary], None | t.Awaitable[None]]


class BatchQueueManager:
    """Runs one batch of files at a time through a processor.

    Key behaviour:
    - Items are processed strictly in the order they were added, one at a time
    - Only one batch may be queued or running per manager instance
    - A failing item is recorded and the batch continues
    - Cancellation is graceful: the in-flight item finishes, the rest are
      marked cancelled
    - State is checkpointed after every item; a batch interrupted by a crash
      is loaded back as idle, never as still running

    Usage:
        async with BatchQueueManager(Path("queue.json")) as manager:
            await manager.add_to_queue(["a.jpg", "b.jpg"])
            summary = await manager.start_processing(processor, on_progress)
    """

    def __init__(
        self,
        state_path: Path | None = None,
        *,
        store: QueueStateStore | None = None,
        emitter: BaseEmitter | None = None,
        logger: t.Optional["loguru.Logger"] = None,
    ) -> None:
        """Initialise the queue manager.

        Args:
            state_path: JSON file used for checkpoints. Ignored if ``store``
                is given.
            store: State store to use instead of one built from
                ``state_path``.
            emitter: Event emitter for batch.progress / batch.completed
                events. If None, a NullEmitter is used.
            logger: Logger instance for recording queue events.
        """
        if store is None and state_path is None:
            raise ValueError("Either state_path or store must be provided")

        self._logger = logger or get_logger(__name__)
        self._store = store or QueueStateStore(t.cast(Path, state_path), self._logger)
        self._emitter = emitter or NullEmitter()
        self._state = QueueState()
        self._queue_id: str | None = None
        self._is_open = False
        self._is_processing = False
        self._is_cancelled = False

    @property
    def emitter(self) -> BaseEmitter:
        return self._emitter

    @property
    def queue_id(self) -> str | None:
        """Identifier returned by the most recent add_to_queue call."""
        return self._queue_id

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def is_open(self) -> bool:
        return self._is_open

    async def __aenter__(self) -> "BatchQueueManager":
        await self.open()
        return self

    async def __aexit__(self, *args: t.Any) -> None:
        await self.close()

    async def open(self) -> None:
        """Load any persisted state and make the manager usable.

        A missing or unreadable state file is an expected first-run
        condition and yields an empty idle queue. A batch that was
        processing when the previous process died is loaded as idle.
        """
        persisted = await self._store.load()
        if persisted is not None:
            if persisted.status == QueueStatus.PROCESSING:
                self._logger.warning(
                    "Previous batch was interrupted; resetting queue to idle"
                )
                persisted.status = QueueStatus.IDLE
            persisted.current_file = None
            self._state = persisted
            self._logger.info(f"Restored {len(self._state.items)} queue item(s) from disk")

        self._is_open = True

    async def close(self) -> None:
        """Cancel any running batch and write a final checkpoint.

        Idempotent - calling it on a closed manager does nothing.
        """
        if not self._is_open:
            return
        if self._is_processing:
            self.cancel()
        await self._checkpoint()
        self._is_open = False

    async def add_to_queue(self, file_ids: t.Sequence[str]) -> str:
        """Replace the queue with a fresh batch of pending items.

        Previous queue contents are discarded so identifiers from an
        earlier working set never leak into the next batch.

        Returns:
            An opaque identifier for the new batch.

        Raises:
            BatchInProgressError: If a batch is currently processing.
        """
        self._require_open()
        if self._is_processing:
            raise BatchInProgressError()

        self._queue_id = str(uuid.uuid4())
        self._state = QueueState(
            items=[QueueItem(file_id=file_id) for file_id in file_ids],
            status=QueueStatus.IDLE,
            current_file=None,
        )
        self._is_cancelled = False
        self._logger.debug(f"Queued {len(file_ids)} file(s) as batch {self._queue_id}")

        await self._checkpoint()
        return self._queue_id

    async def start_processing(
        self,
        processor: Processor,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> BatchSummary:
        """Process every queued item in order.

        Args:
            processor: Async callable invoked once per file id. Returns a
                ProcessOutcome (or a mapping of the same shape).
            on_progress: Called when an item starts, and again if it raises.
            on_complete: Called once with the final tallies.
            rate_limiter: If given, one token is consumed before each item.

        Returns:
            The same summary passed to ``on_complete``.

        Raises:
            BatchInProgressError: If a batch is already processing.
        """
        self._require_open()
        if self._is_processing:
            raise BatchInProgressError("Batch already in progress")

        self._is_processing = True
        self._state.status = QueueStatus.PROCESSING

        items = self._state.items
        total = len(items)
        current = completed = failed = cancelled = 0

        try:
            for item in items:
                if self._is_cancelled:
                    item.status = QueueItemStatus.CANCELLED
                    cancelled += 1
                    continue

                current += 1
                item.status = QueueItemStatus.PROCESSING
                self._state.current_file = item.file_id

                await self._report_progress(
                    on_progress,
                    BatchProgress(
                        current=current,
                        total=total,
                        file_id=item.file_id,
                        status="processing",
                    ),
                )

                try:
                    if rate_limiter is not None:
                        await rate_limiter.consume(1)
                    outcome = ProcessOutcome.model_validate(await processor(item.file_id))
                except Exception as e:
                    item.status = QueueItemStatus.ERROR
                    item.error = str(e) or type(e).__name__
                    failed += 1
                    self._logger.warning(f"Processing failed for {item.file_id}: {item.error}")

                    await self._report_progress(
                        on_progress,
                        BatchProgress(
                            current=current,
                            total=total,
                            file_id=item.file_id,
                            status="error",
                            error=item.error,
                        ),
                    )
                else:
                    if outcome.success and outcome.result:
                        item.status = QueueItemStatus.COMPLETED
                        item.result = outcome.result
                        completed += 1
                    else:
                        item.status = QueueItemStatus.ERROR
                        item.error = PROCESSING_FAILED
                        failed += 1

                self._state.current_file = None
                await self._checkpoint()

            if self._is_cancelled:
                final_status = QueueStatus.CANCELLED
            elif failed > 0 and completed == 0:
                final_status = QueueStatus.ERROR
            else:
                final_status = QueueStatus.COMPLETED

            self._state.status = final_status
            self._state.current_file = None

            summary = BatchSummary(
                status=final_status,
                completed=completed,
                failed=failed,
                cancelled=cancelled,
            )
            self._logger.info(
                f"Batch {final_status}: {completed} completed, "
                f"{failed} failed, {cancelled} cancelled"
            )

            await self._notify(on_complete, summary)
            await self._emitter.emit(
                IngestEventType.BATCH_COMPLETED,
                BatchCompletedEvent(queue_id=self._queue_id, summary=summary),
            )
            await self._checkpoint()
            return summary

        except asyncio.CancelledError:
            # The task itself was cancelled; never leave the state "processing"
            self._is_cancelled = True
            self._state.status = QueueStatus.CANCELLED
            self._state.current_file = None
            raise
        finally:
            self._is_processing = False

    def cancel(self) -> bool:
        """Request graceful cancellation of the running batch.

        The item currently being processed finishes; every item after it is
        marked cancelled without reaching the processor.

        Returns:
            True if a running batch was signalled, False if nothing was
            processing.
        """
        if not self._is_processing:
            return False

        self._is_cancelled = True
        self._state.status = QueueStatus.CANCELLED
        self._logger.info("Batch cancellation requested")
        return True

    def get_status(self) -> QueueState:
        """Return a snapshot of the queue state.

        The snapshot is a deep copy; mutating it never affects the manager.
        """
        return self._state.model_copy(deep=True)

    async def clear_queue(self) -> None:
        """Reset to an empty idle queue and checkpoint immediately.

        Safe to call at any time, including on an already-empty queue.
        """
        self._require_open()
        self._logger.info(f"Clearing queue (had {len(self._state.items)} item(s))")
        self._state = QueueState()
        self._queue_id = None
        self._is_cancelled = False
        await self._checkpoint()

    async def _checkpoint(self) -> CheckpointResult:
        return await self._store.save(self._state)

    async def _report_progress(
        self, callback: ProgressCallback | None, progress: BatchProgress
    ) -> None:
        await self._notify(callback, progress)
        await self._emitter.emit(
            IngestEventType.BATCH_PROGRESS,
            BatchProgressEvent(queue_id=self._queue_id, progress=progress),
        )

    async def _notify(self, callback: t.Callable | None, payload: t.Any) -> None:
        """Invoke a sync or async observer; its failures never stop the batch."""
        if callback is None:
            return
        try:
            result = callback(payload)
            if inspect.isawaitable(result):
                await result
        except Exception:
            self._logger.exception(f"Batch callback {callback} failed")

    def _require_open(self) -> None:
        if not self._is_open:
            raise ManagerNotOpenError(
                "BatchQueueManager must be opened (await open() or async with) "
                "before use"
            )
