"""Copying media off a camera card with retry and integrity checks."""

import asyncio
import os
import time
import typing as t
from pathlib import Path

import aiofiles
import aiofiles.os

from ..domain.exceptions import IntegrityError
from ..domain.integrity import FileTransferRecord
from ..domain.retry import RetryOptions
from ..domain.transfer import FileTransferTask, TransferFailure, TransferReport
from ..infrastructure.logging import get_logger
from ..utils.sanitize import sanitize_error_message
from .classifier import UNKNOWN_RECOVERY_ACTION, ErrorClassifier
from .retry import BaseRetryStrategy, RetryStrategy
from .validation import IntegrityValidator

if t.TYPE_CHECKING:
    import loguru

DEFAULT_CHUNK_SIZE: t.Final = 1024 * 1024
CARD_REMOVED_CODE: t.Final = "CARD_REMOVED"

FileOutcome = FileTransferRecord | TransferFailure
FileCallback = t.Callable[[FileTransferTask, FileOutcome], None]


class TransferService:
    """Copies media files, validating each copy before it is accepted.

    Copies are wrapped in the retry strategy with removal detection against
    the card's mount point. A copy whose size differs from its source is
    deleted and reported as a failure.
    """

    def __init__(
        self,
        retry_strategy: BaseRetryStrategy | None = None,
        validator: IntegrityValidator | None = None,
        classifier: ErrorClassifier | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        logger: t.Optional["loguru.Logger"] = None,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self._logger = logger or get_logger(__name__)
        self.classifier = classifier or ErrorClassifier()
        self.retry_strategy = retry_strategy or RetryStrategy(
            self.classifier, logger=self._logger
        )
        self.validator = validator or IntegrityValidator(logger=self._logger)
        self.chunk_size = chunk_size

    async def transfer_file(
        self,
        task: FileTransferTask,
        media_root: Path,
        cancel_event: asyncio.Event | None = None,
    ) -> FileOutcome | None:
        """Copy and validate a single file.

        Any partial copy left by a failed or cancelled transfer is removed.

        Returns:
            A record for a validated copy, a failure otherwise, or None if
            ``cancel_event`` was set before the file finished.
        """
        media_root = Path(media_root)

        async def media_present() -> bool:
            return await aiofiles.os.path.exists(media_root)

        started = time.monotonic()
        result = await self.retry_strategy.execute_with_retry(
            lambda: self._copy(task),
            RetryOptions(
                destination_path=task.destination,
                source_path=task.source,
                media_root=media_root,
                media_present=media_present,
                cancel_event=cancel_event,
            ),
        )

        if not result.success:
            if result.attempts > 0:
                await self._discard(task.destination)

            if result.card_removed:
                return self._failure(
                    task,
                    code=CARD_REMOVED_CODE,
                    user_message="Source card was removed during transfer.",
                    recovery_action="Reinsert the card and restart the transfer",
                    attempts=result.attempts,
                )
            if result.classification is None or (
                cancel_event is not None and cancel_event.is_set()
            ):
                self._logger.debug(f"Transfer of {task.source.name} cancelled")
                return None

            classification = result.classification
            self._logger.error(
                f"Transfer failed for {task.source.name}: {classification.code}"
            )
            return self._failure(
                task,
                code=classification.code,
                user_message=sanitize_error_message(classification.user_message),
                recovery_action=classification.recovery_action,
                attempts=result.attempts,
            )

        try:
            validation = await self.validator.validate_file(task.source, task.destination)
        except IntegrityError as e:
            self._logger.error(f"Validation failed for {e.file}: {e}")
            await self._discard(task.destination)
            return self._failure(
                task,
                code=e.code,
                user_message=sanitize_error_message(e),
                recovery_action="Delete the copy and transfer the file again",
                attempts=result.attempts,
            )

        record = FileTransferRecord(
            file=validation.file,
            source=str(task.source),
            destination=str(task.destination),
            size=validation.dest_size,
            duration=time.monotonic() - started,
            size_validated=validation.size_match,
            timestamp=validation.timestamp,
            timestamp_source=validation.timestamp_source,
            warnings=validation.warnings,
        )
        self._logger.debug(f"Transferred {record.file} ({record.size} bytes)")
        return record

    async def transfer(
        self,
        tasks: t.Sequence[FileTransferTask],
        media_root: Path,
        cancel_event: asyncio.Event | None = None,
        on_file: FileCallback | None = None,
    ) -> TransferReport:
        """Copy and validate every task in order.

        A failed file is recorded and the transfer moves on. Removal of the
        card stops the transfer; so does ``cancel_event``, checked before
        each file and during retry waits.

        Args:
            tasks: Files to copy, usually from scan_source_files.
            media_root: Mount point of the source card, used to tell a
                removed card apart from an ordinary missing file.
            cancel_event: Set to stop before the next file.
            on_file: Called with the task and its record or failure.
        """
        records: list[FileTransferRecord] = []
        failures: list[TransferFailure] = []
        card_removed = False
        cancelled = False

        for task in tasks:
            if cancel_event is not None and cancel_event.is_set():
                cancelled = True
                break

            outcome = await self.transfer_file(task, media_root, cancel_event)
            if outcome is None:
                cancelled = True
                break

            if isinstance(outcome, FileTransferRecord):
                records.append(outcome)
            else:
                failures.append(outcome)
            self._notify(on_file, task, outcome)

            if isinstance(outcome, TransferFailure) and outcome.code == CARD_REMOVED_CODE:
                card_removed = True
                break

        if cancelled:
            self._logger.info("Transfer cancelled")

        report = TransferReport(
            records=records,
            failures=failures,
            card_removed=card_removed,
            cancelled=cancelled,
            validation=self.validator.validate_batch(records, expected_count=len(tasks)),
        )
        self._logger.info(
            f"Transfer finished: {len(records)} copied, {len(failures)} failed"
        )
        return report

    async def _copy(self, task: FileTransferTask) -> None:
        """Copy one file in chunks and carry over its modification time."""
        await aiofiles.os.makedirs(task.destination.parent, exist_ok=True)

        async with aiofiles.open(task.source, "rb") as src:
            async with aiofiles.open(task.destination, "wb") as dst:
                while chunk := await src.read(self.chunk_size):
                    await dst.write(chunk)

        stat = await aiofiles.os.stat(task.source)
        await asyncio.to_thread(
            os.utime, task.destination, (stat.st_atime, stat.st_mtime)
        )

    async def _discard(self, path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            self._logger.warning(f"Could not remove invalid copy {path}: {e}")

    def _failure(
        self,
        task: FileTransferTask,
        *,
        code: str,
        user_message: str,
        recovery_action: str | None,
        attempts: int,
    ) -> TransferFailure:
        return TransferFailure(
            file=task.source.name,
            source=str(task.source),
            code=code,
            user_message=user_message,
            recovery_action=recovery_action or UNKNOWN_RECOVERY_ACTION,
            attempts=attempts,
        )

    def _notify(
        self,
        callback: FileCallback | None,
        task: FileTransferTask,
        outcome: FileOutcome,
    ) -> None:
        if callback is None:
            return
        try:
            callback(task, outcome)
        except Exception:
            self._logger.exception(f"Transfer callback {callback} failed")
