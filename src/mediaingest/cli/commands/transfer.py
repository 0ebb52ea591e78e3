"""Transfer command implementation."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from ...domain.exceptions import IngestError, TransferFailedError
from ...domain.integrity import BatchValidationResult, FileTransferRecord
from ...domain.queue import BatchSummary, ProcessOutcome
from ...domain.transfer import FileTransferTask, TransferDestinations, TransferFailure
from ...ingest import BatchQueueManager, TransferService, scan_source_files
from ...ingest.rate_limiter import RateLimiter
from ...ingest.transfer import CARD_REMOVED_CODE
from ...utils.sanitize import sanitize_error_message
from ..output.progress import (
    display_card_removed,
    display_file_failure,
    display_progress,
    display_scan_result,
    display_summary,
    display_validation,
)
from ..state import CLIState


async def transfer_files(
    tasks: list[FileTransferTask],
    source: Path,
    manager: BatchQueueManager,
    service: TransferService,
    rate_limiter: RateLimiter | None = None,
) -> tuple[BatchSummary, BatchValidationResult, list[TransferFailure]]:
    """Core transfer logic with injected dependencies.

    Each file is one queue item keyed by its source path, so progress is
    checkpointed per file. Removal of the card cancels the rest of the batch.

    Args:
        tasks: Files found on the card
        source: Card mount point
        manager: BatchQueueManager instance (already entered context)
        service: TransferService used to copy and validate each file
        rate_limiter: Optional limiter consulted before each file

    Returns:
        Batch summary, batch validation and per-file failures
    """
    by_id = {str(task.source): task for task in tasks}
    records: list[FileTransferRecord] = []
    failures: list[TransferFailure] = []

    async def process(file_id: str) -> ProcessOutcome:
        outcome = await service.transfer_file(by_id[file_id], source)
        if isinstance(outcome, FileTransferRecord):
            records.append(outcome)
            return ProcessOutcome(success=True, result=outcome.model_dump(mode="json"))

        if outcome is None:
            return ProcessOutcome(success=False)

        failures.append(outcome)
        display_file_failure(outcome)
        if outcome.code == CARD_REMOVED_CODE:
            manager.cancel()
        raise TransferFailedError(
            outcome.user_message, file=outcome.file, code=outcome.code
        )

    await manager.add_to_queue(list(by_id))
    summary = await manager.start_processing(
        process, on_progress=display_progress, rate_limiter=rate_limiter
    )
    validation = service.validator.validate_batch(records, expected_count=len(tasks))
    return summary, validation, failures


def transfer(
    ctx: typer.Context,
    source: Path = typer.Argument(
        ...,
        help="Mount point of the camera card",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    photos: Path = typer.Option(..., "--photos", help="Destination for photos"),
    videos: Path = typer.Option(..., "--videos", help="Destination for raw videos"),
    network_mount: Optional[list[str]] = typer.Option(
        None,
        "--network-mount",
        help="Destination prefix on a network mount (extended retries). Repeatable.",
    ),
) -> None:
    """Copy photos and videos off a camera card and validate every copy.

    Examples:
        mediaingest transfer /Volumes/CARD --photos ~/Photos --videos ~/Raw
        mediaingest transfer /Volumes/CARD --photos /mnt/nas/p --videos ~/Raw --network-mount /mnt/nas
    """
    state: CLIState = ctx.obj
    destinations = TransferDestinations(photos=photos, raw_videos=videos)

    async def run() -> tuple[BatchSummary, BatchValidationResult, list[TransferFailure]]:
        tasks = await scan_source_files(source, destinations)
        display_scan_result(len(tasks), str(source))
        service = state.create_transfer_service(network_prefixes=network_mount or ())
        async with state.create_manager() as manager:
            return await transfer_files(
                tasks, source, manager, service, state.create_rate_limiter()
            )

    try:
        summary, validation, failures = asyncio.run(run())
    except (IngestError, OSError) as e:
        typer.secho(f"Transfer failed: {sanitize_error_message(e)}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    card_removed = any(f.code == CARD_REMOVED_CODE for f in failures)
    if card_removed:
        display_card_removed()

    display_summary(summary)
    display_validation(validation)

    if failures or validation.has_errors():
        raise typer.Exit(code=1)
