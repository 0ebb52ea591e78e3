"""Progress display functions for CLI."""

import typer

from ...domain.integrity import BatchValidationResult, ValidationSeverity
from ...domain.queue import (
    BatchProgress,
    BatchSummary,
    QueueItemStatus,
    QueueState,
    QueueStatus,
)
from ...domain.transfer import TransferFailure

_ITEM_COLOURS = {
    QueueItemStatus.COMPLETED: typer.colors.GREEN,
    QueueItemStatus.ERROR: typer.colors.RED,
    QueueItemStatus.CANCELLED: typer.colors.YELLOW,
    QueueItemStatus.PROCESSING: typer.colors.CYAN,
}


def display_scan_result(count: int, source: str) -> None:
    """Display how many media files were found on the card."""
    typer.echo(f"Found {count} media file(s) on {source}")


def display_progress(progress: BatchProgress) -> None:
    """Display one per-file progress line."""
    prefix = f"[{progress.current}/{progress.total}]"
    if progress.status == "error":
        typer.secho(f"{prefix} ✗ {progress.file_id}", fg=typer.colors.RED)
        return
    typer.echo(f"{prefix} {progress.file_id}")


def display_file_failure(failure: TransferFailure) -> None:
    """Display a failed file with its recovery hint."""
    typer.secho(f"✗ {failure.file}: {failure.user_message}", fg=typer.colors.RED)
    typer.secho(f"  {failure.recovery_action}", fg=typer.colors.RED)


def display_card_removed() -> None:
    typer.secho(
        "✗ Source card was removed. Remaining files were not transferred.",
        fg=typer.colors.RED,
    )


def display_summary(summary: BatchSummary) -> None:
    """Display final batch tallies."""
    colour = (
        typer.colors.GREEN
        if summary.status == QueueStatus.COMPLETED and summary.failed == 0
        else typer.colors.YELLOW
    )
    typer.secho(
        f"Batch {summary.status}: {summary.completed} completed, "
        f"{summary.failed} failed, {summary.cancelled} cancelled",
        fg=colour,
    )


def display_validation(validation: BatchValidationResult) -> None:
    """Display batch integrity findings."""
    if validation.chronological_order_enforceable:
        typer.secho("✓ All timestamps from EXIF", fg=typer.colors.GREEN)

    for warning in validation.warnings:
        colour = (
            typer.colors.RED
            if warning.severity == ValidationSeverity.ERROR
            else typer.colors.YELLOW
        )
        typer.secho(f"{warning.severity}: {warning.message}", fg=colour)
        typer.secho(f"  → {warning.suggested_action}", fg=colour)


def display_queue_state(state: QueueState) -> None:
    """Display a persisted queue snapshot."""
    typer.echo(f"Status: {state.status}")
    if state.current_file:
        typer.echo(f"Current file: {state.current_file}")
    if not state.items:
        typer.echo("Queue is empty")
        return

    for item in state.items:
        line = f"  {item.status:<10} {item.file_id}"
        if item.error:
            line += f" ({item.error})"
        typer.secho(line, fg=_ITEM_COLOURS.get(item.status))
