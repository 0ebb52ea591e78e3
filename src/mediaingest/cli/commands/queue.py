"""Queue inspection commands."""

import asyncio

import typer

from ...domain.queue import QueueState
from ..output.progress import display_queue_state
from ..state import CLIState

queue_app = typer.Typer(help="Inspect or reset the persisted batch queue")


@queue_app.command()
def status(ctx: typer.Context) -> None:
    """Show the persisted batch queue."""
    state: CLIState = ctx.obj

    async def run() -> QueueState:
        async with state.create_manager() as manager:
            return manager.get_status()

    display_queue_state(asyncio.run(run()))


@queue_app.command()
def clear(ctx: typer.Context) -> None:
    """Discard the persisted batch queue."""
    state: CLIState = ctx.obj

    async def run() -> None:
        async with state.create_manager() as manager:
            await manager.clear_queue()

    asyncio.run(run())
    typer.secho("✓ Queue cleared", fg=typer.colors.GREEN)
