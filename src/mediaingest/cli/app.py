"""CLI application factory."""

from pathlib import Path
from typing import Optional

import typer

from ..app import create_app
from ..config.settings import LogLevel, Settings, build_settings
from .commands.queue import queue_app
from .commands.transfer import transfer
from .state import CLIState


def create_cli_app(
    settings: Settings | None = None, state: CLIState | None = None
) -> typer.Typer:
    """Create CLI application with optional settings or state override.

    Args:
        settings: Optional Settings override for testing
        state: Optional CLIState override (takes precedence over settings)

    Returns:
        Configured Typer application with commands registered
    """
    app = typer.Typer(
        name="mediaingest",
        help="Media ingest - resilient camera card transfer with integrity checks",
        no_args_is_help=True,
    )

    @app.callback()
    def setup(
        ctx: typer.Context,
        state_file: Optional[Path] = typer.Option(
            None,
            "--state-file",
            "-s",
            help="File used to checkpoint the batch queue",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            help="Enable verbose output (DEBUG logging)",
        ),
    ) -> None:
        """Global options available to all commands."""
        if state is not None:
            ctx.obj = state
            return

        if settings is not None:
            resolved_settings = settings
        else:
            resolved_settings = build_settings(
                state_file=state_file,
                log_level=LogLevel.DEBUG if verbose else None,
            )

        create_app(resolved_settings)
        ctx.obj = CLIState(resolved_settings)

    app.command()(transfer)
    app.add_typer(queue_app, name="queue")

    return app
