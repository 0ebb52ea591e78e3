"""Fixtures for batch queue tests."""

import typing as t

import pytest
import pytest_asyncio

from mediaingest.domain.queue import BatchProgress, BatchSummary
from mediaingest.ingest.queue import BatchQueueManager


@pytest_asyncio.fixture
async def manager(state_store, mock_emitter, mock_logger) -> t.AsyncIterator[BatchQueueManager]:
    """Provide an opened manager checkpointing into a temp directory."""
    async with BatchQueueManager(
        store=state_store, emitter=mock_emitter, logger=mock_logger
    ) as manager:
        yield manager


class Recorder:
    """Collects progress and completion callbacks."""

    def __init__(self) -> None:
        self.progress: list[BatchProgress] = []
        self.summaries: list[BatchSummary] = []

    def on_progress(self, progress: BatchProgress) -> None:
        self.progress.append(progress)

    def on_complete(self, summary: BatchSummary) -> None:
        self.summaries.append(summary)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def succeed_with():
    """Build a processor that records calls and always succeeds."""

    def make(calls: list[str]):
        async def processor(file_id: str) -> dict:
            calls.append(file_id)
            return {"success": True, "result": {"file": file_id}}

        return processor

    return make
