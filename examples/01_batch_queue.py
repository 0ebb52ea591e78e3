#!/usr/bin/env python3
"""
01_batch_queue.py - Sequential batch processing with checkpoints

Demonstrates:
- Queuing a batch of file ids
- Progress and completion callbacks
- A failing item that does not stop the batch
- Inspecting the JSON checkpoint written after every item
"""

import asyncio
import tempfile
from pathlib import Path

from mediaingest import BatchQueueManager
from mediaingest.domain import BatchProgress, BatchSummary


def on_progress(progress: BatchProgress) -> None:
    marker = "✗" if progress.status == "error" else "→"
    print(f"  {marker} [{progress.current}/{progress.total}] {progress.file_id}")


def on_complete(summary: BatchSummary) -> None:
    print(
        f"\nBatch {summary.status}: {summary.completed} completed, "
        f"{summary.failed} failed, {summary.cancelled} cancelled"
    )


async def process(file_id: str) -> dict:
    """Pretend to analyse a photo; the third one is corrupt."""
    await asyncio.sleep(0.05)
    if file_id == "EA001623.JPG":
        raise ValueError("Corrupt JPEG header")
    return {"success": True, "result": {"file": file_id, "keywords": ["shoot"]}}


async def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        state_file = Path(tmp) / "batch-queue.json"

        async with BatchQueueManager(state_file) as manager:
            await manager.add_to_queue(
                [f"EA00162{n}.JPG" for n in range(1, 6)]
            )
            print("Processing 5 files...\n")
            await manager.start_processing(process, on_progress, on_complete)

        print(f"\nCheckpoint at {state_file.name}:")
        print(state_file.read_text())


if __name__ == "__main__":
    asyncio.run(main())
