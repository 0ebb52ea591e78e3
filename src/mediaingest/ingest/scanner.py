"""Enumeration of media files on a mounted camera card."""

import asyncio
import os
import typing as t
from pathlib import Path

from ..domain.transfer import FileTransferTask, MediaType, TransferDestinations
from ..infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru


async def scan_source_files(
    source_root: Path,
    destinations: TransferDestinations,
    logger: t.Optional["loguru.Logger"] = None,
) -> list[FileTransferTask]:
    """Build transfer tasks for every photo and video under ``source_root``.

    Photos are routed to ``destinations.photos`` and raw videos to
    ``destinations.raw_videos``. Non-media files, directories and entries
    that cannot be stat'd (broken symlinks, files vanishing mid-scan) are
    skipped. Tasks are returned sorted by source path.

    Raises:
        OSError: If ``source_root`` itself cannot be listed.
    """
    logger = logger or get_logger(__name__)
    tasks = await asyncio.to_thread(_scan_sync, Path(source_root), destinations)
    logger.info(f"Found {len(tasks)} media file(s) under {source_root}")
    return tasks


def _scan_sync(
    source_root: Path, destinations: TransferDestinations
) -> list[FileTransferTask]:
    if not source_root.is_dir():
        raise NotADirectoryError(f"Source is not a directory: {source_root}")

    tasks: list[FileTransferTask] = []
    for dirpath, _dirnames, filenames in os.walk(source_root):
        for filename in filenames:
            media_type = MediaType.from_extension(Path(filename).suffix)
            if media_type is None:
                continue

            source = Path(dirpath) / filename
            try:
                stat = source.stat()
            except OSError:
                continue
            if not source.is_file():
                continue

            tasks.append(
                FileTransferTask(
                    source=source,
                    destination=destinations.for_media(media_type) / filename,
                    size=stat.st_size,
                    media_type=media_type,
                )
            )

    return sorted(tasks, key=lambda task: str(task.source))
