"""Durable JSON checkpoints for batch queue state."""

import os
import typing as t
from dataclasses import dataclass
from pathlib import Path

import aiofiles
import aiofiles.os
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ...domain.queue import QueueState
from ...infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru


@dataclass(frozen=True)
class CheckpointResult:
    """Outcome of a best-effort checkpoint write."""

    ok: bool
    error: str | None = None


class QueueStateStore:
    """Reads and writes the queue state file.

    Each save rewrites the whole file (not an append log). Writes go to a
    sibling temp file that is then renamed over the target.
    """

    def __init__(
        self,
        path: Path,
        logger: t.Optional["loguru.Logger"] = None,
    ) -> None:
        self.path = Path(path)
        self._logger = logger or get_logger(__name__)

    @property
    def _tmp_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.{os.getpid()}.tmp")

    async def load(self) -> QueueState | None:
        """Return the persisted state, or None if absent or unreadable."""
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as handle:
                payload = await handle.read()
        except FileNotFoundError:
            self._logger.debug(f"No persisted queue state at {self.path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            self._logger.warning(f"Could not read queue state {self.path}: {e}")
            return None

        try:
            return QueueState.from_json(payload)
        except ValidationError as e:
            self._logger.warning(
                f"Discarding unreadable queue state {self.path}: "
                f"{e.error_count()} validation error(s)"
            )
            return None

    async def save(self, state: QueueState) -> CheckpointResult:
        """Write ``state``. Failures are logged and reported, never raised."""
        try:
            payload = state.to_json()
        except PydanticSerializationError as e:
            self._logger.error(f"Failed to serialise queue state for {self.path}: {e}")
            return CheckpointResult(ok=False, error=str(e))

        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            async with aiofiles.open(self._tmp_path, "w", encoding="utf-8") as handle:
                await handle.write(payload)
            await aiofiles.os.replace(self._tmp_path, self.path)
        except OSError as e:
            self._logger.error(f"Failed to save queue state to {self.path}: {e}")
            await self._remove_tmp()
            return CheckpointResult(ok=False, error=str(e))
        return CheckpointResult(ok=True)

    async def _remove_tmp(self) -> None:
        try:
            await aiofiles.os.remove(self._tmp_path)
        except OSError:
            pass  # Never created, or the directory is unusable
