"""Domain models for retry configuration and outcomes."""

import asyncio
import typing as t
from dataclasses import dataclass
from pathlib import Path

from .errors import ErrorClassification

T = t.TypeVar("T")

MediaPresentCheck = t.Callable[[], bool | t.Awaitable[bool]]


@dataclass(frozen=True)
class RetryPolicy:
    """Retry budget and backoff bases used by the error classifier.

    Network mount prefixes are supplied by configuration; destinations under
    any of them get ``network_max_retries`` instead of ``local_max_retries``.
    """

    network_mount_prefixes: tuple[str, ...] = ()
    local_max_retries: int = 3
    network_max_retries: int = 5
    transient_base_delay_ms: int = 1000
    network_base_delay_ms: int = 2000


@dataclass
class RetryOptions:
    """Per-call options for RetryStrategy.execute_with_retry.

    Media removal is only checked when ``source_path``, ``media_root`` and
    ``media_present`` are all provided. ``media_present`` returns True while
    the removable media mount still exists.
    """

    destination_path: str | Path
    source_path: str | Path | None = None
    media_root: str | Path | None = None
    media_present: MediaPresentCheck | None = None
    cancel_event: asyncio.Event | None = None
    on_retry: t.Callable[[int, int], None] | None = None
    on_error: t.Callable[[ErrorClassification], None] | None = None

    @property
    def detects_media_removal(self) -> bool:
        return (
            self.source_path is not None
            and self.media_root is not None
            and self.media_present is not None
        )

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


@dataclass
class RetryResult(t.Generic[T]):
    """Outcome of one execute_with_retry call."""

    success: bool
    attempts: int
    value: T | None = None
    error: BaseException | None = None
    classification: ErrorClassification | None = None
    card_removed: bool = False
