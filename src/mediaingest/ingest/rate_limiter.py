"""Token-bucket rate limiting for batch processing."""

import asyncio
import math
import time
import typing as t

from ..infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru


@t.runtime_checkable
class RateLimiter(t.Protocol):
    """Anything the queue manager can pace itself with."""

    async def consume(self, tokens: int = 1) -> None: ...


class TokenBucketRateLimiter:
    """Token bucket that waits for tokens instead of rejecting callers.

    Starts full at ``capacity`` tokens and refills continuously at
    ``refill_rate`` tokens per second, never above capacity. The defaults
    allow bursts of 100 and a sustained 100 per minute.
    """

    def __init__(
        self,
        capacity: float = 100.0,
        refill_rate: float = 100 / 60,
        *,
        clock: t.Callable[[], float] = time.monotonic,
        sleep: t.Callable[[float], t.Awaitable[None]] = asyncio.sleep,
        logger: t.Optional["loguru.Logger"] = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if refill_rate <= 0:
            raise ValueError("refill_rate must be positive")

        self.capacity = capacity
        self.refill_rate = refill_rate
        self._clock = clock
        self._sleep = sleep
        self._logger = logger or get_logger(__name__)
        self._tokens = capacity
        self._last_refill = clock()
        self._lock = asyncio.Lock()

    @property
    def available(self) -> float:
        """Tokens available right now."""
        self._refill()
        return self._tokens

    async def consume(self, tokens: int = 1) -> None:
        """Take ``tokens`` from the bucket, waiting until they are available."""
        if tokens > self.capacity:
            raise ValueError(
                f"Cannot consume {tokens} tokens from a bucket of {self.capacity}"
            )

        # Waiters are served in arrival order
        async with self._lock:
            self._refill()
            if self._tokens < tokens:
                wait_ms = math.ceil((tokens - self._tokens) / self.refill_rate * 1000)
                self._logger.debug(f"Waiting {wait_ms}ms for {tokens} token(s)")
                await self._sleep(wait_ms / 1000)
                self._refill()
            self._tokens = max(0.0, self._tokens - tokens)

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last_refill)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.refill_rate)
        self._last_refill = now
