#!/usr/bin/env python3
"""
02_retry_handling.py - Classified retries with exponential backoff

Demonstrates:
- Transient errors retried with doubling delays
- Network mounts getting a larger retry budget
- Fatal errors failing immediately with a recovery hint
- Subscribing to transfer.retrying events
"""

import asyncio
import errno

from mediaingest.domain import RetryOptions, RetryPolicy
from mediaingest.events import EventEmitter, IngestEventType, TransferRetryingEvent
from mediaingest.ingest import ErrorClassifier, RetryStrategy

# Short delays keep the demo quick; production defaults are 1s / 2s
POLICY = RetryPolicy(
    network_mount_prefixes=("/mnt/nas",),
    transient_base_delay_ms=50,
    network_base_delay_ms=100,
)


def on_retrying(event: TransferRetryingEvent) -> None:
    print(
        f"  retry {event.attempt}/{event.max_retries} in {event.delay_ms}ms "
        f"({event.category}: {event.error.code})"
    )


def flaky(error: OSError, failures: int):
    calls = 0

    async def copy() -> str:
        nonlocal calls
        calls += 1
        if calls <= failures:
            raise error
        return f"copied after {calls} attempt(s)"

    return copy


async def main() -> None:
    emitter = EventEmitter()
    emitter.on(IngestEventType.TRANSFER_RETRYING, on_retrying)
    strategy = RetryStrategy(ErrorClassifier(POLICY), emitter=emitter)

    print("Busy file on local disk (recovers on 3rd attempt):")
    result = await strategy.execute_with_retry(
        flaky(OSError(errno.EBUSY, "Resource busy"), failures=2),
        RetryOptions(destination_path="/Users/editor/Photos/EA001621.JPG"),
    )
    print(f"  → {result.value}\n")

    print("Network timeout on NAS (never recovers, budget of 5 retries):")
    result = await strategy.execute_with_retry(
        flaky(OSError(errno.ETIMEDOUT, "Timed out"), failures=99),
        RetryOptions(destination_path="/mnt/nas/photos/EA001621.JPG"),
    )
    print(f"  → gave up after {result.attempts} attempts")
    print(f"    {result.classification.user_message}\n")

    print("Disk full (fatal, no retry):")
    result = await strategy.execute_with_retry(
        flaky(OSError(errno.ENOSPC, "No space left on device"), failures=99),
        RetryOptions(destination_path="/Users/editor/Photos/EA001621.JPG"),
    )
    print(f"  → {result.attempts} attempt: {result.classification.user_message}")
    print(f"    {result.classification.recovery_action}")


if __name__ == "__main__":
    asyncio.run(main())
