"""Tests for the token bucket rate limiter."""

import pytest

from mediaingest.ingest.rate_limiter import RateLimiter, TokenBucketRateLimiter


class FakeClock:
    """Manual clock; sleeping advances time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock, mock_logger) -> TokenBucketRateLimiter:
    return TokenBucketRateLimiter(
        capacity=3, refill_rate=1.0, clock=clock, sleep=clock.sleep, logger=mock_logger
    )


class TestTokenBucket:
    def test_satisfies_protocol(self, limiter) -> None:
        assert isinstance(limiter, RateLimiter)

    def test_starts_full(self, limiter) -> None:
        assert limiter.available == 3

    @pytest.mark.asyncio
    async def test_burst_up_to_capacity_without_waiting(self, limiter, clock) -> None:
        for _ in range(3):
            await limiter.consume()

        assert clock.sleeps == []
        assert limiter.available == 0

    @pytest.mark.asyncio
    async def test_waits_instead_of_raising_when_empty(self, limiter, clock) -> None:
        for _ in range(4):
            await limiter.consume()

        assert clock.sleeps == [1.0]
        assert limiter.available == 0

    @pytest.mark.asyncio
    async def test_refill_never_exceeds_capacity(self, limiter, clock) -> None:
        await limiter.consume()
        clock.now += 1000

        assert limiter.available == 3

    @pytest.mark.asyncio
    async def test_partial_refill(self, limiter, clock) -> None:
        for _ in range(3):
            await limiter.consume()
        clock.now += 1.5

        assert limiter.available == pytest.approx(1.5)

    @pytest.mark.asyncio
    async def test_consuming_more_than_capacity_is_rejected(self, limiter) -> None:
        with pytest.raises(ValueError):
            await limiter.consume(4)

    def test_default_budget(self) -> None:
        limiter = TokenBucketRateLimiter()

        assert limiter.capacity == 100
        assert limiter.refill_rate == pytest.approx(100 / 60)

    @pytest.mark.parametrize(("capacity", "rate"), [(0, 1), (1, 0), (-1, 1)])
    def test_invalid_parameters(self, capacity, rate) -> None:
        with pytest.raises(ValueError):
            TokenBucketRateLimiter(capacity=capacity, refill_rate=rate)
