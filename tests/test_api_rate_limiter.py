"""Tests for the API rate limiter."""

import asyncio
import time

import pytest

from mvg_nearby.adapters.api_rate_limiter import ApiRateLimiter


class TestApiRateLimiter:
    """Tests for ApiRateLimiter class."""

    @pytest.mark.asyncio
    async def test_first_request_is_immediate(self) -> None:
        """Given a fresh limiter, when acquiring, then there is no wait."""
        limiter = ApiRateLimiter("test_api", min_delay_seconds=1.0)

        start = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - start < 0.05

    @pytest.mark.asyncio
    async def test_second_request_waits_for_delay(self) -> None:
        """Given a recent request, when acquiring again, then it waits for the delay."""
        delay = 0.2
        limiter = ApiRateLimiter("test_api", min_delay_seconds=delay)
        await limiter.acquire()

        start = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - start >= delay * 0.9

    @pytest.mark.asyncio
    async def test_zero_delay_never_waits(self) -> None:
        """Given no configured delay, when acquiring repeatedly, then nothing waits."""
        limiter = ApiRateLimiter("test_api")

        start = time.monotonic()
        for _ in range(5):
            await limiter.acquire()

        assert time.monotonic() - start < 0.05

    @pytest.mark.asyncio
    async def test_request_after_delay_is_immediate(self) -> None:
        """Given the delay has passed, when acquiring, then there is no wait."""
        delay = 0.1
        limiter = ApiRateLimiter("test_api", min_delay_seconds=delay)
        await limiter.acquire()
        await asyncio.sleep(delay * 1.5)

        start = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - start < 0.05

    def test_from_milliseconds(self) -> None:
        """Given a delay in milliseconds, when creating a limiter, then it is converted."""
        assert ApiRateLimiter.from_milliseconds("mvg_api", 250).min_delay_seconds == 0.25
        assert ApiRateLimiter.from_milliseconds("mvg_api", -5).min_delay_seconds == 0.0

    @pytest.mark.asyncio
    async def test_concurrent_requests_are_serialized(self) -> None:
        """Given concurrent callers, when acquiring, then they are spaced by the delay."""
        delay = 0.1
        limiter = ApiRateLimiter("concurrent_test", min_delay_seconds=delay)
        results: list[float] = []
        start = time.monotonic()

        async def make_request() -> None:
            await limiter.acquire()
            results.append(time.monotonic() - start)

        await asyncio.gather(make_request(), make_request(), make_request())

        results.sort()
        assert results[0] < 0.05
        assert results[1] >= delay * 0.8
        assert results[2] >= delay * 1.6

    @pytest.mark.asyncio
    async def test_separate_limiters_are_independent(self) -> None:
        """Given two limiters, when one was just used, then the other does not wait."""
        limiter_a = ApiRateLimiter("api_a", 0.2)
        limiter_b = ApiRateLimiter("api_b", 0.2)
        await limiter_a.acquire()

        start = time.monotonic()
        await limiter_b.acquire()

        assert time.monotonic() - start < 0.05
