"""Spacing of outgoing requests to one API."""

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Keeps at least ``min_delay_seconds`` between the starts of two requests.

    Each caller reserves the next free slot before sleeping, so concurrent
    callers on the event loop are spaced out in call order. One instance is
    owned by each HTTP client.
    """

    def __init__(self, api_name: str, min_delay_seconds: float = 0.0) -> None:
        """Initialize the rate limiter.

        Args:
            api_name: Name of the API (for logging).
            min_delay_seconds: Minimum delay between requests in seconds.
        """
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self._next_slot: float | None = None

    @classmethod
    def from_milliseconds(cls, api_name: str, delay_ms: int) -> ApiRateLimiter:
        """Create a limiter from the ``sleep_ms_between_calls`` setting."""
        return cls(api_name, max(delay_ms, 0) / 1000)

    async def acquire(self) -> None:
        """Wait until this request may be sent."""
        now = time.monotonic()
        slot = now if self._next_slot is None else max(now, self._next_slot)
        self._next_slot = slot + self.min_delay_seconds

        wait_time = slot - now
        if wait_time > 0:
            logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
            await asyncio.sleep(wait_time)
