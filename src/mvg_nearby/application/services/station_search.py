"""Debounced station search backing the search box."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mvg_nearby.domain.models.coordinates import Coordinates
    from mvg_nearby.domain.models.station import Station
    from mvg_nearby.domain.ports import TransitGateway

logger = logging.getLogger(__name__)

ResultsCallback = Callable[[str, "list[Station]"], None]


class StationSearch:
    """Searches stations as the user types.

    Each keystroke restarts the debounce delay. A search that has already been
    sent is never cancelled, but its results are dropped if a newer query was
    typed in the meantime.
    """

    def __init__(
        self,
        gateway: TransitGateway,
        max_results: int = 6,
        debounce_seconds: float = 0.3,
        on_results: ResultsCallback | None = None,
    ) -> None:
        """Initialize the search.

        Args:
            gateway: Transit gateway used for the location search.
            max_results: Maximum number of results offered.
            debounce_seconds: Quiet time after the last keystroke before searching.
            on_results: Called with (query, results) when a search completes.
        """
        self._gateway = gateway
        self._max_results = max_results
        self._debounce_seconds = debounce_seconds
        self._on_results = on_results
        self._generation = 0
        self._pending: asyncio.Task[None] | None = None
        self._pending_in_debounce = False
        self.query: str = ""
        self.results: list[Station] | None = None

    async def search(self, query: str, reference: Coordinates | None = None) -> list[Station]:
        """Search immediately, without debouncing."""
        results = await self._gateway.search_stations(query, reference)
        return results[: self._max_results]

    def on_query_changed(
        self, query: str, reference: Coordinates | None = None
    ) -> asyncio.Task[None]:
        """Schedule a search for the latest query.

        Must be called from within a running event loop.

        Returns:
            The task that will run the search once the debounce delay passes.
        """
        self._generation += 1
        self.query = query
        if self._pending is not None and self._pending_in_debounce:
            self._pending.cancel()
        self._pending = asyncio.create_task(self._debounced(self._generation, query, reference))
        self._pending_in_debounce = True
        return self._pending

    async def _debounced(self, generation: int, query: str, reference: Coordinates | None) -> None:
        # Cancellation can only land here, before the request is sent.
        await asyncio.sleep(self._debounce_seconds)
        self._pending_in_debounce = False

        results = await self.search(query, reference)
        if generation != self._generation:
            logger.debug(f"Discarding results for outdated query '{query}'")
            return

        self.results = results
        if self._on_results is not None:
            self._on_results(query, results)

    async def wait(self) -> None:
        """Wait for the latest search, if any, to finish."""
        if self._pending is not None:
            await self._pending
