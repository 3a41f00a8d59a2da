"""Sequential departure loading for a list of stations."""

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mvg_nearby.domain.models.departure import Departure
    from mvg_nearby.domain.models.station import Station
    from mvg_nearby.domain.models.transport_type_filter import TransportTypeFilter
    from mvg_nearby.domain.ports import TransitGateway

logger = logging.getLogger(__name__)

PublishCallback = Callable[[str, "list[Departure]"], None]


class DepartureAggregator:
    """Fetches departures station by station into a shared result map."""

    def __init__(
        self,
        gateway: "TransitGateway",
        departures: "dict[str, list[Departure]] | None" = None,
        limit: int = 11,
        on_publish: PublishCallback | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            gateway: Transit gateway used for the departure requests.
            departures: Result map to publish into; a new one is created if omitted.
            limit: Maximum departures per station.
            on_publish: Called with (global_id, departures) after each station.
        """
        self._gateway = gateway
        self.departures: dict[str, list[Departure]] = {} if departures is None else departures
        self._limit = limit
        self._on_publish = on_publish

    def clear(self) -> None:
        """Drop all published results."""
        self.departures.clear()

    async def load_all(
        self, stations: "Sequence[Station]", transport_filter: "TransportTypeFilter"
    ) -> "dict[str, list[Departure]]":
        """Replace the result map with fresh departures for ``stations``.

        Stations are fetched one after another in input order and each result
        is published as soon as it arrives.
        """
        self.clear()
        for station in stations:
            await self.load_one(station, transport_filter)
        return dict(self.departures)

    async def load_one(
        self, station: "Station", transport_filter: "TransportTypeFilter"
    ) -> "list[Departure]":
        """Fetch and publish departures for one station without touching the others."""
        try:
            departures = await self._gateway.fetch_departures(
                station.global_id, transport_filter, limit=self._limit
            )
        except Exception as e:
            logger.error(f"Failed to load departures for {station.name}: {e}")
            departures = []

        self.departures[station.global_id] = departures
        logger.debug(f"Published {len(departures)} departures for {station.name}")
        if self._on_publish is not None:
            self._on_publish(station.global_id, departures)
        return departures
