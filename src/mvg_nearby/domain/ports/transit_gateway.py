"""Transit gateway port."""

from typing import Protocol

from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.models.departure import Departure
from mvg_nearby.domain.models.service import Service
from mvg_nearby.domain.models.station import Station
from mvg_nearby.domain.models.transport_type_filter import TransportTypeFilter


class TransitGateway(Protocol):
    """Port for the four read operations of the transit data service."""

    async def nearby_stations(self, coordinates: Coordinates, limit: int = 3) -> list[Station]:
        """Get up to ``limit`` stations near a position, nearest first.

        Raises:
            UpstreamUnavailable: If the service did not answer successfully.
        """
        ...

    async def search_stations(
        self, query: str, reference: Coordinates | None = None
    ) -> list[Station]:
        """Search stations by free text, sorted by distance to ``reference``."""
        ...

    async def fetch_services(self, station: Station) -> list[Service]:
        """Get the ranked lines serving a station, or an empty list on failure."""
        ...

    async def fetch_departures(
        self, global_id: str, transport_filter: TransportTypeFilter, limit: int = 11
    ) -> list[Departure]:
        """Get upcoming departures for the enabled categories, or an empty list on failure."""
        ...
