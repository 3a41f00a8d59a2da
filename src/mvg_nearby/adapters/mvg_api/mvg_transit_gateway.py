"""MVG transit gateway adapter."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from mvg_nearby.adapters.mvg_api.constants import (
    DEPARTURES_PATH,
    LINES_PATH,
    LOCATIONS_PATH,
    NEARBY_PATH,
    STATION_LOCATION_TYPE,
)
from mvg_nearby.adapters.mvg_api.response_parser import (
    parse_departure,
    parse_service,
    parse_stations,
)
from mvg_nearby.domain.errors import UpstreamUnavailable
from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.models.departure import Departure
from mvg_nearby.domain.models.service import Service
from mvg_nearby.domain.models.station import Station
from mvg_nearby.domain.models.transport_type_filter import TransportTypeFilter
from mvg_nearby.domain.ports.transit_gateway import TransitGateway
from mvg_nearby.domain.service_ranking import rank_services

if TYPE_CHECKING:
    from mvg_nearby.adapters.mvg_api.http_client import MvgHttpClient

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class MvgTransitGateway(TransitGateway):
    """Adapter for the MVG nearby, location, line and departure endpoints.

    Only ``nearby_stations`` raises; the other operations are enrichment or
    display paths and degrade to an empty list.
    """

    def __init__(
        self, http_client: "MvgHttpClient", clock: Callable[[], datetime] = _utc_now
    ) -> None:
        """Initialize with an HTTP client and a clock used for departure minutes."""
        self._http_client = http_client
        self._clock = clock

    async def nearby_stations(self, coordinates: Coordinates, limit: int = 3) -> list[Station]:
        """Get up to ``limit`` stations near a position, in provider order."""
        params = {"latitude": coordinates.latitude, "longitude": coordinates.longitude}
        entries = await self._http_client.get_list(NEARBY_PATH, params)
        return parse_stations(entries, coordinates)[:limit]

    async def search_stations(
        self, query: str, reference: Coordinates | None = None
    ) -> list[Station]:
        """Search stations by name, nearest to ``reference`` first."""
        if not query.strip():
            return []

        try:
            entries = await self._http_client.get_list(LOCATIONS_PATH, {"query": query})
        except UpstreamUnavailable as e:
            logger.warning(f"Station search for '{query}' failed: {e.details.reason}")
            return []

        station_entries = [
            entry
            for entry in entries
            if isinstance(entry, dict)
            and str(entry.get("type", "")).upper() == STATION_LOCATION_TYPE
        ]
        stations = parse_stations(station_entries, reference)
        return sorted(stations, key=lambda station: station.distance_in_meters)

    async def fetch_services(self, station: Station) -> list[Service]:
        """Get the ranked lines serving a station."""
        try:
            entries = await self._http_client.get_list(f"{LINES_PATH}/{station.global_id}")
        except UpstreamUnavailable as e:
            logger.warning(f"Could not load lines for {station.name}: {e.details.reason}")
            return []

        services = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            service = parse_service(entry)
            if service is not None:
                services.append(service)
        return rank_services(services)

    async def fetch_departures(
        self, global_id: str, transport_filter: TransportTypeFilter, limit: int = 11
    ) -> list[Departure]:
        """Get upcoming departures for the categories enabled in the filter."""
        transport_types = ",".join(c.value for c in transport_filter.enabled_categories())
        params = {"globalId": global_id, "limit": limit, "transportTypes": transport_types}
        now = self._clock()

        try:
            entries = await self._http_client.get_list(DEPARTURES_PATH, params)
        except UpstreamUnavailable as e:
            logger.warning(f"Could not load departures for {global_id}: {e.details.reason}")
            return []

        departures = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            departure = parse_departure(entry, now)
            if departure is not None:
                departures.append(departure)
        return departures[:limit]
