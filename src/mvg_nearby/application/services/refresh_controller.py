"""Refresh policy for the nearby departure board."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from mvg_nearby.application.services.departure_aggregator import DepartureAggregator
from mvg_nearby.application.services.station_catalog import StationCatalog
from mvg_nearby.domain.errors import UpstreamUnavailable
from mvg_nearby.domain.geo import distance
from mvg_nearby.domain.models.board_state import BoardState
from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.models.refresh_state import RefreshState
from mvg_nearby.domain.models.transport_type_filter import TransportTypeFilter

if TYPE_CHECKING:
    from mvg_nearby.application.services.geo_locator import GeoLocator
    from mvg_nearby.domain.models.departure import Departure
    from mvg_nearby.domain.models.station import Station
    from mvg_nearby.domain.models.transport_type import TransportType
    from mvg_nearby.domain.ports import TransitGateway

logger = logging.getLogger(__name__)

BoardListener = Callable[[BoardState], None]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _measured_from(station: Station, position: Coordinates) -> Station:
    if station.latitude is None or station.longitude is None:
        return station
    return station.with_distance(
        distance(position, Coordinates(station.latitude, station.longitude))
    )


class RefreshController:
    """Decides when the board reloads and runs the load pipeline.

    A load moves the controller from IDLE to LOADING; requests arriving while
    it is LOADING are dropped, not queued. The pinned station path does not
    take part in this guard.
    """

    def __init__(
        self,
        geo_locator: GeoLocator,
        gateway: TransitGateway,
        catalog: StationCatalog | None = None,
        transport_filter: TransportTypeFilter | None = None,
        departure_limit: int = 11,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the controller.

        Args:
            geo_locator: Source of the current position.
            gateway: Transit gateway for stations, lines and departures.
            catalog: Merges geolocated stations with the pin; its cap is also
                the number of nearby stations requested.
            transport_filter: Initial filter; defaults to everything but BAHN.
            departure_limit: Maximum departures per station.
            clock: Source of the "last updated" timestamp.
        """
        self._geo_locator = geo_locator
        self._gateway = gateway
        self._catalog = catalog or StationCatalog()
        self._clock = clock
        self.state = RefreshState.IDLE
        self.board = BoardState(transport_filter=transport_filter or TransportTypeFilter())
        self._aggregator = DepartureAggregator(
            gateway,
            departures=self.board.departures,
            limit=departure_limit,
            on_publish=self._on_departures_published,
        )
        self._last_known_position: Coordinates | None = None
        self._has_loaded = False
        self._listeners: list[BoardListener] = []

    @property
    def has_loaded(self) -> bool:
        """Whether a full load has completed at least once."""
        return self._has_loaded

    def add_listener(self, listener: BoardListener) -> None:
        """Subscribe to board changes."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.board)

    def _on_departures_published(self, _global_id: str, _departures: list[Departure]) -> None:
        self._notify()

    def _try_begin_load(self, reason: str) -> bool:
        # No await between the check and the set: this is the whole lock.
        if self.state is RefreshState.LOADING:
            logger.debug(f"Ignoring {reason}: a load is already in progress")
            return False
        self.state = RefreshState.LOADING
        return True

    def _end_load(self) -> None:
        self.state = RefreshState.IDLE
        self._notify()

    async def start(self) -> None:
        """Initial load; ignored once the board has been loaded."""
        if self._has_loaded:
            return
        await self._full_load("initial load")

    async def on_user_refresh(self) -> None:
        """Reload everything, starting from a fresh position."""
        await self._full_load("user refresh")

    async def on_filter_changed(self, transport_filter: TransportTypeFilter) -> None:
        """Store the new filter and reload departures only.

        Stations and their lines depend on the position, not on the filter, so
        they are left untouched.
        """
        self.board.transport_filter = transport_filter
        if not self._has_loaded:
            self._notify()
            return
        if not self._try_begin_load("filter change"):
            return
        try:
            await self._aggregator.load_all(self.board.stations, transport_filter)
        finally:
            self._end_load()

    async def toggle_transport_type(self, category: TransportType) -> None:
        """Flip one filter category and reload departures."""
        await self.on_filter_changed(self.board.transport_filter.toggle(category))

    async def pin_station(self, station: Station) -> None:
        """Pin a searched station at the top and load its lines and departures."""
        logger.info(f"Pinning station {station.name} ({station.global_id})")
        if self.board.position is not None:
            station = _measured_from(station, self.board.position)
        self.board.pinned = station
        self._rebuild_catalog()

        enriched = await self._enrich(station)
        if self.board.pinned is not None and self.board.pinned.global_id == station.global_id:
            self.board.pinned = enriched
            self._rebuild_catalog()

        await self._aggregator.load_one(enriched, self.board.transport_filter)

    async def unpin_station(self) -> None:
        """Remove the pinned station.

        Nearby stations the pin had pushed out of the list get their departures
        loaded on the way back in.
        """
        if self.board.pinned is None:
            return
        logger.info(f"Unpinning station {self.board.pinned.name}")
        self.board.pinned = None
        self._rebuild_catalog()

        for station in self.board.stations:
            if station.global_id not in self.board.departures:
                await self._aggregator.load_one(station, self.board.transport_filter)

    def _rebuild_catalog(self) -> None:
        self.board.stations = self._catalog.merge(self.board.geo_stations, self.board.pinned)
        self._notify()

    async def _enrich(self, station: Station) -> Station:
        services = await self._gateway.fetch_services(station)
        if not services:
            # Keep showing the raw transport types
            return station
        return station.with_services(services)

    async def _find_nearby(self, position: Coordinates) -> list[Station]:
        limit = self._catalog.display_cap
        try:
            stations = await self._gateway.nearby_stations(position, limit=limit)
            if stations:
                self.board.api_status = "success"
                return stations
            logger.warning(f"No stations found near {position}")
        except UpstreamUnavailable as e:
            logger.warning(f"Nearby stations unavailable for {position}: {e.details.reason}")

        fallback = self._geo_locator.fallback
        logger.info(f"Retrying nearby stations at fallback position {fallback}")
        try:
            stations = await self._gateway.nearby_stations(fallback, limit=limit)
        except UpstreamUnavailable as e:
            logger.error(f"Nearby stations unavailable at fallback position: {e.details.reason}")
            self.board.api_status = "error"
            return []
        self.board.api_status = "success"
        return stations

    async def _full_load(self, reason: str) -> None:
        if not self._try_begin_load(reason):
            return
        try:
            logger.info(f"Loading board ({reason})")
            self._aggregator.clear()
            self.board.last_updated = self._clock()

            fix = await self._geo_locator.locate(fallback=self._last_known_position)
            if fix.error is None:
                self._last_known_position = fix.coordinates
                self.board.status_message = None
            else:
                self.board.status_message = fix.error.message
            self.board.position = fix.coordinates
            if self.board.pinned is not None:
                self.board.pinned = _measured_from(self.board.pinned, fix.coordinates)

            self.board.geo_stations = await self._find_nearby(fix.coordinates)
            self._rebuild_catalog()

            # Shown stations first, then the ones the pin pushed out
            enriched: dict[str, Station] = {}
            for station in [*self.board.stations, *self.board.geo_stations]:
                if station.global_id not in enriched:
                    enriched[station.global_id] = await self._enrich(station)
            self.board.geo_stations = [
                enriched.get(station.global_id, station) for station in self.board.geo_stations
            ]
            if self.board.pinned is not None:
                self.board.pinned = enriched.get(self.board.pinned.global_id, self.board.pinned)
            self._rebuild_catalog()

            await self._aggregator.load_all(self.board.stations, self.board.transport_filter)
            self._has_loaded = True
        finally:
            self._end_load()
