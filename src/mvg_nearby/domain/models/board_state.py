"""Board state read model."""

from dataclasses import dataclass, field
from datetime import datetime

from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.models.departure import Departure
from mvg_nearby.domain.models.station import Station
from mvg_nearby.domain.models.transport_type_filter import TransportTypeFilter


@dataclass
class BoardState:
    """Everything the presentation layer renders."""

    stations: list[Station] = field(default_factory=list)  # merged catalog
    geo_stations: list[Station] = field(default_factory=list)
    pinned: Station | None = None
    departures: dict[str, list[Departure]] = field(default_factory=dict)
    transport_filter: TransportTypeFilter = field(default_factory=TransportTypeFilter)
    last_updated: datetime | None = None
    status_message: str | None = None  # geolocation failure, shown as information
    api_status: str = "unknown"
    position: Coordinates | None = None
