"""Domain models for nearby MVG departures."""

from mvg_nearby.domain.models.board_state import BoardState
from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.models.departure import Departure
from mvg_nearby.domain.models.error_details import ErrorDetails
from mvg_nearby.domain.models.position_fix import PositionFix
from mvg_nearby.domain.models.refresh_state import RefreshState
from mvg_nearby.domain.models.service import Service
from mvg_nearby.domain.models.station import (
    UNENRICHED,
    Enriched,
    Station,
    StationServices,
    Unenriched,
)
from mvg_nearby.domain.models.transport_type import TRANSPORT_TYPE_ORDER, TransportType
from mvg_nearby.domain.models.transport_type_filter import (
    FILTER_CATEGORIES,
    TransportTypeFilter,
)

__all__ = [
    "FILTER_CATEGORIES",
    "TRANSPORT_TYPE_ORDER",
    "UNENRICHED",
    "BoardState",
    "Coordinates",
    "Departure",
    "Enriched",
    "ErrorDetails",
    "PositionFix",
    "RefreshState",
    "Service",
    "Station",
    "StationServices",
    "TransportType",
    "TransportTypeFilter",
    "Unenriched",
]
