"""Domain layer - core business logic and models."""

from mvg_nearby.domain.errors import LocationError, LocationErrorKind, UpstreamUnavailable
from mvg_nearby.domain.geo import distance
from mvg_nearby.domain.models import (
    Coordinates,
    Departure,
    Service,
    Station,
    TransportType,
    TransportTypeFilter,
)
from mvg_nearby.domain.ports import PositionProvider, TransitGateway
from mvg_nearby.domain.service_ranking import rank_services

__all__ = [
    "Coordinates",
    "Departure",
    "LocationError",
    "LocationErrorKind",
    "PositionProvider",
    "Service",
    "Station",
    "TransitGateway",
    "TransportType",
    "TransportTypeFilter",
    "UpstreamUnavailable",
    "distance",
    "rank_services",
]
