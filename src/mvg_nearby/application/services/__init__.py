"""Application services (use cases) for the nearby departure board."""

from mvg_nearby.application.services.departure_aggregator import DepartureAggregator
from mvg_nearby.application.services.geo_locator import DEFAULT_FALLBACK_POSITION, GeoLocator
from mvg_nearby.application.services.refresh_controller import RefreshController
from mvg_nearby.application.services.station_catalog import DEFAULT_DISPLAY_CAP, StationCatalog
from mvg_nearby.application.services.station_search import StationSearch

__all__ = [
    "DEFAULT_DISPLAY_CAP",
    "DEFAULT_FALLBACK_POSITION",
    "DepartureAggregator",
    "GeoLocator",
    "RefreshController",
    "StationCatalog",
    "StationSearch",
]
