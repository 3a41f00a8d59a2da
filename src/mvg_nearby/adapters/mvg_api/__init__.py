"""MVG API adapters."""

from mvg_nearby.adapters.mvg_api.http_client import MvgHttpClient
from mvg_nearby.adapters.mvg_api.mvg_transit_gateway import MvgTransitGateway

__all__ = [
    "MvgHttpClient",
    "MvgTransitGateway",
]
