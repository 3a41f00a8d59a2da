"""Adapters layer - external system integrations."""

from mvg_nearby.adapters.config import AppConfig
from mvg_nearby.adapters.location import FixedPositionProvider, IpPositionProvider
from mvg_nearby.adapters.mvg_api import MvgHttpClient, MvgTransitGateway
from mvg_nearby.adapters.terminal import BoardFormatter

__all__ = [
    "AppConfig",
    "BoardFormatter",
    "FixedPositionProvider",
    "IpPositionProvider",
    "MvgHttpClient",
    "MvgTransitGateway",
]
