"""Ports (interfaces) for the ports-and-adapters architecture."""

from mvg_nearby.domain.ports.position_provider import PositionProvider
from mvg_nearby.domain.ports.transit_gateway import TransitGateway

__all__ = [
    "PositionProvider",
    "TransitGateway",
]
