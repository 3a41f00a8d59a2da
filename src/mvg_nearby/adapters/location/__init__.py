"""Position provider adapters."""

from mvg_nearby.adapters.location.fixed_position_provider import FixedPositionProvider
from mvg_nearby.adapters.location.ip_position_provider import IpPositionProvider

__all__ = [
    "FixedPositionProvider",
    "IpPositionProvider",
]
