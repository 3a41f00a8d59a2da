"""Transport type domain model."""

from enum import Enum


class TransportType(Enum):
    """Transport modes known to the MVG API.

    Declaration order is the canonical ranking order for serviced lines.
    """

    BUS = "BUS"
    TRAM = "TRAM"
    UBAHN = "UBAHN"
    SBAHN = "SBAHN"
    BAHN = "BAHN"
    SCHIFF = "SCHIFF"
    REGIONAL_BUS = "REGIONAL_BUS"
    RUFTAXI = "RUFTAXI"

    @classmethod
    def from_api(cls, value: str | None) -> "TransportType | None":
        """Map a raw API token to a transport type, or None if unknown."""
        if not value:
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return None


TRANSPORT_TYPE_ORDER: tuple[TransportType, ...] = tuple(TransportType)
