"""Position provider returning configured coordinates."""

from mvg_nearby.domain.errors import LocationError, LocationErrorKind
from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.ports.position_provider import PositionProvider


class FixedPositionProvider(PositionProvider):
    """Adapter for a position set by configuration or on the command line."""

    def __init__(self, coordinates: Coordinates | None) -> None:
        """Initialize with the fixed position, or None if none was configured."""
        self._coordinates = coordinates

    async def current_position(self) -> Coordinates:
        """Return the configured position."""
        if self._coordinates is None:
            raise LocationError(LocationErrorKind.UNSUPPORTED, "no fixed position configured")
        return self._coordinates
