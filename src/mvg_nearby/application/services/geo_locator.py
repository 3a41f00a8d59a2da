"""Resolution of the caller's position with a fixed fallback."""

import logging
from typing import TYPE_CHECKING

from mvg_nearby.domain.errors import LocationError, LocationErrorKind
from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.models.position_fix import PositionFix

if TYPE_CHECKING:
    from mvg_nearby.domain.ports import PositionProvider

logger = logging.getLogger(__name__)

# Munich central station
DEFAULT_FALLBACK_POSITION = Coordinates(48.1407, 11.5583)


class GeoLocator:
    """Asks the position provider once and never fails.

    A location failure degrades the result to a fallback position; the
    classified error travels with the fix so the caller can show it.
    """

    def __init__(
        self,
        provider: "PositionProvider | None",
        fallback: Coordinates = DEFAULT_FALLBACK_POSITION,
    ) -> None:
        """Initialize with a position provider (None if the platform has none)."""
        self._provider = provider
        self.fallback = fallback

    async def locate(self, fallback: Coordinates | None = None) -> PositionFix:
        """Get the current position.

        Args:
            fallback: Position to use on failure instead of the fixed fallback,
                typically the last known good position.
        """
        try:
            if self._provider is None:
                raise LocationError(LocationErrorKind.UNSUPPORTED)
            coordinates = await self._provider.current_position()
        except LocationError as e:
            substitute = fallback or self.fallback
            logger.warning(f"Geolocation failed ({e.kind.value}), using {substitute}: {e}")
            return PositionFix(coordinates=substitute, error=e)

        return PositionFix(coordinates=coordinates)
