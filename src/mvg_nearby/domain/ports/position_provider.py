"""Position provider port."""

from typing import Protocol

from mvg_nearby.domain.models.coordinates import Coordinates


class PositionProvider(Protocol):
    """Port for the platform's location source."""

    async def current_position(self) -> Coordinates:
        """Get the current position.

        Raises:
            LocationError: If no position could be determined.
        """
        ...
