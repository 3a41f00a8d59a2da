"""Position fix domain model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mvg_nearby.domain.models.coordinates import Coordinates

if TYPE_CHECKING:
    from mvg_nearby.domain.errors import LocationError


@dataclass(frozen=True)
class PositionFix:
    """A usable position plus the location failure that produced it, if any."""

    coordinates: Coordinates
    error: LocationError | None = None
