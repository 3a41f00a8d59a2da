"""Coordinates domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 position in decimal degrees."""

    latitude: float
    longitude: float
