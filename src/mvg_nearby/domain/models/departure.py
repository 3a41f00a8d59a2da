"""Departure domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Departure:
    """Represents a single departure from a station.

    ``departure_in_minutes`` is computed once when the departure is fetched and
    may be zero or negative for vehicles leaving now or just gone.
    """

    transport_type: str
    label: str
    destination: str
    departure_in_minutes: int
    departure_time: datetime | None = None
    planned_departure_time: datetime | None = None
    delay_in_minutes: int = 0
    platform: int | None = None
    cancelled: bool = False
