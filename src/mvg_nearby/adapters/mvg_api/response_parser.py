"""Parsing of MVG API payloads into domain models."""

import logging
import math
from datetime import UTC, datetime
from typing import Any

from mvg_nearby.domain.geo import distance
from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.models.departure import Departure
from mvg_nearby.domain.models.service import Service
from mvg_nearby.domain.models.station import Station
from mvg_nearby.domain.models.transport_type import TransportType

logger = logging.getLogger(__name__)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _timestamp(value: Any) -> datetime | None:
    """Convert an epoch timestamp in milliseconds to an aware datetime."""
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(float(value) / 1000, tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def minutes_until(departure_time: datetime, now: datetime) -> int:
    """Whole minutes from ``now`` until ``departure_time``, rounded half up.

    Negative for departures in the past.
    """
    minutes = (departure_time - now).total_seconds() / 60
    return math.floor(minutes + 0.5)


def parse_station(data: dict[str, Any], reference: Coordinates | None) -> Station | None:
    """Build a Station from a nearby or location entry.

    The distance is computed locally against ``reference``; any distance the
    provider sends is ignored.
    """
    global_id = str(data.get("globalId") or data.get("id") or "")
    if not global_id:
        return None

    latitude = _optional_float(data.get("latitude"))
    longitude = _optional_float(data.get("longitude"))
    distance_in_meters = 0.0
    if reference is not None and latitude is not None and longitude is not None:
        distance_in_meters = distance(reference, Coordinates(latitude, longitude))

    return Station(
        global_id=global_id,
        name=data.get("name") or global_id,
        place=data.get("place") or "",
        transport_types=tuple(str(t) for t in data.get("transportTypes") or []),
        distance_in_meters=distance_in_meters,
        latitude=latitude,
        longitude=longitude,
    )


def parse_stations(entries: list[Any], reference: Coordinates | None) -> list[Station]:
    """Parse a list of station entries, skipping malformed ones."""
    stations = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        station = parse_station(entry, reference)
        if station is not None:
            stations.append(station)
    return stations


def parse_service(data: dict[str, Any]) -> Service | None:
    """Build a Service from a line entry, or None for unknown transport types."""
    transport_type = TransportType.from_api(data.get("transportType"))
    if transport_type is None:
        logger.debug(f"Skipping line with unknown transport type: {data.get('transportType')}")
        return None
    return Service(
        label=str(data.get("label", "")),
        transport_type=transport_type,
        train_type=data.get("trainType") or "",
        network=data.get("network") or "",
        diva_id=str(data.get("divaId") or ""),
        sev=bool(data.get("sev", False)),
    )


def parse_departure(data: dict[str, Any], now: datetime) -> Departure | None:
    """Build a Departure, deriving minutes from the realtime departure time."""
    departure_time = _timestamp(data.get("realtimeDepartureTime"))
    planned_time = _timestamp(data.get("plannedDepartureTime"))
    if departure_time is None:
        departure_time = planned_time
    if departure_time is None:
        return None

    platform = data.get("platform")
    delay = data.get("delayInMinutes")
    return Departure(
        transport_type=str(data.get("transportType", "")),
        label=str(data.get("label", "")),
        destination=str(data.get("destination", "")),
        departure_in_minutes=minutes_until(departure_time, now),
        departure_time=departure_time,
        planned_departure_time=planned_time,
        delay_in_minutes=delay if isinstance(delay, int) else 0,
        platform=platform if isinstance(platform, int) else None,
        cancelled=bool(data.get("cancelled", False)),
    )
