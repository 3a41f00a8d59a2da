"""Formatter for the terminal departure board."""

import math
from datetime import datetime
from zoneinfo import ZoneInfo

from mvg_nearby.domain.contracts.board_formatter import BoardFormatterProtocol
from mvg_nearby.domain.models.board_state import BoardState
from mvg_nearby.domain.models.departure import Departure
from mvg_nearby.domain.models.station import Enriched, Station, Unenriched
from mvg_nearby.domain.models.transport_type_filter import FILTER_CATEGORIES, TransportTypeFilter

WALKING_SPEED_METERS_PER_SECOND = 1.5
SEPARATOR = " · "

_CATEGORY_LABELS = {
    "BUS": "Bus",
    "TRAM": "Tram",
    "UBAHN": "UBahn",
    "SBAHN": "SBahn",
    "BAHN": "Bahn",
}


class BoardFormatter(BoardFormatterProtocol):
    """Formats board read models as plain text."""

    def __init__(self, timezone: str = "Europe/Berlin") -> None:
        """Initialize the formatter.

        Args:
            timezone: IANA timezone used for the update time.
        """
        self._timezone = ZoneInfo(timezone)

    def walking_minutes(self, distance_in_meters: float) -> int:
        """Minutes needed to walk a distance, rounded up."""
        return math.ceil(distance_in_meters / WALKING_SPEED_METERS_PER_SECOND / 60)

    def format_walking_time(self, distance_in_meters: float) -> str:
        """Format the walking time to a station."""
        return f"{self.walking_minutes(distance_in_meters)} min"

    def format_services(self, station: Station) -> str:
        """Format serviced line labels, or the raw transport types before enrichment."""
        match station.services:
            case Enriched(services=services):
                return SEPARATOR.join(service.label for service in services)
            case Unenriched():
                return SEPARATOR.join(station.transport_types)

    def format_departure_time(self, departure: Departure) -> str:
        """Format minutes until departure; anything under a minute reads "Now!"."""
        if departure.departure_in_minutes < 1:
            return "Now!"
        return f"{departure.departure_in_minutes} min"

    def format_departure(self, departure: Departure) -> str:
        """Format one departure line."""
        text = SEPARATOR.join(
            [departure.label, departure.destination, self.format_departure_time(departure)]
        )
        if departure.cancelled:
            text += " (cancelled)"
        return text

    def format_update_time(self, update_time: datetime | None) -> str:
        """Format last update time as 24h HH:MM."""
        if not update_time:
            return "Never"
        if update_time.tzinfo is not None:
            update_time = update_time.astimezone(self._timezone)
        return update_time.strftime("%H:%M")

    def format_filter(self, transport_filter: TransportTypeFilter) -> str:
        """Format the five toggles, e.g. "[x] Bus [x] Tram ... [ ] Bahn"."""
        parts = []
        for category in FILTER_CATEGORIES:
            mark = "x" if transport_filter.is_enabled(category) else " "
            parts.append(f"[{mark}] {_CATEGORY_LABELS[category.name]}")
        return " ".join(parts)

    def format_station_header(self, station: Station) -> str:
        """Format a station header with walking time."""
        return f"{station.name} ({self.format_walking_time(station.distance_in_meters)})"

    def format_board(self, board: BoardState) -> str:
        """Render the whole board as text."""
        lines = [
            f"{self.format_filter(board.transport_filter)}"
            f"    updated {self.format_update_time(board.last_updated)}"
        ]
        if board.status_message:
            lines.append(board.status_message)
        if not board.stations:
            lines.append("No stations found.")

        for station in board.stations:
            lines.append("")
            is_pinned = board.pinned is not None and board.pinned.global_id == station.global_id
            pin_marker = "* " if is_pinned else ""
            lines.append(pin_marker + self.format_station_header(station))
            services = self.format_services(station)
            if services:
                lines.append(f"  {services}")
            departures = board.departures.get(station.global_id)
            if departures is None:
                lines.append("    Loading...")
            elif not departures:
                lines.append("    No departures")
            else:
                lines.extend(f"    {self.format_departure(d)}" for d in departures)
        return "\n".join(lines)
