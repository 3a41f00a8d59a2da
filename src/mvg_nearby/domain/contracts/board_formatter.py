"""Protocol for formatting the departure board."""

from datetime import datetime
from typing import Protocol

from mvg_nearby.domain.models.departure import Departure
from mvg_nearby.domain.models.station import Station
from mvg_nearby.domain.models.transport_type_filter import TransportTypeFilter


class BoardFormatterProtocol(Protocol):
    """Protocol for turning board read models into display text."""

    def format_walking_time(self, distance_in_meters: float) -> str:
        """Format the walking time to a station.

        Args:
            distance_in_meters: Distance from the current position.

        Returns:
            Walking time like "4 min".
        """
        ...

    def format_services(self, station: Station) -> str:
        """Format the lines serving a station.

        Args:
            station: Station, enriched or not.

        Returns:
            Line labels, or the raw transport types when the station is not enriched.
        """
        ...

    def format_departure(self, departure: Departure) -> str:
        """Format one departure line.

        Args:
            departure: The departure to format.

        Returns:
            Text like "U3 · Moosach · 4 min" or "U3 · Moosach · Now!".
        """
        ...

    def format_update_time(self, update_time: datetime | None) -> str:
        """Format last update time.

        Args:
            update_time: The update time to format, or None.

        Returns:
            Formatted time string or "Never" if None.
        """
        ...

    def format_filter(self, transport_filter: TransportTypeFilter) -> str:
        """Format the state of the five filter toggles.

        Args:
            transport_filter: Current filter.

        Returns:
            One line describing which categories are on.
        """
        ...
