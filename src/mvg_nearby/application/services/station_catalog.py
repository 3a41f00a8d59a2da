"""Merging of geolocated stations with the pinned station."""

from collections.abc import Sequence

from mvg_nearby.domain.models.station import Station

DEFAULT_DISPLAY_CAP = 3


class StationCatalog:
    """Produces the ordered station list that is rendered."""

    def __init__(self, display_cap: int = DEFAULT_DISPLAY_CAP) -> None:
        """Initialize with the maximum number of stations shown."""
        self.display_cap = display_cap

    def merge(
        self, geo_stations: Sequence[Station], pinned: Station | None = None
    ) -> list[Station]:
        """Put the pinned station first and drop its geolocated duplicate.

        With a pin the result is capped, so the pin takes the slot of the
        lowest-priority geolocated station instead of growing the list.
        """
        if pinned is None:
            return list(geo_stations)

        others = [station for station in geo_stations if station.global_id != pinned.global_id]
        return [pinned, *others][: self.display_cap]
