"""Domain errors."""

from enum import Enum

from mvg_nearby.domain.models.error_details import ErrorDetails


class LocationErrorKind(Enum):
    """Why a position could not be determined."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


LOCATION_ERROR_MESSAGES: dict[LocationErrorKind, str] = {
    LocationErrorKind.PERMISSION_DENIED: "User denied the request for Geolocation.",
    LocationErrorKind.POSITION_UNAVAILABLE: "Location information is unavailable.",
    LocationErrorKind.TIMEOUT: "The request to get user location timed out.",
    LocationErrorKind.UNSUPPORTED: "Geolocation is not supported on this device.",
}


class LocationError(Exception):
    """The position provider could not deliver a position."""

    def __init__(self, kind: LocationErrorKind, detail: str | None = None) -> None:
        """Initialize with the failure kind and an optional technical detail."""
        self.kind = kind
        self.detail = detail
        super().__init__(self.message if detail is None else f"{self.message} ({detail})")

    @property
    def message(self) -> str:
        """User-facing message for this kind of failure."""
        return LOCATION_ERROR_MESSAGES[self.kind]


class UpstreamUnavailable(Exception):
    """A transit API call did not return a usable response."""

    def __init__(self, details: ErrorDetails, url: str | None = None) -> None:
        """Initialize with classified error details and the failing URL."""
        self.details = details
        self.url = url
        target = f" for {url}" if url else ""
        super().__init__(f"Upstream unavailable{target}: {details.reason}")
