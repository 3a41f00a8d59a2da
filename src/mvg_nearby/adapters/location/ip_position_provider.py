"""Position provider based on IP geolocation."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from mvg_nearby.adapters.api_request_logger import log_api_request
from mvg_nearby.domain.errors import LocationError, LocationErrorKind
from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.ports.position_provider import PositionProvider

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_GEOLOCATION_URL = "http://ip-api.com/json"


class IpPositionProvider(PositionProvider):
    """Adapter asking an IP geolocation service for the approximate position.

    Expects an ip-api.com style payload: ``{"status": "success", "lat": ..., "lon": ...}``.
    """

    def __init__(
        self,
        session: "ClientSession",
        url: str = DEFAULT_GEOLOCATION_URL,
        timeout_seconds: float = 5,
        enabled: bool = True,
    ) -> None:
        """Initialize the provider.

        Args:
            session: aiohttp ClientSession used for the request.
            url: Geolocation endpoint.
            timeout_seconds: Total timeout for the request.
            enabled: False when the user has not allowed location lookups.
        """
        self._session = session
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._enabled = enabled

    async def current_position(self) -> Coordinates:
        """Look up the position for the public IP address."""
        if not self._enabled:
            raise LocationError(LocationErrorKind.PERMISSION_DENIED, "geolocation disabled")

        log_api_request("GET", self._url)
        try:
            async with self._session.get(self._url, timeout=self._timeout) as response:
                if response.status in (401, 403):
                    raise LocationError(
                        LocationErrorKind.PERMISSION_DENIED, f"HTTP {response.status}"
                    )
                if response.status != 200:
                    raise LocationError(
                        LocationErrorKind.POSITION_UNAVAILABLE, f"HTTP {response.status}"
                    )
                data = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise LocationError(LocationErrorKind.TIMEOUT) from e
        except aiohttp.ClientError as e:
            raise LocationError(LocationErrorKind.POSITION_UNAVAILABLE, str(e)) from e
        except ValueError as e:
            raise LocationError(LocationErrorKind.POSITION_UNAVAILABLE, "invalid JSON") from e

        return self._parse_position(data)

    @staticmethod
    def _parse_position(data: Any) -> Coordinates:
        """Extract coordinates from the geolocation payload."""
        if not isinstance(data, dict) or data.get("status", "success") != "success":
            message = data.get("message") if isinstance(data, dict) else None
            raise LocationError(LocationErrorKind.POSITION_UNAVAILABLE, message)

        try:
            coordinates = Coordinates(float(data["lat"]), float(data["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise LocationError(
                LocationErrorKind.POSITION_UNAVAILABLE, "missing coordinates"
            ) from e

        logger.debug(f"IP geolocation resolved to {coordinates}")
        return coordinates
