"""HTTP client for MVG API requests."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from mvg_nearby.adapters.api_rate_limiter import ApiRateLimiter
from mvg_nearby.adapters.api_request_logger import log_api_request
from mvg_nearby.adapters.mvg_api.constants import DEFAULT_HEADERS, MVG_BASE_URL
from mvg_nearby.domain.errors import UpstreamUnavailable
from mvg_nearby.domain.models.error_details import ErrorDetails

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class MvgHttpClient:
    """Thin JSON-over-GET client for the MVG API."""

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = MVG_BASE_URL,
        timeout_seconds: float = 10,
        rate_limiter: ApiRateLimiter | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: aiohttp ClientSession used for all requests.
            base_url: API base URL without trailing slash.
            timeout_seconds: Total timeout per request.
            rate_limiter: Optional limiter enforcing a delay between requests.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._rate_limiter = rate_limiter or ApiRateLimiter("mvg_api")

    async def _log_error_response(self, response: "ClientResponse", url: str) -> None:
        """Log error response details."""
        error_text = await response.text()
        error_body = error_text[:200] if error_text else "(empty response body)"
        logger.warning(f"MVG API returned status {response.status} for {url}: {error_body}")

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a path below the base URL and decode the JSON body.

        Args:
            path: Path starting with "/".
            params: Query parameters.

        Returns:
            The decoded JSON document.

        Raises:
            UpstreamUnavailable: On a non-200 status, a transport error or an
                undecodable body.
        """
        url = f"{self._base_url}{path}"
        log_api_request("GET", url, params=params, headers=DEFAULT_HEADERS)
        await self._rate_limiter.acquire()

        try:
            async with self._session.get(
                url, params=params, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    await self._log_error_response(response, url)
                    raise UpstreamUnavailable(ErrorDetails.from_status(response.status), url)
                return await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise UpstreamUnavailable(ErrorDetails(reason="Request timed out"), url) from e
        except aiohttp.ClientError as e:
            raise UpstreamUnavailable(ErrorDetails(reason=f"Connection error: {e}"), url) from e
        except ValueError as e:
            raise UpstreamUnavailable(ErrorDetails(reason="Invalid JSON response"), url) from e

    async def get_list(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """GET a path whose body must be a JSON list.

        Raises:
            UpstreamUnavailable: As ``get_json``, or if the body is not a list.
        """
        data = await self.get_json(path, params)
        if not isinstance(data, list):
            raise UpstreamUnavailable(
                ErrorDetails(reason="Unexpected response format"), f"{self._base_url}{path}"
            )
        return data
