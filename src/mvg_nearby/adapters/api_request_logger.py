"""Detailed logging of outgoing HTTP requests, switched on by environment.

Set ``MVG_NEARBY_LOG_REQUESTS=true`` to see every request to the MVG API and
the geolocation service, including query parameters and headers.
"""

import json
import logging
import os
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

LOG_REQUESTS_ENV = "MVG_NEARBY_LOG_REQUESTS"
REDACTED = "***REDACTED***"
_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


def should_log_requests() -> bool:
    """Whether request logging is enabled."""
    return os.getenv(LOG_REQUESTS_ENV, "").lower() == "true"


def _full_url(url: str, params: Mapping[str, Any] | None) -> str:
    if not params:
        return url
    query = urlencode(sorted(params.items()), safe=":,")
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def _safe_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: REDACTED if name.lower() in _SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def log_api_request(
    method: str,
    url: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> None:
    """Log one outgoing request if logging is enabled.

    Args:
        method: HTTP method.
        url: Request URL without the query parameters in ``params``.
        params: Query parameters, appended sorted by name.
        headers: Request headers; credentials are redacted.
    """
    if not should_log_requests():
        return

    message = f"API Request:\n{method} {_full_url(url, params)}"
    if headers:
        message += f"\nHeaders: {json.dumps(_safe_headers(headers), indent=2)}"
    logger.info(message)
