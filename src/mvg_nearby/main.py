"""Main entry point for the nearby MVG departures board."""

import asyncio
import logging
import sys
from dataclasses import dataclass

import aiohttp

from mvg_nearby.adapters.api_rate_limiter import ApiRateLimiter
from mvg_nearby.adapters.config import AppConfig
from mvg_nearby.adapters.location import FixedPositionProvider, IpPositionProvider
from mvg_nearby.adapters.mvg_api import MvgHttpClient, MvgTransitGateway
from mvg_nearby.adapters.terminal import BoardFormatter
from mvg_nearby.application.services import (
    GeoLocator,
    RefreshController,
    StationCatalog,
    StationSearch,
)
from mvg_nearby.domain.ports import PositionProvider

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure logging to stderr so it does not mix with the board on stdout."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


@dataclass(frozen=True)
class Application:
    """Wired components for one session."""

    config: AppConfig
    gateway: MvgTransitGateway
    geo_locator: GeoLocator
    controller: RefreshController
    search: StationSearch
    formatter: BoardFormatter


def create_position_provider(config: AppConfig, session: aiohttp.ClientSession) -> PositionProvider:
    """A configured position wins over IP geolocation."""
    override = config.position_override
    if override is not None:
        logger.info(f"Using configured position {override}")
        return FixedPositionProvider(override)
    return IpPositionProvider(
        session,
        url=config.geolocation_url,
        timeout_seconds=config.geolocation_timeout,
        enabled=config.geolocation_enabled,
    )


def create_application(config: AppConfig, session: aiohttp.ClientSession) -> Application:
    """Wire adapters and services for one session."""
    rate_limiter = ApiRateLimiter.from_milliseconds("mvg_api", config.sleep_ms_between_calls)
    http_client = MvgHttpClient(
        session,
        base_url=config.mvg_api_base_url,
        timeout_seconds=config.mvg_api_timeout,
        rate_limiter=rate_limiter,
    )
    gateway = MvgTransitGateway(http_client)
    geo_locator = GeoLocator(
        create_position_provider(config, session), fallback=config.fallback_position
    )
    controller = RefreshController(
        geo_locator,
        gateway,
        catalog=StationCatalog(display_cap=config.nearby_limit),
        transport_filter=config.initial_filter(),
        departure_limit=config.departure_limit,
    )
    search = StationSearch(
        gateway,
        max_results=config.search_result_limit,
        debounce_seconds=config.search_debounce_ms / 1000,
    )
    return Application(
        config=config,
        gateway=gateway,
        geo_locator=geo_locator,
        controller=controller,
        search=search,
        formatter=BoardFormatter(config.timezone),
    )


async def main() -> None:
    """Load the board once and print it."""
    configure_logging()
    config = AppConfig()
    config.load_toml()

    async with aiohttp.ClientSession() as session:
        app = create_application(config, session)
        await app.controller.start()
        print(app.formatter.format_board(app.controller.board))


if __name__ == "__main__":
    asyncio.run(main())
