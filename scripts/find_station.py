#!/usr/bin/env python3
"""Helper script to find MVG stations, their lines and a few departures."""

import asyncio
import sys

import aiohttp

from mvg_nearby.adapters.mvg_api import MvgHttpClient, MvgTransitGateway
from mvg_nearby.domain.models import Enriched, Station, TransportTypeFilter


def _print_station_info(station: Station) -> None:
    """Print station information."""
    print("\nFound station:")
    print(f"  ID: {station.global_id}")
    print(f"  Name: {station.name}")
    print(f"  Place: {station.place}")
    print(f"  Coordinates: {station.latitude}, {station.longitude}")


async def find_station(name: str) -> None:
    """Find a station by name and show what serves it."""
    print(f"Searching for: {name}")

    async with aiohttp.ClientSession() as session:
        gateway = MvgTransitGateway(MvgHttpClient(session))
        results = await gateway.search_stations(name)
        if not results:
            print(f"Station not found: {name}")
            sys.exit(1)

        station = results[0]
        _print_station_info(station)

        enriched = station.with_services(await gateway.fetch_services(station))
        if isinstance(enriched.services, Enriched):
            labels = ", ".join(s.label for s in enriched.services.services)
            print(f"\nLines: {labels or '(none)'}")

        print("\nSample departures:")
        all_types = TransportTypeFilter(bahn=True)
        departures = await gateway.fetch_departures(station.global_id, all_types)
        for dep in departures:
            print(f"  {dep.label} → {dep.destination} in {dep.departure_in_minutes} min")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python find_station.py <station_name>")
        print('Example: python find_station.py "Chiemgaustraße"')
        sys.exit(1)

    asyncio.run(find_station(sys.argv[1]))
