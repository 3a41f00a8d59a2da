"""Command line client for nearby MVG departures."""

import argparse
import asyncio
import json
import sys
from typing import Any

import aiohttp

from mvg_nearby.adapters.config import AppConfig
from mvg_nearby.adapters.terminal import BoardFormatter
from mvg_nearby.domain.models import (
    FILTER_CATEGORIES,
    BoardState,
    Enriched,
    Station,
    TransportType,
)
from mvg_nearby.main import Application, configure_logging, create_application

_CATEGORY_CHOICES = [category.name.lower() for category in FILTER_CATEGORIES]

INTERACTIVE_HELP = """Commands:
  <enter>                      refresh
  bus|tram|ubahn|sbahn|bahn    toggle a transport type
  /<text>                      search stations
  <number>                     pin a station from the last search
  unpin                        remove the pinned station
  help                         show this help
  quit                         exit
"""


def parse_category(value: str) -> TransportType:
    """Parse a filter category name (case-insensitive)."""
    name = value.strip().upper()
    for category in FILTER_CATEGORIES:
        if category.name == name:
            return category
    choices = ", ".join(_CATEGORY_CHOICES)
    raise ValueError(f"Unknown transport type '{value}' (choose from {choices})")


def station_to_dict(station: Station, formatter: BoardFormatter) -> dict[str, Any]:
    """JSON-friendly representation of a station."""
    services = None
    if isinstance(station.services, Enriched):
        services = [
            {"label": s.label, "transport_type": s.transport_type.value, "sev": s.sev}
            for s in station.services.services
        ]
    return {
        "global_id": station.global_id,
        "name": station.name,
        "place": station.place,
        "distance_in_meters": round(station.distance_in_meters),
        "walking_minutes": formatter.walking_minutes(station.distance_in_meters),
        "transport_types": list(station.transport_types),
        "services": services,
    }


def board_to_dict(board: BoardState, formatter: BoardFormatter) -> dict[str, Any]:
    """JSON-friendly representation of the board."""
    return {
        "last_updated": board.last_updated.isoformat() if board.last_updated else None,
        "status_message": board.status_message,
        "api_status": board.api_status,
        "position": (
            {"latitude": board.position.latitude, "longitude": board.position.longitude}
            if board.position
            else None
        ),
        "filter": board.transport_filter.as_dict(),
        "pinned": board.pinned.global_id if board.pinned else None,
        "stations": [station_to_dict(s, formatter) for s in board.stations],
        "departures": {
            global_id: [
                {
                    "transport_type": d.transport_type,
                    "label": d.label,
                    "destination": d.destination,
                    "departure_in_minutes": d.departure_in_minutes,
                    "cancelled": d.cancelled,
                }
                for d in departures
            ]
            for global_id, departures in board.departures.items()
        },
    }


def build_config(args: argparse.Namespace) -> AppConfig:
    """Build configuration from environment, TOML file and command line."""
    config = AppConfig()
    if getattr(args, "config", None):
        config.config_file = args.config
    config.load_toml()

    if getattr(args, "lat", None) is not None and getattr(args, "lon", None) is not None:
        config.latitude = args.lat
        config.longitude = args.lon
    if getattr(args, "no_geolocation", False):
        config.geolocation_enabled = False
    for name in getattr(args, "enable", None) or []:
        setattr(config, f"show_{parse_category(name).name.lower()}", True)
    for name in getattr(args, "disable", None) or []:
        setattr(config, f"show_{parse_category(name).name.lower()}", False)
    return config


async def run_board(app: Application, pin_query: str | None, as_json: bool) -> int:
    """Load the board once, optionally pinning the first search hit, and print it."""
    controller = app.controller
    await controller.start()

    if pin_query:
        results = await app.search.search(pin_query, controller.board.position)
        if not results:
            print(f"No stations found for '{pin_query}'", file=sys.stderr)
            return 1
        await controller.pin_station(results[0])

    if as_json:
        board = board_to_dict(controller.board, app.formatter)
        print(json.dumps(board, indent=2, ensure_ascii=False))
    else:
        print(app.formatter.format_board(controller.board))
    return 0


async def run_search(app: Application, query: str, as_json: bool) -> int:
    """Search stations and print them with their distance."""
    reference = app.config.position_override
    if reference is None:
        fix = await app.geo_locator.locate()
        reference = fix.coordinates
    results = await app.search.search(query, reference)

    if as_json:
        print(
            json.dumps(
                [station_to_dict(s, app.formatter) for s in results], indent=2, ensure_ascii=False
            )
        )
        return 0

    if not results:
        print(f"No stations found for '{query}'", file=sys.stderr)
        return 1
    print(f"\nFound {len(results)} station(s):\n")
    for station in results:
        print(f"  {station.name} ({station.place or 'Unknown'})")
        print(f"    ID: {station.global_id}")
        print(f"    Walk: {app.formatter.format_walking_time(station.distance_in_meters)}")
        print()
    return 0


async def run_interactive(app: Application) -> int:
    """Interactive board: refresh, toggle filters, search and pin."""
    controller = app.controller
    search_results: list[Station] = []

    await controller.start()
    print(app.formatter.format_board(controller.board))
    print(INTERACTIVE_HELP)

    while True:
        try:
            line = (await asyncio.to_thread(input, "> ")).strip()
        except EOFError:
            return 0

        if line in ("quit", "exit", "q"):
            return 0
        if line == "help":
            print(INTERACTIVE_HELP)
            continue

        if line == "":
            await controller.on_user_refresh()
        elif line.lower() in _CATEGORY_CHOICES:
            await controller.toggle_transport_type(parse_category(line))
        elif line.startswith("/"):
            search_results = await app.search.search(line[1:], controller.board.position)
            if not search_results:
                print("No results")
            for index, station in enumerate(search_results, 1):
                walk = app.formatter.format_walking_time(station.distance_in_meters)
                print(f"  {index}. {station.name} ({walk})")
            continue
        elif line.isdigit() and 1 <= int(line) <= len(search_results):
            await controller.pin_station(search_results[int(line) - 1])
        elif line == "unpin":
            await controller.unpin_station()
        else:
            print(f"Unknown command '{line}'. Type 'help' for commands.")
            continue

        print(app.formatter.format_board(controller.board))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Departures from the MVG stations nearest to you",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Departures around your current (IP-based) position
  mvg-nearby board

  # Departures around a fixed position, including long-distance trains
  mvg-nearby board --lat 48.1374 --lon 11.5755 --enable bahn

  # Also show a station of your choice at the top
  mvg-nearby board --pin "Giesing"

  # Search for stations
  mvg-nearby search "Sendlinger Tor"

  # Interactive board
  mvg-nearby interactive
        """,
    )
    parser.add_argument("--config", help="Path to TOML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    location_parent = argparse.ArgumentParser(add_help=False)
    location_parent.add_argument("--lat", type=float, help="Latitude overriding geolocation")
    location_parent.add_argument("--lon", type=float, help="Longitude overriding geolocation")
    location_parent.add_argument(
        "--no-geolocation", action="store_true", help="Do not look up the position by IP"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    board_parser = subparsers.add_parser(
        "board", parents=[location_parent], help="Show departures near you"
    )
    board_parser.add_argument("--pin", metavar="QUERY", help="Pin the first station matching QUERY")
    board_parser.add_argument(
        "--enable", action="append", choices=_CATEGORY_CHOICES, help="Enable a transport type"
    )
    board_parser.add_argument(
        "--disable", action="append", choices=_CATEGORY_CHOICES, help="Disable a transport type"
    )
    board_parser.add_argument("--json", action="store_true", help="Output as JSON")

    search_parser = subparsers.add_parser(
        "search", parents=[location_parent], help="Search for stations"
    )
    search_parser.add_argument("query", help="Station name to search for")
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser(
        "interactive", parents=[location_parent], help="Interactive departure board"
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    try:
        config = build_config(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    async with aiohttp.ClientSession() as session:
        app = create_application(config, session)
        if args.command == "board":
            return await run_board(app, args.pin, args.json)
        if args.command == "search":
            return await run_search(app, args.query, args.json)
        return await run_interactive(app)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
