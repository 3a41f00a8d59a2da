"""Tests for the MVG transit gateway and its HTTP client."""

from datetime import UTC, datetime, timedelta
from typing import Any

import aiohttp
import pytest

from mvg_nearby.adapters.mvg_api import MvgHttpClient, MvgTransitGateway
from mvg_nearby.adapters.mvg_api.response_parser import minutes_until
from mvg_nearby.domain.errors import UpstreamUnavailable
from mvg_nearby.domain.models import Coordinates, Station, TransportType, TransportTypeFilter

BASE_URL = "https://mvg.example/api"
NOW = datetime(2026, 3, 2, 12, 0, tzinfo=UTC)
UNIVERSITAET = Coordinates(48.15007, 11.581)


def _millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class FakeResponse:
    """Minimal stand-in for an aiohttp response used as async context manager."""

    def __init__(self, status: int = 200, payload: Any = None, error: Exception | None = None):
        self.status = status
        self._payload = payload
        self._error = error

    async def __aenter__(self) -> "FakeResponse":
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, *_args: object) -> None:
        return None

    async def json(self, content_type: str | None = "application/json") -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    async def text(self) -> str:
        return "" if self._payload is None else str(self._payload)


class FakeSession:
    """Records GET requests and answers them from a path table."""

    def __init__(self, responses: dict[str, FakeResponse] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    def get(self, url: str, params: dict[str, Any] | None = None, **_kwargs: Any) -> FakeResponse:
        self.calls.append((url, params))
        for path, response in self.responses.items():
            if url.endswith(path):
                return response
        return FakeResponse(status=404)


def _gateway(session: FakeSession) -> MvgTransitGateway:
    client = MvgHttpClient(session, base_url=BASE_URL)  # type: ignore[arg-type]
    return MvgTransitGateway(client, clock=lambda: NOW)


class TestMvgHttpClient:
    """Tests for MvgHttpClient error classification."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "reason"),
        [
            (429, "Rate limit exceeded"),
            (502, "Bad gateway (server error)"),
            (503, "Service unavailable"),
            (504, "Gateway timeout"),
            (500, "HTTP 500"),
        ],
    )
    async def test_non_200_status_raises_upstream_unavailable(
        self, status: int, reason: str
    ) -> None:
        """Given an error status, when fetching, then UpstreamUnavailable carries the reason."""
        session = FakeSession({"/stations/nearby": FakeResponse(status=status)})
        client = MvgHttpClient(session, base_url=BASE_URL)  # type: ignore[arg-type]

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.get_json("/stations/nearby")

        assert exc_info.value.details.status_code == status
        assert exc_info.value.details.reason == reason
        assert exc_info.value.url == f"{BASE_URL}/stations/nearby"

    @pytest.mark.asyncio
    async def test_timeout_is_classified(self) -> None:
        """Given a timeout, when fetching, then the reason says so."""
        session = FakeSession({"/x": FakeResponse(error=TimeoutError())})
        client = MvgHttpClient(session, base_url=BASE_URL)  # type: ignore[arg-type]

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.get_json("/x")

        assert exc_info.value.details.reason == "Request timed out"
        assert exc_info.value.details.status_code is None

    @pytest.mark.asyncio
    async def test_connection_error_is_classified(self) -> None:
        """Given a transport error, when fetching, then it becomes UpstreamUnavailable."""
        session = FakeSession({"/x": FakeResponse(error=aiohttp.ClientConnectionError("refused"))})
        client = MvgHttpClient(session, base_url=BASE_URL)  # type: ignore[arg-type]

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.get_json("/x")

        assert exc_info.value.details.reason.startswith("Connection error")

    @pytest.mark.asyncio
    async def test_invalid_json_is_classified(self) -> None:
        """Given an undecodable body, when fetching, then the reason says so."""
        session = FakeSession({"/x": FakeResponse(payload=ValueError("bad json"))})
        client = MvgHttpClient(session, base_url=BASE_URL)  # type: ignore[arg-type]

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.get_json("/x")

        assert exc_info.value.details.reason == "Invalid JSON response"

    @pytest.mark.asyncio
    async def test_get_list_rejects_objects(self) -> None:
        """Given a JSON object where a list is expected, then UpstreamUnavailable is raised."""
        session = FakeSession({"/x": FakeResponse(payload={"error": "nope"})})
        client = MvgHttpClient(session, base_url=BASE_URL)  # type: ignore[arg-type]

        with pytest.raises(UpstreamUnavailable, match="Unexpected response format"):
            await client.get_list("/x")


class TestNearbyStations:
    """Tests for nearby station lookup."""

    @pytest.mark.asyncio
    async def test_returns_stations_with_local_distance(self) -> None:
        """Given nearby entries, when looking up, then distances are computed locally."""
        payload = [
            {
                "globalId": "de:09162:70",
                "name": "Universität",
                "place": "München",
                "latitude": 48.15007,
                "longitude": 11.581,
                "distanceInMeters": 9999,
                "transportTypes": ["UBAHN", "BUS"],
            },
            {
                "globalId": "de:09162:1",
                "name": "Marienplatz",
                "place": "München",
                "latitude": 48.1374,
                "longitude": 11.5755,
                "transportTypes": ["UBAHN", "SBAHN"],
            },
        ]
        session = FakeSession({"/stations/nearby": FakeResponse(payload=payload)})

        stations = await _gateway(session).nearby_stations(UNIVERSITAET)

        assert [s.global_id for s in stations] == ["de:09162:70", "de:09162:1"]
        assert stations[0].distance_in_meters == 0.0
        assert stations[1].distance_in_meters == pytest.approx(1450, abs=50)
        assert stations[0].transport_types == ("UBAHN", "BUS")
        assert session.calls[0][1] == {"latitude": 48.15007, "longitude": 11.581}

    @pytest.mark.asyncio
    async def test_truncates_to_limit(self) -> None:
        """Given more entries than the limit, then only the first ones are kept."""
        payload = [{"globalId": f"de:09162:{i}", "name": f"S{i}"} for i in range(5)]
        session = FakeSession({"/stations/nearby": FakeResponse(payload=payload)})

        stations = await _gateway(session).nearby_stations(UNIVERSITAET, limit=3)

        assert [s.name for s in stations] == ["S0", "S1", "S2"]

    @pytest.mark.asyncio
    async def test_failure_raises(self) -> None:
        """Given the endpoint fails, when looking up, then UpstreamUnavailable propagates."""
        session = FakeSession({"/stations/nearby": FakeResponse(status=503)})

        with pytest.raises(UpstreamUnavailable):
            await _gateway(session).nearby_stations(UNIVERSITAET)


class TestSearchStations:
    """Tests for station search."""

    @pytest.mark.asyncio
    async def test_blank_query_issues_no_request(self) -> None:
        """Given an empty query, when searching, then no request is made."""
        session = FakeSession()

        assert await _gateway(session).search_stations("") == []
        assert await _gateway(session).search_stations("   ") == []
        assert session.calls == []

    @pytest.mark.asyncio
    async def test_keeps_only_stations_sorted_by_distance(self) -> None:
        """Given mixed location types, when searching, then only stations remain, nearest first."""
        payload = [
            {
                "type": "STATION",
                "globalId": "de:09162:1",
                "name": "Marienplatz",
                "latitude": 48.1374,
                "longitude": 11.5755,
            },
            {"type": "ADDRESS", "name": "Marienplatz 1", "latitude": 48.137, "longitude": 11.575},
            {"type": "POI", "name": "Rathaus", "latitude": 48.137, "longitude": 11.576},
            {
                "type": "station",
                "globalId": "de:09162:70",
                "name": "Universität",
                "latitude": 48.15007,
                "longitude": 11.581,
            },
        ]
        session = FakeSession({"/locations": FakeResponse(payload=payload)})

        stations = await _gateway(session).search_stations("platz", UNIVERSITAET)

        assert [s.global_id for s in stations] == ["de:09162:70", "de:09162:1"]
        assert session.calls[0][1] == {"query": "platz"}

    @pytest.mark.asyncio
    async def test_failure_returns_empty_list(self) -> None:
        """Given the endpoint fails, when searching, then an empty list is returned."""
        session = FakeSession({"/locations": FakeResponse(status=502)})

        assert await _gateway(session).search_stations("Giesing") == []


class TestFetchServices:
    """Tests for line enrichment."""

    @pytest.mark.asyncio
    async def test_lines_are_ranked_without_bahn(self) -> None:
        """Given lines including rail and night buses, then they are ranked and rail is removed."""
        payload = [
            {"label": "N40", "transportType": "BUS"},
            {"label": "RB", "transportType": "BAHN"},
            {"label": "U3", "transportType": "UBAHN"},
            {"label": "58", "transportType": "BUS"},
            {"label": "?", "transportType": "ZEPPELIN"},
        ]
        session = FakeSession({"/lines/de:09162:70": FakeResponse(payload=payload)})

        services = await _gateway(session).fetch_services(
            Station(global_id="de:09162:70", name="Universität")
        )

        assert [s.label for s in services] == ["58", "U3", "N40"]
        assert all(s.transport_type is not TransportType.BAHN for s in services)

    @pytest.mark.asyncio
    async def test_failure_returns_empty_list(self) -> None:
        """Given the endpoint fails, when enriching, then an empty list is returned."""
        session = FakeSession({"/lines/de:09162:70": FakeResponse(status=500)})

        services = await _gateway(session).fetch_services(
            Station(global_id="de:09162:70", name="Universität")
        )

        assert services == []


class TestFetchDepartures:
    """Tests for departure loading."""

    @pytest.mark.asyncio
    async def test_departures_are_parsed(self) -> None:
        """Given departures, when fetching, then minutes are derived from the realtime time."""
        payload = [
            {
                "label": "U3",
                "transportType": "UBAHN",
                "destination": "Fürstenried West",
                "plannedDepartureTime": _millis(NOW + timedelta(minutes=4)),
                "realtimeDepartureTime": _millis(NOW + timedelta(minutes=5)),
                "delayInMinutes": 1,
                "platform": 2,
                "cancelled": False,
            },
            {
                "label": "154",
                "transportType": "BUS",
                "destination": "Arabellapark",
                "plannedDepartureTime": _millis(NOW + timedelta(minutes=10)),
                "cancelled": True,
            },
        ]
        session = FakeSession({"/departures": FakeResponse(payload=payload)})

        departures = await _gateway(session).fetch_departures(
            "de:09162:70", TransportTypeFilter(), limit=11
        )

        assert [d.label for d in departures] == ["U3", "154"]
        assert departures[0].departure_in_minutes == 5
        assert departures[0].delay_in_minutes == 1
        assert departures[0].platform == 2
        assert departures[1].departure_in_minutes == 10
        assert departures[1].cancelled is True

    @pytest.mark.asyncio
    async def test_request_carries_enabled_categories(self) -> None:
        """Given a filter, when fetching, then only enabled categories are requested."""
        session = FakeSession({"/departures": FakeResponse(payload=[])})
        transport_filter = TransportTypeFilter(bus=False, bahn=True)

        await _gateway(session).fetch_departures("de:09162:70", transport_filter, limit=7)

        assert session.calls[0][1] == {
            "globalId": "de:09162:70",
            "limit": 7,
            "transportTypes": "TRAM,UBAHN,SBAHN,BAHN",
        }

    @pytest.mark.asyncio
    async def test_all_categories_disabled_still_returns_a_list(self) -> None:
        """Given every category disabled, when fetching, then the result is still a list."""
        session = FakeSession({"/departures": FakeResponse(payload=[])})
        transport_filter = TransportTypeFilter(
            bus=False, tram=False, ubahn=False, sbahn=False, bahn=False
        )

        departures = await _gateway(session).fetch_departures("de:09162:70", transport_filter)

        assert departures == []
        assert session.calls[0][1]["transportTypes"] == ""

    @pytest.mark.asyncio
    async def test_departure_thirty_seconds_ago_shows_zero(self) -> None:
        """Given a departure 30 seconds in the past, then it shows 0 minutes."""
        payload = [
            {
                "label": "19",
                "transportType": "TRAM",
                "destination": "Pasing",
                "realtimeDepartureTime": _millis(NOW - timedelta(seconds=30)),
            }
        ]
        session = FakeSession({"/departures": FakeResponse(payload=payload)})

        departures = await _gateway(session).fetch_departures("x", TransportTypeFilter())

        assert departures[0].departure_in_minutes == 0

    @pytest.mark.asyncio
    async def test_failure_returns_empty_list(self) -> None:
        """Given the endpoint fails, when fetching, then an empty list is returned."""
        session = FakeSession({"/departures": FakeResponse(status=429)})

        departures = await _gateway(session).fetch_departures("x", TransportTypeFilter())

        assert departures == []

    @pytest.mark.asyncio
    async def test_truncates_to_limit(self) -> None:
        """Given more departures than requested, then the list is truncated."""
        payload = [
            {
                "label": str(i),
                "transportType": "BUS",
                "destination": "Ostbahnhof",
                "plannedDepartureTime": _millis(NOW + timedelta(minutes=i)),
            }
            for i in range(6)
        ]
        session = FakeSession({"/departures": FakeResponse(payload=payload)})

        departures = await _gateway(session).fetch_departures("x", TransportTypeFilter(), limit=4)

        assert len(departures) == 4


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (timedelta(seconds=-30), 0),
        (timedelta(seconds=-31), -1),
        (timedelta(seconds=29), 0),
        (timedelta(seconds=30), 1),
        (timedelta(minutes=3, seconds=10), 3),
    ],
)
def test_minutes_until_rounds_half_up(offset: timedelta, expected: int) -> None:
    """Given an offset from now, when converting to minutes, then it rounds half up."""
    assert minutes_until(NOW + offset, NOW) == expected
