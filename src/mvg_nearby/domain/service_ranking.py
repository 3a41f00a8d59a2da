"""Ordering of the lines serving a station."""

from collections.abc import Iterable

from mvg_nearby.domain.models.service import Service
from mvg_nearby.domain.models.transport_type import TRANSPORT_TYPE_ORDER, TransportType


def _rank_key(service: Service) -> tuple[bool, int]:
    return (service.is_night_service, TRANSPORT_TYPE_ORDER.index(service.transport_type))


def rank_services(services: Iterable[Service]) -> list[Service]:
    """Drop long-distance rail and sort day lines before night lines, then by mode.

    Python's sort is stable, so ties keep their input order.
    """
    return sorted(
        (service for service in services if service.transport_type is not TransportType.BAHN),
        key=_rank_key,
    )
