"""Station domain model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from mvg_nearby.domain.models.service import Service


@dataclass(frozen=True)
class Unenriched:
    """Serviced lines have not been loaded (or could not be loaded)."""


@dataclass(frozen=True)
class Enriched:
    """Serviced lines loaded from the line endpoint."""

    services: tuple[Service, ...]


StationServices = Unenriched | Enriched

UNENRICHED = Unenriched()


@dataclass(frozen=True)
class Station:
    """Represents a public transport station.

    Identity is ``global_id``. Instances are snapshots: enrichment and distance
    updates produce new instances instead of mutating existing ones.
    """

    global_id: str
    name: str
    place: str = ""
    transport_types: tuple[str, ...] = ()
    distance_in_meters: float = 0.0
    services: StationServices = field(default=UNENRICHED)
    latitude: float | None = None
    longitude: float | None = None

    def with_services(self, services: list[Service] | tuple[Service, ...]) -> Station:
        """Return a copy marked as enriched with the given services."""
        return replace(self, services=Enriched(tuple(services)))

    def with_distance(self, distance_in_meters: float) -> Station:
        """Return a copy with the given distance."""
        return replace(self, distance_in_meters=max(0.0, distance_in_meters))

    @property
    def is_enriched(self) -> bool:
        """Whether serviced lines are available."""
        return isinstance(self.services, Enriched)
