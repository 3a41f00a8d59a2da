"""Service domain model."""

from dataclasses import dataclass

from mvg_nearby.domain.models.transport_type import TransportType


@dataclass(frozen=True)
class Service:
    """A transit line calling at a station."""

    label: str
    transport_type: TransportType
    train_type: str = ""
    network: str = ""
    diva_id: str = ""
    sev: bool = False  # Replacement service (Schienenersatzverkehr)

    @property
    def is_night_service(self) -> bool:
        """Night lines are labelled with a leading "N" (e.g. N27, N40)."""
        return self.label.startswith("N")
