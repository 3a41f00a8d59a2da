"""Transport type filter domain model."""

from __future__ import annotations

from dataclasses import dataclass, replace

from mvg_nearby.domain.models.transport_type import TransportType

FILTER_CATEGORIES: tuple[TransportType, ...] = (
    TransportType.BUS,
    TransportType.TRAM,
    TransportType.UBAHN,
    TransportType.SBAHN,
    TransportType.BAHN,
)

_FIELD_BY_CATEGORY = {
    TransportType.BUS: "bus",
    TransportType.TRAM: "tram",
    TransportType.UBAHN: "ubahn",
    TransportType.SBAHN: "sbahn",
    TransportType.BAHN: "bahn",
}


@dataclass(frozen=True)
class TransportTypeFilter:
    """Which of the five user-facing categories are shown.

    Long-distance rail (BAHN) is off by default.
    """

    bus: bool = True
    tram: bool = True
    ubahn: bool = True
    sbahn: bool = True
    bahn: bool = False

    def is_enabled(self, category: TransportType) -> bool:
        """Check whether a category is enabled."""
        if category not in _FIELD_BY_CATEGORY:
            raise ValueError(f"{category.name} is not a filter category")
        return bool(getattr(self, _FIELD_BY_CATEGORY[category]))

    def with_category(self, category: TransportType, enabled: bool) -> TransportTypeFilter:
        """Return a copy with one category set."""
        if category not in _FIELD_BY_CATEGORY:
            raise ValueError(f"{category.name} is not a filter category")
        return replace(self, **{_FIELD_BY_CATEGORY[category]: enabled})

    def toggle(self, category: TransportType) -> TransportTypeFilter:
        """Return a copy with one category flipped."""
        return self.with_category(category, not self.is_enabled(category))

    def enabled_categories(self) -> list[TransportType]:
        """Enabled categories in canonical order."""
        return [category for category in FILTER_CATEGORIES if self.is_enabled(category)]

    def as_dict(self) -> dict[str, bool]:
        """Category name to flag, in canonical order."""
        return {category.name: self.is_enabled(category) for category in FILTER_CATEGORIES}
