"""12-factor configuration adapter using environment variables and optional TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mvg_nearby.domain.models.coordinates import Coordinates
from mvg_nearby.domain.models.transport_type_filter import TransportTypeFilter


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # MVG API configuration
    mvg_api_base_url: str = Field(
        default="https://www.mvg.de/api/bgw-pt/v3",
        description="Base URL of the MVG public transport API",
    )
    mvg_api_timeout: int = Field(default=10, description="Timeout for MVG API requests in seconds")
    sleep_ms_between_calls: int = Field(
        default=0,
        description="Minimum time in milliseconds between MVG API calls to avoid rate limiting",
    )

    # Result sizes
    nearby_limit: int = Field(
        default=3, description="Number of nearby stations shown (also caps the merged list)"
    )
    departure_limit: int = Field(
        default=11, description="Maximum number of departures fetched per station"
    )
    search_result_limit: int = Field(
        default=6, description="Maximum number of station search results offered"
    )
    search_debounce_ms: int = Field(
        default=300, description="Delay after the last keystroke before a search is issued"
    )

    # Location
    fallback_latitude: float = Field(
        default=48.1407, description="Latitude used when no position is available"
    )
    fallback_longitude: float = Field(
        default=11.5583, description="Longitude used when no position is available"
    )
    latitude: float | None = Field(
        default=None, description="Fixed latitude overriding geolocation (requires longitude)"
    )
    longitude: float | None = Field(
        default=None, description="Fixed longitude overriding geolocation (requires latitude)"
    )
    geolocation_enabled: bool = Field(
        default=True, description="Allow looking up the position from the public IP address"
    )
    geolocation_url: str = Field(
        default="http://ip-api.com/json",
        description="IP geolocation endpoint returning JSON with 'lat' and 'lon'",
    )
    geolocation_timeout: int = Field(
        default=5, description="Timeout for the geolocation request in seconds"
    )

    # Transport type filter defaults
    show_bus: bool = Field(default=True, description="Show bus departures")
    show_tram: bool = Field(default=True, description="Show tram departures")
    show_ubahn: bool = Field(default=True, description="Show U-Bahn departures")
    show_sbahn: bool = Field(default=True, description="Show S-Bahn departures")
    show_bahn: bool = Field(default=False, description="Show regional and long-distance trains")

    # Display configuration
    timezone: str = Field(
        default="Europe/Berlin",
        description="Timezone for displaying the update time (IANA timezone name)",
    )

    # Optional TOML config file with [location], [filter] and [api] sections
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file",
    )

    @field_validator("latitude", "fallback_latitude")
    @classmethod
    def validate_latitude(cls, v: float | None) -> float | None:
        """Validate latitude is within -90..90 degrees."""
        if v is not None and not -90.0 <= v <= 90.0:
            raise ValueError("latitude must be between -90 and 90 degrees")
        return v

    @field_validator("longitude", "fallback_longitude")
    @classmethod
    def validate_longitude(cls, v: float | None) -> float | None:
        """Validate longitude is within -180..180 degrees."""
        if v is not None and not -180.0 <= v <= 180.0:
            raise ValueError("longitude must be between -180 and 180 degrees")
        return v

    @field_validator("nearby_limit", "departure_limit", "search_result_limit")
    @classmethod
    def validate_positive_limit(cls, v: int) -> int:
        """Validate limits are positive."""
        if v < 1:
            raise ValueError("limits must be at least 1")
        return v

    def load_toml(self) -> dict[str, Any]:
        """Load the TOML file, if configured, and apply its settings.

        Returns:
            The parsed TOML data, or an empty dict if no file is configured.
        """
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        location = toml_data.get("location", {})
        for key in (
            "latitude",
            "longitude",
            "fallback_latitude",
            "fallback_longitude",
            "geolocation_enabled",
            "geolocation_url",
        ):
            if key in location:
                setattr(self, key, location[key])

        transport_filter = toml_data.get("filter", {})
        for category in ("bus", "tram", "ubahn", "sbahn", "bahn"):
            if category in transport_filter:
                setattr(self, f"show_{category}", transport_filter[category])

        api_config = toml_data.get("api", {})
        for key in (
            "mvg_api_timeout",
            "sleep_ms_between_calls",
            "nearby_limit",
            "departure_limit",
            "search_result_limit",
        ):
            if key in api_config:
                setattr(self, key, api_config[key])

        return toml_data

    @property
    def fallback_position(self) -> Coordinates:
        """Fixed position used when geolocation fails."""
        return Coordinates(self.fallback_latitude, self.fallback_longitude)

    @property
    def position_override(self) -> Coordinates | None:
        """Configured fixed position, if both coordinates are set."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(self.latitude, self.longitude)

    def initial_filter(self) -> TransportTypeFilter:
        """Transport type filter built from the show_* settings."""
        return TransportTypeFilter(
            bus=self.show_bus,
            tram=self.show_tram,
            ubahn=self.show_ubahn,
            sbahn=self.show_sbahn,
            bahn=self.show_bahn,
        )
