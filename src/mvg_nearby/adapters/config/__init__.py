"""Configuration adapters."""

from mvg_nearby.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
