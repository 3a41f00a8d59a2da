"""Refresh state domain model."""

from enum import Enum


class RefreshState(Enum):
    """Load state of a refresh controller."""

    IDLE = "idle"
    LOADING = "loading"
