"""Terminal presentation adapters."""

from mvg_nearby.adapters.terminal.formatters import BoardFormatter

__all__ = ["BoardFormatter"]
