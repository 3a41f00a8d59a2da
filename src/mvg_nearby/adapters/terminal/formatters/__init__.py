"""Text formatters for the terminal client."""

from mvg_nearby.adapters.terminal.formatters.board_formatter import BoardFormatter

__all__ = ["BoardFormatter"]
