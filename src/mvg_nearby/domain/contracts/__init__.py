"""Contracts (protocols) shared between application and adapters."""

from mvg_nearby.domain.contracts.board_formatter import BoardFormatterProtocol

__all__ = ["BoardFormatterProtocol"]
