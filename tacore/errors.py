"""Exception types raised by the core.

Range and ordering errors are fatal to the calling operation. Trading
record invariant violations are not exceptions (see TradingRecord).
"""

from __future__ import annotations


class TaCoreError(Exception):
    """Base exception for all core errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class BarIndexError(TaCoreError, IndexError):
    """Index outside the retained ``[begin_index, end_index]`` range."""

    def __init__(self, index: int, begin_index: int, end_index: int):
        super().__init__(
            f"Index {index} out of range",
            {"begin_index": begin_index, "end_index": end_index},
        )
        self.index = index
        self.begin_index = begin_index
        self.end_index = end_index


class BarOrderError(TaCoreError, ValueError):
    """Bar appended with a close time not after the last bar's close time."""

    def __init__(self, close_time, last_close_time):
        super().__init__(
            "Bar close time must be after the last bar close time",
            {"close_time": close_time, "last_close_time": last_close_time},
        )
        self.close_time = close_time
        self.last_close_time = last_close_time
