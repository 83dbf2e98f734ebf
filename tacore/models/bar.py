"""Bar (OHLCV candlestick) and bounded bar series models."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from tacore.errors import BarIndexError, BarOrderError

logger = logging.getLogger(__name__)


class Bar(BaseModel):
    """One OHLCV sample over the closed interval [open_time, close_time]."""

    model_config = ConfigDict(frozen=True)

    open_time: datetime
    close_time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @model_validator(mode="after")
    def _check_interval(self) -> "Bar":
        if self.open_time > self.close_time:
            raise ValueError("open_time must not be after close_time")
        return self

    @classmethod
    def of(
        cls,
        close_time: datetime,
        open: float,
        high: float,
        low: float,
        close: float,
        volume: float = 0.0,
        period: timedelta = timedelta(days=1),
    ) -> "Bar":
        """Build a bar from its close time and duration."""
        return cls(
            open_time=close_time - period,
            close_time=close_time,
            open=open,
            high=high,
            low=low,
            close=close,
            volume=volume,
        )

    @property
    def time_period(self) -> timedelta:
        return self.close_time - self.open_time

    @property
    def is_bullish(self) -> bool:
        """Check if this is a bullish (green) candle."""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """Check if this is a bearish (red) candle."""
        return self.close < self.open


class BarSeries:
    """Ordered, time-monotonic bars addressed by absolute index.

    When ``max_bar_count`` is set, appending past it evicts the oldest
    bar and advances ``begin_index``. Indices of evicted bars are never
    valid again. The series is single-writer: indicators and the
    simulator only read from it.
    """

    def __init__(
        self,
        name: str = "unnamed",
        bars: Iterable[Bar] = (),
        max_bar_count: int | None = None,
    ):
        if max_bar_count is not None and max_bar_count < 1:
            raise ValueError(f"max_bar_count must be positive, got {max_bar_count}")
        self.name = name
        self._bars: list[Bar] = []
        self._removed_bar_count = 0
        self._max_bar_count = max_bar_count
        for bar in bars:
            self.add_bar(bar)

    # ------------------------------------------------------------------
    # Index bounds
    # ------------------------------------------------------------------

    @property
    def begin_index(self) -> int:
        return self._removed_bar_count

    @property
    def end_index(self) -> int:
        """Index of the last bar (``begin_index - 1`` when empty)."""
        return self._removed_bar_count + len(self._bars) - 1

    @property
    def bar_count(self) -> int:
        return len(self._bars)

    @property
    def removed_bar_count(self) -> int:
        return self._removed_bar_count

    @property
    def max_bar_count(self) -> int | None:
        return self._max_bar_count

    @property
    def is_empty(self) -> bool:
        return not self._bars

    def __len__(self) -> int:
        return len(self._bars)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get_bar(self, index: int) -> Bar:
        """Return the bar at absolute ``index``.

        Raises:
            BarIndexError: if the index is evicted or beyond the last bar.
        """
        if index < self.begin_index or index > self.end_index:
            raise BarIndexError(index, self.begin_index, self.end_index)
        return self._bars[index - self._removed_bar_count]

    @property
    def first_bar(self) -> Bar:
        return self.get_bar(self.begin_index)

    @property
    def last_bar(self) -> Bar:
        return self.get_bar(self.end_index)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_bar(self, bar: Bar) -> None:
        """Append a bar, evicting from the front past ``max_bar_count``.

        Raises:
            BarOrderError: if ``bar.close_time`` is not after the last bar's.
        """
        if self._bars and bar.close_time <= self._bars[-1].close_time:
            raise BarOrderError(bar.close_time, self._bars[-1].close_time)
        self._bars.append(bar)
        self._evict()

    def set_max_bar_count(self, max_bar_count: int | None) -> None:
        """Change the retention window, evicting immediately if lowered."""
        if max_bar_count is not None and max_bar_count < 1:
            raise ValueError(f"max_bar_count must be positive, got {max_bar_count}")
        self._max_bar_count = max_bar_count
        self._evict()

    def _evict(self) -> None:
        if self._max_bar_count is None:
            return
        excess = len(self._bars) - self._max_bar_count
        if excess > 0:
            self._bars = self._bars[excess:]
            self._removed_bar_count += excess
            logger.debug(
                "%s: evicted %d bar(s), begin_index=%d",
                self.name, excess, self._removed_bar_count,
            )

    def __repr__(self) -> str:
        return (
            f"BarSeries(name='{self.name}', begin_index={self.begin_index}, "
            f"end_index={self.end_index}, max_bar_count={self._max_bar_count})"
        )
