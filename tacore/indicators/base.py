"""Indicator base classes and per-index caching.

Every indicator is a function ``index -> float`` over a BarSeries (or
over other indicators). The value at index i only depends on data at
indices <= i. Undefined values are NaN, which makes every comparison
against them false.

Two caching strategies:

- ``CachedIndicator``: lazy dict cache, filled on first access of each
  index.
- ``RecursiveCachedIndicator``: contiguous cache filled by iterating
  forward from the lowest missing index, for indicators whose value
  depends on their own prior value. No recursive call chains.

Eviction policy: when the series begin index advances, every cache is
discarded and recursive state is re-seeded at the new begin index, so
indicator values are always a pure function of the retained window.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod

import numpy as np

from tacore.errors import BarIndexError
from tacore.models.bar import BarSeries

logger = logging.getLogger(__name__)

NAN = math.nan


class Indicator(ABC):
    """Base class for all technical indicators."""

    def __init__(self, series: BarSeries, **params):
        self._series = series
        self.params = params

    @property
    def series(self) -> BarSeries:
        return self._series

    @abstractmethod
    def get_value(self, index: int) -> float:
        """Return the indicator value at absolute ``index``.

        Raises:
            BarIndexError: outside ``[begin_index, end_index]``.
        """

    def __getitem__(self, index: int) -> float:
        return self.get_value(index)

    def _check_index(self, index: int) -> None:
        series = self._series
        if index < series.begin_index or index > series.end_index:
            raise BarIndexError(index, series.begin_index, series.end_index)

    def _has_window(self, index: int, bar_count: int) -> bool:
        """True when ``bar_count`` bars ending at ``index`` are retained."""
        return index - bar_count + 1 >= self._series.begin_index

    def __repr__(self) -> str:
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.__class__.__name__}({params_str})"


def window_values(indicator: Indicator, index: int, bar_count: int) -> np.ndarray:
    """Values of ``indicator`` over the ``bar_count`` indices ending at ``index``."""
    start = index - bar_count + 1
    return np.fromiter(
        (indicator.get_value(i) for i in range(start, index + 1)),
        dtype=np.float64,
        count=bar_count,
    )


def check_period(bar_count: int, name: str = "bar_count") -> int:
    if bar_count < 1:
        raise ValueError(f"{name} must be positive, got {bar_count}")
    return bar_count


class CachedIndicator(Indicator):
    """Indicator memoizing each computed index."""

    def __init__(self, series: BarSeries, **params):
        super().__init__(series, **params)
        self._cache: dict[int, float] = {}
        self._cache_begin = series.begin_index

    def get_value(self, index: int) -> float:
        self._check_index(index)
        self._sync_with_series()
        value = self._cache.get(index)
        if value is None:
            value = self._calculate(index)
            self._cache[index] = value
        return value

    @abstractmethod
    def _calculate(self, index: int) -> float:
        """Compute the value at ``index`` (index already range-checked)."""

    def _sync_with_series(self) -> None:
        begin = self._series.begin_index
        if begin != self._cache_begin:
            logger.debug("%r: begin index moved to %d, resetting cache", self, begin)
            self._cache_begin = begin
            self.reset()

    def reset(self) -> None:
        """Discard all cached values."""
        self._cache.clear()

    @property
    def cached_count(self) -> int:
        return len(self._cache)


class RecursiveCachedIndicator(CachedIndicator):
    """Indicator whose value at i depends on its own value at i-1.

    Values are produced by iterating forward from the lowest uncached
    index up to the requested one, so the first query of index i costs
    O(i - last cached index) and never grows the call stack.
    Subclasses keep any hidden state on the instance and clear it in
    ``_reset_state``.
    """

    def __init__(self, series: BarSeries, **params):
        super().__init__(series, **params)
        self._values: list[float] = []

    def get_value(self, index: int) -> float:
        self._check_index(index)
        self._sync_with_series()
        offset = index - self._cache_begin
        while len(self._values) <= offset:
            next_index = self._cache_begin + len(self._values)
            self._values.append(self._calculate(next_index))
        return self._values[offset]

    def _prior_value(self, index: int) -> float:
        """Cached value at ``index - 1``; NaN at the begin index."""
        offset = index - 1 - self._cache_begin
        if offset < 0:
            return NAN
        return self._values[offset]

    def reset(self) -> None:
        self._values.clear()
        self._reset_state()

    def _reset_state(self) -> None:
        """Hook for subclasses holding state beyond the cached values."""

    @property
    def cached_count(self) -> int:
        return len(self._values)
