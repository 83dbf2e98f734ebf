"""Moving averages: SMA, WMA, EMA, Wilder's MMA and MACD.

SMA is a plain windowed mean, WMA a linearly weighted one. EMA and
MMA are recursive: NaN for the first ``bar_count - 1`` values, seeded
with the SMA of the first full window, then ``prev + k * (value - prev)``.
"""

from __future__ import annotations

import math

import numpy as np

from tacore.indicators.base import (
    NAN,
    CachedIndicator,
    Indicator,
    RecursiveCachedIndicator,
    check_period,
    window_values,
)
from tacore.indicators.helpers import DifferenceIndicator


class SMAIndicator(CachedIndicator):
    """Simple Moving Average. NaN until ``bar_count`` values are retained."""

    def __init__(self, indicator: Indicator, bar_count: int):
        super().__init__(indicator.series, bar_count=bar_count)
        self.indicator = indicator
        self.bar_count = check_period(bar_count)

    def _calculate(self, index: int) -> float:
        if not self._has_window(index, self.bar_count):
            return NAN
        return float(np.mean(window_values(self.indicator, index, self.bar_count)))


class WMAIndicator(CachedIndicator):
    """Weighted Moving Average, weights 1..bar_count with the newest heaviest."""

    def __init__(self, indicator: Indicator, bar_count: int):
        super().__init__(indicator.series, bar_count=bar_count)
        self.indicator = indicator
        self.bar_count = check_period(bar_count)
        self._weights = np.arange(1, bar_count + 1, dtype=np.float64)

    def _calculate(self, index: int) -> float:
        if not self._has_window(index, self.bar_count):
            return NAN
        window = window_values(self.indicator, index, self.bar_count)
        return float(np.dot(window, self._weights) / self._weights.sum())


class _SmoothedAverageIndicator(RecursiveCachedIndicator):
    """Exponential smoothing with a fixed multiplier."""

    def __init__(self, indicator: Indicator, bar_count: int, multiplier: float):
        super().__init__(indicator.series, bar_count=bar_count)
        self.indicator = indicator
        self.bar_count = bar_count
        self.multiplier = multiplier

    def _calculate(self, index: int) -> float:
        if not self._has_window(index, self.bar_count):
            return NAN
        prev = self._prior_value(index)
        if math.isnan(prev):
            # (Re)seed with the SMA of the first full window
            return float(np.mean(window_values(self.indicator, index, self.bar_count)))
        value = self.indicator.get_value(index)
        return prev + self.multiplier * (value - prev)


class EMAIndicator(_SmoothedAverageIndicator):
    """Exponential Moving Average, k = 2 / (bar_count + 1)."""

    def __init__(self, indicator: Indicator, bar_count: int):
        check_period(bar_count)
        super().__init__(indicator, bar_count, 2.0 / (bar_count + 1))


class MMAIndicator(_SmoothedAverageIndicator):
    """Modified (Wilder's) Moving Average, k = 1 / bar_count."""

    def __init__(self, indicator: Indicator, bar_count: int):
        check_period(bar_count)
        super().__init__(indicator, bar_count, 1.0 / bar_count)


class MACDIndicator(DifferenceIndicator):
    """Moving Average Convergence Divergence: EMA(short) - EMA(long)."""

    def __init__(self, indicator: Indicator, short_bar_count: int = 12, long_bar_count: int = 26):
        if short_bar_count >= long_bar_count:
            raise ValueError(
                f"short_bar_count ({short_bar_count}) must be below "
                f"long_bar_count ({long_bar_count})"
            )
        super().__init__(
            EMAIndicator(indicator, short_bar_count),
            EMAIndicator(indicator, long_bar_count),
        )
        self.params = {"short_bar_count": short_bar_count, "long_bar_count": long_bar_count}
