"""Price, arithmetic and window helper indicators."""

from __future__ import annotations

import math

import numpy as np

from tacore.indicators.base import (
    NAN,
    CachedIndicator,
    Indicator,
    check_period,
    window_values,
)
from tacore.models.bar import BarSeries

PRICE_FIELDS = ("open", "high", "low", "close", "volume")


# =============================================================================
# Bar field indicators
# =============================================================================

class PriceIndicator(Indicator):
    """Reads one field of each bar. Not cached: the bar already is."""

    field = "close"

    def get_value(self, index: int) -> float:
        return getattr(self._series.get_bar(index), self.field)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ClosePriceIndicator(PriceIndicator):
    field = "close"


class OpenPriceIndicator(PriceIndicator):
    field = "open"


class HighPriceIndicator(PriceIndicator):
    field = "high"


class LowPriceIndicator(PriceIndicator):
    field = "low"


class VolumeIndicator(PriceIndicator):
    field = "volume"


_PRICE_INDICATORS = {
    cls.field: cls
    for cls in (
        OpenPriceIndicator,
        HighPriceIndicator,
        LowPriceIndicator,
        ClosePriceIndicator,
        VolumeIndicator,
    )
}


def price_indicator(series: BarSeries, field: str = "close") -> PriceIndicator:
    """Build the price indicator for a bar field name.

    Raises:
        ValueError: if ``field`` is not a bar price field.
    """
    cls = _PRICE_INDICATORS.get(field)
    if cls is None:
        valid = ", ".join(PRICE_FIELDS)
        raise ValueError(f"Unknown price field '{field}'. Valid: {valid}")
    return cls(series)


class MedianPriceIndicator(Indicator):
    """(high + low) / 2."""

    def __init__(self, series: BarSeries):
        super().__init__(series)

    def get_value(self, index: int) -> float:
        bar = self._series.get_bar(index)
        return (bar.high + bar.low) / 2.0


class TypicalPriceIndicator(Indicator):
    """(high + low + close) / 3."""

    def __init__(self, series: BarSeries):
        super().__init__(series)

    def get_value(self, index: int) -> float:
        bar = self._series.get_bar(index)
        return (bar.high + bar.low + bar.close) / 3.0


class ConstantIndicator(Indicator):
    """Same value at every retained index."""

    def __init__(self, series: BarSeries, value: float):
        super().__init__(series, value=value)
        self.value = float(value)

    def get_value(self, index: int) -> float:
        self._check_index(index)
        return self.value


# =============================================================================
# Arithmetic
# =============================================================================

class DifferenceIndicator(Indicator):
    """first - second."""

    def __init__(self, first: Indicator, second: Indicator):
        super().__init__(first.series, first=first, second=second)
        self.first = first
        self.second = second

    def get_value(self, index: int) -> float:
        return self.first.get_value(index) - self.second.get_value(index)


class MultiplierIndicator(Indicator):
    """indicator * coefficient."""

    def __init__(self, indicator: Indicator, coefficient: float):
        super().__init__(indicator.series, indicator=indicator, coefficient=coefficient)
        self.indicator = indicator
        self.coefficient = float(coefficient)

    def get_value(self, index: int) -> float:
        return self.indicator.get_value(index) * self.coefficient


# =============================================================================
# Bar-to-bar change
# =============================================================================

class GainIndicator(CachedIndicator):
    """Positive change since the previous value, else 0. NaN at the begin index."""

    def __init__(self, indicator: Indicator):
        super().__init__(indicator.series, indicator=indicator)
        self.indicator = indicator

    def _calculate(self, index: int) -> float:
        if index == self._series.begin_index:
            return NAN
        delta = self.indicator.get_value(index) - self.indicator.get_value(index - 1)
        if math.isnan(delta):
            return NAN
        return max(delta, 0.0)


class LossIndicator(CachedIndicator):
    """Magnitude of a negative change since the previous value, else 0."""

    def __init__(self, indicator: Indicator):
        super().__init__(indicator.series, indicator=indicator)
        self.indicator = indicator

    def _calculate(self, index: int) -> float:
        if index == self._series.begin_index:
            return NAN
        delta = self.indicator.get_value(index) - self.indicator.get_value(index - 1)
        if math.isnan(delta):
            return NAN
        return max(-delta, 0.0)


# =============================================================================
# Rolling window extremes
# =============================================================================

class HighestValueIndicator(CachedIndicator):
    """Highest value over the last ``bar_count`` values (NaN until available)."""

    def __init__(self, indicator: Indicator, bar_count: int):
        super().__init__(indicator.series, bar_count=bar_count)
        self.indicator = indicator
        self.bar_count = check_period(bar_count)

    def _calculate(self, index: int) -> float:
        if not self._has_window(index, self.bar_count):
            return NAN
        return float(np.max(window_values(self.indicator, index, self.bar_count)))


class LowestValueIndicator(CachedIndicator):
    """Lowest value over the last ``bar_count`` values (NaN until available)."""

    def __init__(self, indicator: Indicator, bar_count: int):
        super().__init__(indicator.series, bar_count=bar_count)
        self.indicator = indicator
        self.bar_count = check_period(bar_count)

    def _calculate(self, index: int) -> float:
        if not self._has_window(index, self.bar_count):
            return NAN
        return float(np.min(window_values(self.indicator, index, self.bar_count)))
