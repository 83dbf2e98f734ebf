"""Oscillators and volatility.

RSI, stochastic %K and stochastic RSI, CCI, the awesome and
acceleration/deceleration oscillators, true range and ATR.
"""

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
from tacore.indicators.helpers import (
    ClosePriceIndicator,
    GainIndicator,
    HighestValueIndicator,
    HighPriceIndicator,
    LossIndicator,
    LowestValueIndicator,
    LowPriceIndicator,
    MedianPriceIndicator,
    TypicalPriceIndicator,
)
from tacore.indicators.moving_average import MMAIndicator, SMAIndicator
from tacore.models.bar import BarSeries


class RSIIndicator(CachedIndicator):
    """RSI using Wilder's smoothing.

    Range 0 to 100. The first value is available ``bar_count`` bars
    after the begin index (the first bar has no change to measure).
    RS = avg gain / avg loss; RSI = 100 when avg loss is 0.
    """

    def __init__(self, indicator: Indicator, bar_count: int = 14):
        super().__init__(indicator.series, bar_count=bar_count)
        check_period(bar_count)
        self.average_gain = MMAIndicator(GainIndicator(indicator), bar_count)
        self.average_loss = MMAIndicator(LossIndicator(indicator), bar_count)

    def _calculate(self, index: int) -> float:
        gain = self.average_gain.get_value(index)
        loss = self.average_loss.get_value(index)
        if math.isnan(gain) or math.isnan(loss):
            return NAN
        if loss == 0:
            return 100.0
        rs = gain / loss
        return 100.0 - (100.0 / (1.0 + rs))


class TrueRangeIndicator(CachedIndicator):
    """TR = max(high - low, |high - prev_close|, |low - prev_close|).

    At the begin index there is no previous close, so TR = high - low.
    """

    def __init__(self, series: BarSeries):
        super().__init__(series)

    def _calculate(self, index: int) -> float:
        bar = self._series.get_bar(index)
        hl = bar.high - bar.low
        if index == self._series.begin_index:
            return hl
        prev_close = self._series.get_bar(index - 1).close
        return max(hl, abs(bar.high - prev_close), abs(bar.low - prev_close))


class ATRIndicator(MMAIndicator):
    """Average True Range with Wilder's smoothing."""

    def __init__(self, series: BarSeries, bar_count: int = 14):
        super().__init__(TrueRangeIndicator(series), bar_count)


class StochasticOscillatorKIndicator(CachedIndicator):
    """%K = 100 * (close - lowest low) / (highest high - lowest low).

    NaN until ``bar_count`` bars are retained, and on a flat window.
    """

    def __init__(self, series: BarSeries, bar_count: int = 14):
        super().__init__(series, bar_count=bar_count)
        self.close = ClosePriceIndicator(series)
        self.highest_high = HighestValueIndicator(HighPriceIndicator(series), bar_count)
        self.lowest_low = LowestValueIndicator(LowPriceIndicator(series), bar_count)

    def _calculate(self, index: int) -> float:
        highest = self.highest_high.get_value(index)
        lowest = self.lowest_low.get_value(index)
        span = highest - lowest
        if math.isnan(span) or span == 0:
            return NAN
        return 100.0 * (self.close.get_value(index) - lowest) / span


class StochasticRSIIndicator(CachedIndicator):
    """Where RSI sits within its own ``bar_count`` range, from 0 to 1.

    A plain input is wrapped in ``RSIIndicator(indicator, bar_count)``;
    an RSI input is used as is. NaN on a flat or incomplete window.
    """

    def __init__(self, indicator: Indicator, bar_count: int = 14):
        super().__init__(indicator.series, bar_count=bar_count)
        check_period(bar_count)
        if not isinstance(indicator, RSIIndicator):
            indicator = RSIIndicator(indicator, bar_count)
        self.rsi = indicator
        self.highest = HighestValueIndicator(indicator, bar_count)
        self.lowest = LowestValueIndicator(indicator, bar_count)

    def _calculate(self, index: int) -> float:
        highest = self.highest.get_value(index)
        lowest = self.lowest.get_value(index)
        span = highest - lowest
        if math.isnan(span) or span == 0:
            return NAN
        return (self.rsi.get_value(index) - lowest) / span


class CCIIndicator(CachedIndicator):
    """Commodity Channel Index over the typical price.

    CCI = (tp - SMA(tp)) / (0.015 * mean absolute deviation). NaN until
    ``bar_count`` bars are retained, and when the deviation is 0.
    """

    FACTOR = 0.015

    def __init__(self, series: BarSeries, bar_count: int = 20):
        super().__init__(series, bar_count=bar_count)
        self.bar_count = check_period(bar_count)
        self.typical_price = TypicalPriceIndicator(series)

    def _calculate(self, index: int) -> float:
        if not self._has_window(index, self.bar_count):
            return NAN
        window = window_values(self.typical_price, index, self.bar_count)
        mean = window.mean()
        deviation = np.abs(window - mean).mean()
        if deviation == 0:
            return NAN
        return float((window[-1] - mean) / (self.FACTOR * deviation))


class AwesomeOscillatorIndicator(CachedIndicator):
    """SMA(median price, short) - SMA(median price, long)."""

    def __init__(self, series: BarSeries, short_bar_count: int = 5, long_bar_count: int = 34):
        if short_bar_count >= long_bar_count:
            raise ValueError(
                f"short_bar_count ({short_bar_count}) must be below "
                f"long_bar_count ({long_bar_count})"
            )
        super().__init__(
            series, short_bar_count=short_bar_count, long_bar_count=long_bar_count
        )
        median = MedianPriceIndicator(series)
        self.short_sma = SMAIndicator(median, short_bar_count)
        self.long_sma = SMAIndicator(median, long_bar_count)

    def _calculate(self, index: int) -> float:
        return self.short_sma.get_value(index) - self.long_sma.get_value(index)


class AccelerationDecelerationIndicator(CachedIndicator):
    """Awesome oscillator minus its ``short_bar_count`` SMA."""

    def __init__(self, series: BarSeries, short_bar_count: int = 5, long_bar_count: int = 34):
        super().__init__(
            series, short_bar_count=short_bar_count, long_bar_count=long_bar_count
        )
        self.awesome = AwesomeOscillatorIndicator(series, short_bar_count, long_bar_count)
        self.awesome_sma = SMAIndicator(self.awesome, short_bar_count)

    def _calculate(self, index: int) -> float:
        return self.awesome.get_value(index) - self.awesome_sma.get_value(index)
