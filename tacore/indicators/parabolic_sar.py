"""Parabolic SAR (stop and reverse) indicator.

A trend-following stop that trails price and flips side on reversal.

How it works:
  1. First bar: undefined (NaN).
  2. Second bar: uptrend if close[0] < close[1]. SAR is seeded at the
     bar's low in an uptrend, at its high in a downtrend.
  3. Uptrend: SAR = prior + AF * (EP - prior). The trend goes on while
     low > SAR; EP becomes the highest high of the bars after the trend
     start, and each new trend extreme ratchets AF up by the increment
     (clamped at the maximum). When low <= SAR the trend flips: SAR
     jumps to the prior trend's extreme, AF resets and EP starts at the
     flip bar's low.
  4. Downtrend mirrors it with highs/lows swapped. An uptrend goes on
     only while low > SAR; a downtrend flips as soon as high >= SAR.

Parameters:
  - start:     initial acceleration factor (default 0.02)
  - increment: AF step per new extreme (default 0.02)
  - maximum:   AF ceiling (default 0.20)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, model_validator

from tacore.indicators.base import NAN, RecursiveCachedIndicator
from tacore.models.bar import BarSeries


class ParabolicSarConfig(BaseModel):
    """Acceleration factor parameters."""

    model_config = ConfigDict(frozen=True)

    start: float = 0.02
    increment: float = 0.02
    maximum: float = 0.20

    @model_validator(mode="after")
    def _check_bounds(self) -> "ParabolicSarConfig":
        if self.start <= 0 or self.increment <= 0:
            raise ValueError("start and increment must be positive")
        if self.maximum < self.start:
            raise ValueError("maximum must not be below start")
        return self


@dataclass
class _SarState:
    uptrend: bool = False
    trend_start_index: int = 0
    acceleration: float = 0.0
    # EP used by the SAR formula
    extreme_point: float = NAN
    # Best extreme of the current trend (SAR target on the next flip)
    trend_extreme: float = NAN
    # Running high (uptrend) / low (downtrend) of bars after the trend start
    window_extreme: float = NAN


class ParabolicSarIndicator(RecursiveCachedIndicator):
    """Parabolic SAR with per-instance trend state.

    State advances one bar at a time as the cache is filled forward.
    It is discarded and re-seeded at the new begin index when the
    series evicts bars.
    """

    def __init__(self, series: BarSeries, config: ParabolicSarConfig | None = None):
        self.config = config or ParabolicSarConfig()
        super().__init__(
            series,
            start=self.config.start,
            increment=self.config.increment,
            maximum=self.config.maximum,
        )
        self._state = _SarState()

    @property
    def is_uptrend(self) -> bool:
        """Trend direction as of the last computed bar."""
        return self._state.uptrend

    @property
    def acceleration(self) -> float:
        """Acceleration factor as of the last computed bar."""
        return self._state.acceleration

    def _reset_state(self) -> None:
        self._state = _SarState()

    def _calculate(self, index: int) -> float:
        begin = self._series.begin_index
        if index == begin:
            return NAN

        bar = self._series.get_bar(index)
        if index == begin + 1:
            return self._seed(index, bar)

        state = self._state
        prior = self._prior_value(index)
        af = state.acceleration

        if state.uptrend:
            sar = prior + af * (state.extreme_point - prior)
            if bar.low > sar:
                state.window_extreme = max(state.window_extreme, bar.high)
                state.extreme_point = state.window_extreme
                if state.extreme_point > state.trend_extreme:
                    self._increment_acceleration()
                    state.trend_extreme = state.extreme_point
                return sar
            # Flip to downtrend at the prior trend's highest point
            sar = state.trend_extreme
            self._start_trend(index, uptrend=False, extreme=bar.low)
            return sar

        sar = prior - af * (prior - state.extreme_point)
        if bar.high < sar:
            state.window_extreme = min(state.window_extreme, bar.low)
            state.extreme_point = state.window_extreme
            if state.extreme_point < state.trend_extreme:
                self._increment_acceleration()
                state.trend_extreme = state.extreme_point
            return sar
        # Flip to uptrend at the prior trend's lowest point
        sar = state.trend_extreme
        self._start_trend(index, uptrend=True, extreme=bar.high)
        return sar

    def _seed(self, index: int, bar) -> float:
        state = self._state
        first_close = self._series.get_bar(index - 1).close
        state.uptrend = first_close < bar.close
        state.trend_start_index = index - 1
        state.acceleration = self.config.start
        sar = bar.low if state.uptrend else bar.high
        state.extreme_point = sar
        state.trend_extreme = sar
        state.window_extreme = bar.high if state.uptrend else bar.low
        return sar

    def _start_trend(self, index: int, uptrend: bool, extreme: float) -> None:
        state = self._state
        state.uptrend = uptrend
        state.trend_start_index = index
        state.acceleration = self.config.start
        state.extreme_point = extreme
        state.trend_extreme = extreme
        state.window_extreme = -math.inf if uptrend else math.inf

    def _increment_acceleration(self) -> None:
        state = self._state
        state.acceleration = min(state.acceleration + self.config.increment, self.config.maximum)
