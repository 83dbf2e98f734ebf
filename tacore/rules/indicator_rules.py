"""Rules comparing indicators with each other or with thresholds.

The second operand may be an Indicator or a plain number. Comparisons
involving NaN are false, so these rules stay inactive during warm-up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

import numpy as np

from tacore.indicators.base import Indicator, check_period, window_values
from tacore.rules.base import Rule

if TYPE_CHECKING:
    from tacore.models.trading import TradingRecord

Operand = Union[Indicator, float]


def _value_at(operand: Operand, index: int) -> float:
    if isinstance(operand, Indicator):
        return operand.get_value(index)
    return float(operand)


@dataclass(frozen=True)
class OverIndicatorRule(Rule):
    """first > second."""

    first: Indicator
    second: Operand

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        return self.first.get_value(index) > _value_at(self.second, index)


@dataclass(frozen=True)
class UnderIndicatorRule(Rule):
    """first < second."""

    first: Indicator
    second: Operand

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        return self.first.get_value(index) < _value_at(self.second, index)


@dataclass(frozen=True)
class IsEqualRule(Rule):
    """first == second. NaN never equals anything."""

    first: Indicator
    second: Operand

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        return self.first.get_value(index) == _value_at(self.second, index)


@dataclass(frozen=True)
class CrossedUpIndicatorRule(Rule):
    """first crosses above second: first <= second at i-1, first > second at i.

    Never satisfied at the series begin index.
    """

    first: Indicator
    second: Operand

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        current = self.first.get_value(index)
        if index <= self.first.series.begin_index:
            return False
        prev = self.first.get_value(index - 1)
        return (
            prev <= _value_at(self.second, index - 1)
            and current > _value_at(self.second, index)
        )


@dataclass(frozen=True)
class CrossedDownIndicatorRule(Rule):
    """first crosses below second: first >= second at i-1, first < second at i."""

    first: Indicator
    second: Operand

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        current = self.first.get_value(index)
        if index <= self.first.series.begin_index:
            return False
        prev = self.first.get_value(index - 1)
        return (
            prev >= _value_at(self.second, index - 1)
            and current < _value_at(self.second, index)
        )


@dataclass(frozen=True)
class IsRisingRule(Rule):
    """Each of the last ``bar_count`` values strictly above its predecessor.

    False while the window would reach before the begin index.
    """

    indicator: Indicator
    bar_count: int = 1

    def __post_init__(self):
        check_period(self.bar_count)

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        self.indicator.get_value(index)  # range check
        if index - self.bar_count < self.indicator.series.begin_index:
            return False
        values = window_values(self.indicator, index, self.bar_count + 1)
        return bool(np.all(np.diff(values) > 0))


@dataclass(frozen=True)
class IsFallingRule(Rule):
    """Each of the last ``bar_count`` values strictly below its predecessor."""

    indicator: Indicator
    bar_count: int = 1

    def __post_init__(self):
        check_period(self.bar_count)

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        self.indicator.get_value(index)  # range check
        if index - self.bar_count < self.indicator.series.begin_index:
            return False
        values = window_values(self.indicator, index, self.bar_count + 1)
        return bool(np.all(np.diff(values) < 0))
