"""Tests for the rule algebra."""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from tacore.indicators import ClosePriceIndicator, SMAIndicator
from tacore.models import Bar, BarSeries, OrderSide, TradingRecord
from tacore.rules import (
    AndRule,
    BooleanRule,
    CrossedDownIndicatorRule,
    CrossedUpIndicatorRule,
    IsEqualRule,
    IsFallingRule,
    IsRisingRule,
    NotRule,
    OverIndicatorRule,
    StopGainRule,
    StopLossRule,
    UnderIndicatorRule,
    WaitForRule,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_series(closes) -> BarSeries:
    return BarSeries(
        "rules",
        [
            Bar.of(START + timedelta(days=i + 1), open=c, high=c + 1, low=c - 1, close=c)
            for i, c in enumerate(closes)
        ],
    )


def satisfied(rule, series: BarSeries, record: TradingRecord | None = None) -> list[bool]:
    return [rule.is_satisfied(i, record) for i in range(series.begin_index, series.end_index + 1)]


BOOLS = [True, False]


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


class TestBooleanAlgebra:
    @pytest.mark.parametrize("a,b", list(itertools.product(BOOLS, BOOLS)))
    def test_truth_tables(self, a, b):
        first, second = BooleanRule(a), BooleanRule(b)
        assert (first & second).is_satisfied(0) == (a and b)
        assert (first | second).is_satisfied(0) == (a or b)
        assert (first ^ second).is_satisfied(0) == (a != b)
        assert (~first).is_satisfied(0) == (not a)

    @pytest.mark.parametrize("a,b", list(itertools.product(BOOLS, BOOLS)))
    def test_named_methods_match_operators(self, a, b):
        first, second = BooleanRule(a), BooleanRule(b)
        assert first.and_(second) == first & second
        assert first.or_(second) == first | second
        assert first.xor(second) == first ^ second
        assert first.negate() == ~first

    def test_composition_leaves_operands_untouched(self):
        first, second = BooleanRule(True), BooleanRule(False)
        combined = first & second
        assert isinstance(combined, AndRule)
        assert combined.first is first
        assert combined.second is second
        assert first.value is True and second.value is False

    def test_structural_equality(self):
        series = make_series([1, 2])
        close = ClosePriceIndicator(series)
        assert OverIndicatorRule(close, 5) == OverIndicatorRule(close, 5)
        assert ~OverIndicatorRule(close, 5) == NotRule(OverIndicatorRule(close, 5))
        assert OverIndicatorRule(close, 5) != UnderIndicatorRule(close, 5)

    def test_algebra_over_indicator_rules(self):
        series = make_series([10, 11, 9, 12, 15])
        close = ClosePriceIndicator(series)
        over = OverIndicatorRule(close, 10)
        under = UnderIndicatorRule(close, 12)
        for i in range(5):
            assert (over & under).is_satisfied(i) == (over.is_satisfied(i) and under.is_satisfied(i))
            assert (over ^ under).is_satisfied(i) == (over.is_satisfied(i) != under.is_satisfied(i))


# ---------------------------------------------------------------------------
# Indicator rules
# ---------------------------------------------------------------------------


class TestThresholdRules:
    def test_over_and_under_constant(self):
        series = make_series([10, 11, 9])
        close = ClosePriceIndicator(series)
        assert satisfied(OverIndicatorRule(close, 10), series) == [False, True, False]
        assert satisfied(UnderIndicatorRule(close, 10), series) == [False, False, True]

    def test_nan_is_never_satisfied(self):
        series = make_series([10, 11, 9])
        sma = SMAIndicator(ClosePriceIndicator(series), 3)
        assert not OverIndicatorRule(sma, 0).is_satisfied(0)
        assert not UnderIndicatorRule(sma, 1000).is_satisfied(0)

    def test_indicator_operand(self):
        series = make_series([10, 11, 9, 12])
        close = ClosePriceIndicator(series)
        sma = SMAIndicator(close, 2)
        assert satisfied(OverIndicatorRule(close, sma), series) == [False, True, False, True]


class TestIsEqualRule:
    def test_equal_to_constant(self):
        series = make_series([10, 11, 10])
        rule = IsEqualRule(ClosePriceIndicator(series), 10)
        assert satisfied(rule, series) == [True, False, True]

    def test_equal_to_indicator(self):
        series = make_series([10, 12, 12])
        close = ClosePriceIndicator(series)
        sma = SMAIndicator(close, 2)
        assert satisfied(IsEqualRule(close, sma), series) == [False, False, True]


class TestCrossRules:
    def test_crossed_up(self):
        series = make_series([10, 11, 9, 12, 15])
        rule = CrossedUpIndicatorRule(ClosePriceIndicator(series), 10.5)
        assert satisfied(rule, series) == [False, True, False, True, False]

    def test_crossed_down(self):
        series = make_series([10, 11, 9, 12, 15])
        rule = CrossedDownIndicatorRule(ClosePriceIndicator(series), 10.5)
        assert satisfied(rule, series) == [False, False, True, False, False]

    def test_touch_then_cross_counts(self):
        series = make_series([10, 10, 11])
        rule = CrossedUpIndicatorRule(ClosePriceIndicator(series), 10)
        assert satisfied(rule, series) == [False, False, True]

    def test_out_of_range(self):
        series = make_series([10, 11])
        rule = CrossedUpIndicatorRule(ClosePriceIndicator(series), 10)
        with pytest.raises(IndexError):
            rule.is_satisfied(2)


class TestMonotonicRules:
    CLOSES = [10, 11, 12, 11, 12, 13]

    def test_is_rising(self):
        series = make_series(self.CLOSES)
        rule = IsRisingRule(ClosePriceIndicator(series), 2)
        assert satisfied(rule, series) == [False, False, True, False, False, True]

    def test_is_falling(self):
        series = make_series([13, 12, 11, 12, 11, 10])
        rule = IsFallingRule(ClosePriceIndicator(series), 2)
        assert satisfied(rule, series) == [False, False, True, False, False, True]

    def test_equal_values_are_not_rising(self):
        series = make_series([10, 10, 11])
        rule = IsRisingRule(ClosePriceIndicator(series), 2)
        assert not rule.is_satisfied(2)

    def test_invalid_bar_count(self):
        series = make_series([10])
        with pytest.raises(ValueError):
            IsRisingRule(ClosePriceIndicator(series), 0)


# ---------------------------------------------------------------------------
# Position rules
# ---------------------------------------------------------------------------


class TestStopRules:
    CLOSES = [100, 98, 99.5, 103, 101]

    def _record(self) -> TradingRecord:
        record = TradingRecord()
        record.enter(0, 100.0)
        return record

    def test_stop_loss(self):
        series = make_series(self.CLOSES)
        rule = StopLossRule(ClosePriceIndicator(series), 1)
        assert satisfied(rule, series, self._record()) == [False, True, False, False, False]

    def test_stop_gain(self):
        series = make_series(self.CLOSES)
        rule = StopGainRule(ClosePriceIndicator(series), 2)
        assert satisfied(rule, series, self._record()) == [False, False, False, True, False]

    def test_inactive_without_open_trade(self):
        series = make_series(self.CLOSES)
        rule = StopLossRule(ClosePriceIndicator(series), 1)
        assert not rule.is_satisfied(1)
        assert not rule.is_satisfied(1, TradingRecord())

    def test_negative_percentage_rejected(self):
        series = make_series(self.CLOSES)
        with pytest.raises(ValueError):
            StopGainRule(ClosePriceIndicator(series), -1)


class TestWaitForRule:
    def test_waits_bar_count_after_entry(self):
        record = TradingRecord()
        record.enter(2, 10.0)
        rule = WaitForRule(OrderSide.ENTRY, 3)
        assert not rule.is_satisfied(4, record)
        assert rule.is_satisfied(5, record)

    def test_without_order(self):
        rule = WaitForRule(OrderSide.EXIT, 1)
        assert not rule.is_satisfied(5)
        assert not rule.is_satisfied(5, TradingRecord())
