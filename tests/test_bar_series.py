"""Tests for Bar and BarSeries."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from tacore.errors import BarIndexError, BarOrderError
from tacore.models import Bar, BarSeries


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_bar(i: int, close: float = 100.0) -> Bar:
    return Bar.of(
        START + timedelta(days=i + 1),
        open=close,
        high=close + 1,
        low=close - 1,
        close=close,
    )


def make_series(count: int, max_bar_count: int | None = None) -> BarSeries:
    return BarSeries(
        "test",
        [make_bar(i, 100.0 + i) for i in range(count)],
        max_bar_count=max_bar_count,
    )


# ---------------------------------------------------------------------------
# Bar
# ---------------------------------------------------------------------------


class TestBar:
    def test_of_derives_open_time(self):
        bar = Bar.of(START, 1, 2, 0.5, 1.5, period=timedelta(hours=1))
        assert bar.open_time == START - timedelta(hours=1)
        assert bar.time_period == timedelta(hours=1)

    def test_open_after_close_rejected(self):
        with pytest.raises(ValidationError):
            Bar(
                open_time=START + timedelta(days=1),
                close_time=START,
                open=1, high=1, low=1, close=1,
            )

    def test_bar_is_immutable(self):
        bar = make_bar(0)
        with pytest.raises(ValidationError):
            bar.close = 5.0

    def test_bullish_bearish(self):
        up = Bar.of(START, open=10, high=12, low=9, close=11)
        down = Bar.of(START, open=11, high=12, low=9, close=10)
        assert up.is_bullish and not up.is_bearish
        assert down.is_bearish and not down.is_bullish


# ---------------------------------------------------------------------------
# BarSeries
# ---------------------------------------------------------------------------


class TestBarSeriesBounds:
    def test_empty_series(self):
        series = BarSeries("empty")
        assert series.is_empty
        assert series.begin_index == 0
        assert series.end_index == -1
        assert len(series) == 0

    def test_indices(self):
        series = make_series(5)
        assert series.begin_index == 0
        assert series.end_index == 4
        assert series.bar_count == 5
        assert series.first_bar.close == 100.0
        assert series.last_bar.close == 104.0

    def test_get_bar_out_of_range(self):
        series = make_series(3)
        with pytest.raises(BarIndexError):
            series.get_bar(3)
        with pytest.raises(BarIndexError):
            series.get_bar(-1)

    def test_index_error_is_index_error(self):
        series = make_series(1)
        with pytest.raises(IndexError):
            series.get_bar(7)


class TestBarSeriesAppend:
    def test_non_monotonic_close_time_rejected(self):
        series = make_series(3)
        with pytest.raises(BarOrderError):
            series.add_bar(make_bar(1))
        assert series.bar_count == 3

    def test_equal_close_time_rejected(self):
        series = make_series(3)
        with pytest.raises(ValueError):
            series.add_bar(make_bar(2))

    def test_append_advances_end(self):
        series = make_series(2)
        series.add_bar(make_bar(2, 50.0))
        assert series.end_index == 2
        assert series.get_bar(2).close == 50.0


class TestBarSeriesEviction:
    def test_eviction_advances_begin(self):
        series = make_series(5, max_bar_count=3)
        assert series.begin_index == 2
        assert series.end_index == 4
        assert series.removed_bar_count == 2
        assert series.first_bar.close == 102.0

    def test_evicted_index_invalid(self):
        series = make_series(5, max_bar_count=3)
        with pytest.raises(BarIndexError) as exc_info:
            series.get_bar(1)
        assert exc_info.value.begin_index == 2
        assert exc_info.value.end_index == 4

    def test_lowering_max_evicts_immediately(self):
        series = make_series(5)
        series.set_max_bar_count(2)
        assert series.begin_index == 3
        assert series.bar_count == 2

    def test_invalid_max_bar_count(self):
        with pytest.raises(ValueError):
            BarSeries("bad", max_bar_count=0)

    def test_empty_after_eviction_bounds(self):
        series = make_series(4, max_bar_count=2)
        assert series.end_index == series.begin_index + 1
