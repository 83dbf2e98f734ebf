"""Tests for StatisticsCalculator backtest statistics."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from tacore.models import Bar, BarSeries, TradingRecord

from tabacktest import BacktestReport, StatisticsCalculator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

START = datetime(2024, 1, 1, tzinfo=timezone.utc)
CLOSES = [10, 20, 10, 5, 10, 15]


def make_series(closes=CLOSES) -> BarSeries:
    return BarSeries(
        "stats",
        [
            Bar.of(START + timedelta(days=i + 1), open=c, high=c + 1, low=c - 1, close=c)
            for i, c in enumerate(closes)
        ],
    )


def make_record() -> TradingRecord:
    record = TradingRecord("three")
    for entry, exit_ in ((0, 1), (2, 3), (4, 5)):
        record.enter(entry, CLOSES[entry])
        record.exit(exit_, CLOSES[exit_])
    return record


def _calc(record: TradingRecord, strategy_name: str = "") -> BacktestReport:
    """Shortcut to run StatisticsCalculator.calculate."""
    return StatisticsCalculator().calculate(make_series(), record, strategy_name)


# ---------------------------------------------------------------------------
# Overall
# ---------------------------------------------------------------------------


class TestOverall:
    def test_counts(self):
        report = _calc(make_record())
        assert report.trade_count == 3
        assert report.winning_trades == 2
        assert report.losing_trades == 1
        assert not report.has_open_trade

    def test_returns(self):
        report = _calc(make_record())
        assert report.win_rate == pytest.approx(2 / 3)
        assert report.total_profit == pytest.approx(1.5)
        assert report.profit_loss == pytest.approx(10.0)
        assert report.reward_risk_ratio == pytest.approx(1.5)

    def test_metadata(self):
        report = _calc(make_record(), "custom")
        assert report.strategy_name == "custom"
        assert report.series_name == "stats"
        assert report.bar_count == 6

    def test_name_defaults_to_record(self):
        assert _calc(make_record()).strategy_name == "three"

    def test_empty_record(self):
        report = _calc(TradingRecord())
        assert report.trade_count == 0
        assert report.total_profit == 1.0
        assert report.final_equity == 1.0
        assert report.max_drawdown == 0.0
        assert report.trades == []


# ---------------------------------------------------------------------------
# Risk and benchmark
# ---------------------------------------------------------------------------


class TestRiskAndBenchmark:
    def test_risk(self):
        report = _calc(make_record())
        assert report.max_drawdown == pytest.approx(0.5)
        assert report.final_equity == pytest.approx(1.5)

    def test_benchmark(self):
        report = _calc(make_record())
        assert report.buy_and_hold == pytest.approx(1.5)
        assert report.versus_buy_and_hold == pytest.approx(1.0)

    def test_open_trade_flagged(self):
        record = TradingRecord()
        record.enter(3, 5)
        report = _calc(record)
        assert report.has_open_trade
        assert report.trade_count == 0
        # Marked to the last close
        assert report.final_equity == pytest.approx(3.0)


# ---------------------------------------------------------------------------
# Breakdown
# ---------------------------------------------------------------------------


class TestTradeBreakdown:
    def test_trade_summaries(self):
        report = _calc(make_record())
        assert [t.entry_index for t in report.trades] == [0, 2, 4]
        assert [t.gross_return for t in report.trades] == pytest.approx([2.0, 0.5, 1.5])
        assert [t.bars_held for t in report.trades] == [1, 1, 1]
        assert report.average_bars_held == 1.0

    def test_no_trades_average(self):
        assert _calc(TradingRecord()).average_bars_held == 0.0
        assert not math.isnan(_calc(TradingRecord()).versus_buy_and_hold)
