"""Backtest simulator: replays a strategy over a bar series.

Two modes give identical ledgers for the same bars:

- ``run``: full replay of every index in the retained window.
- ``step``: evaluate only the newest index, after appending a bar.

The simulator remembers the last index it processed for each record, so
an index is never evaluated twice for the same ledger.
"""

from __future__ import annotations

import logging
import weakref
from typing import Iterable

from tacore.models.bar import Bar, BarSeries
from tacore.models.trading import TradingRecord
from tacore.strategy.base import Strategy

from tabacktest.config import BacktestSettings, get_backtest_settings

logger = logging.getLogger(__name__)


class BacktestSimulator:
    """Drive the FLAT / IN_POSITION state machine over bar indices."""

    def __init__(self, settings: BacktestSettings | None = None):
        self._settings = settings or get_backtest_settings()
        self._last_index: weakref.WeakKeyDictionary[TradingRecord, int] = (
            weakref.WeakKeyDictionary()
        )
        # Ledger used by ``step`` when the caller passes none
        self._records: weakref.WeakKeyDictionary[Strategy, TradingRecord] = (
            weakref.WeakKeyDictionary()
        )

    @property
    def settings(self) -> BacktestSettings:
        return self._settings

    def create_series(self, name: str = "unnamed", bars: Iterable[Bar] = ()) -> BarSeries:
        """New series bounded by ``settings.max_bar_count``."""
        return BarSeries(name, bars, max_bar_count=self._settings.max_bar_count)

    def record_for(self, strategy: Strategy) -> TradingRecord:
        """The ledger ``step`` uses for ``strategy`` when given no record."""
        record = self._records.get(strategy)
        if record is None:
            record = TradingRecord(strategy.name)
            self._records[strategy] = record
        return record

    def run(
        self,
        strategy: Strategy,
        series: BarSeries,
        record: TradingRecord | None = None,
        start: int | None = None,
        end: int | None = None,
        amount: float | None = None,
    ) -> TradingRecord:
        """Replay ``strategy`` over ``[start, end]`` (clamped to the series).

        Args:
            strategy: entry/exit rules to evaluate
            series: bars to replay
            record: ledger to continue; a new one is created if None
            start: first index (default: series begin index)
            end: last index (default: series end index)
            amount: position size (default: settings.trade_amount)

        Returns:
            The trading record.
        """
        if record is None:
            record = TradingRecord(strategy.name)
        first = series.begin_index if start is None else max(start, series.begin_index)
        last = series.end_index if end is None else min(end, series.end_index)

        logger.info(
            "Running strategy '%s' on '%s' over [%d, %d]",
            strategy.name, series.name, first, last,
        )
        for index in range(first, last + 1):
            self._process(strategy, series, record, index, amount)

        logger.info(
            "Strategy '%s' finished: %d closed trades%s",
            strategy.name,
            record.trade_count,
            ", 1 open" if record.open_trade is not None else "",
        )
        return record

    def step(
        self,
        strategy: Strategy,
        series: BarSeries,
        index: int | None = None,
        record: TradingRecord | None = None,
        amount: float | None = None,
    ) -> TradingRecord:
        """Evaluate a single index (default: the series end index).

        Intended to be called after each ``series.add_bar``. Without a
        ``record`` the simulator keeps one ledger per strategy, so
        successive calls carry the position forward.
        """
        if record is None:
            record = self.record_for(strategy)
        if index is None:
            index = series.end_index
        if index < series.begin_index:
            # Empty series or index already evicted
            return record
        self._process(strategy, series, record, index, amount)
        return record

    def _process(
        self,
        strategy: Strategy,
        series: BarSeries,
        record: TradingRecord,
        index: int,
        amount: float | None,
    ) -> None:
        last = self._last_index.get(record)
        if last is not None and index <= last:
            logger.debug("Index %d already processed (last=%d), skipping", index, last)
            return
        self._last_index[record] = index

        if not strategy.should_operate(index, record, series.begin_index):
            return

        bar = series.get_bar(index)
        price = getattr(bar, self._settings.price_field)
        if amount is None:
            amount = self._settings.trade_amount
        if record.open_trade is None:
            record.enter(index, price, amount)
        else:
            record.exit(index, price)
