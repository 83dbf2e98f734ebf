"""Analysis criteria: scalar scores of a trading record.

Every criterion is a pure function of (series, record). ``better_than``
tells an optimizer which of two scores to prefer.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np

from tacore.models.bar import BarSeries
from tacore.models.trading import Trade, TradingRecord

from tabacktest.cash_flow import CashFlow


class AnalysisCriterion(ABC):
    """Base class for analysis criteria."""

    @abstractmethod
    def calculate(self, series: BarSeries, record: TradingRecord) -> float:
        """Score the whole record."""

    @abstractmethod
    def calculate_trade(self, series: BarSeries, trade: Trade) -> float:
        """Score a single trade."""

    def better_than(self, a: float, b: float) -> bool:
        return a > b

    def __repr__(self) -> str:
        return type(self).__name__


# =============================================================================
# Trade-based criteria
# =============================================================================


class TotalProfitCriterion(AnalysisCriterion):
    """Product of the closed trades' exit/entry price ratios."""

    def calculate(self, series, record):
        returns = [trade.gross_return for trade in record.closed_trades]
        return float(np.prod(returns)) if returns else 1.0

    def calculate_trade(self, series, trade):
        return trade.gross_return if trade.is_closed else 1.0


class NumberOfTradesCriterion(AnalysisCriterion):
    """Number of closed trades. Fewer is better."""

    def calculate(self, series, record):
        return float(record.trade_count)

    def calculate_trade(self, series, trade):
        return 1.0

    def better_than(self, a, b):
        return a < b


class AverageProfitableTradesCriterion(AnalysisCriterion):
    """Win ratio: profitable closed trades over all closed trades."""

    def calculate(self, series, record):
        trades = record.closed_trades
        if not trades:
            return 0.0
        return sum(1 for t in trades if t.is_profitable) / len(trades)

    def calculate_trade(self, series, trade):
        return 1.0 if trade.is_profitable else 0.0


class RewardRiskRatioCriterion(AnalysisCriterion):
    """Average winning return over the magnitude of the average losing return.

    Returns are ``gross_return - 1``. With winners but no losers the
    ratio is infinite; with neither it is 0.
    """

    def calculate(self, series, record):
        return self._ratio(record.closed_trades)

    def calculate_trade(self, series, trade):
        return self._ratio([trade] if trade.is_closed else [])

    @staticmethod
    def _ratio(trades) -> float:
        returns = np.array([t.gross_return - 1.0 for t in trades])
        wins = returns[returns > 0]
        losses = returns[returns < 0]
        if losses.size == 0:
            return math.inf if wins.size else 0.0
        if wins.size == 0:
            return 0.0
        return float(wins.mean() / abs(losses.mean()))


class ProfitLossCriterion(AnalysisCriterion):
    """Sum of absolute profits of the closed trades."""

    def calculate(self, series, record):
        return float(sum(trade.profit for trade in record.closed_trades))

    def calculate_trade(self, series, trade):
        return trade.profit if trade.is_closed else 0.0


# =============================================================================
# Series-based criteria
# =============================================================================


class MaximumDrawdownCriterion(AnalysisCriterion):
    """Largest peak-to-trough fall of the cash flow, as a fraction of the peak.

    Smaller is better.
    """

    def calculate(self, series, record):
        return self._drawdown(CashFlow(series, record).as_array())

    def calculate_trade(self, series, trade):
        return self._drawdown(CashFlow.from_trades(series, [trade]).as_array())

    def better_than(self, a, b):
        return a < b

    @staticmethod
    def _drawdown(values: np.ndarray) -> float:
        if values.size == 0:
            return 0.0
        peaks = np.maximum.accumulate(values)
        return float(np.max((peaks - values) / peaks))


class BuyAndHoldCriterion(AnalysisCriterion):
    """Return of buying at the first bar and selling at the last."""

    def calculate(self, series, record):
        if series.is_empty:
            return 1.0
        return series.last_bar.close / series.first_bar.close

    def calculate_trade(self, series, trade):
        exit_index = trade.exit.index if trade.exit is not None else series.end_index
        entry_close = series.get_bar(trade.entry.index).close
        return series.get_bar(exit_index).close / entry_close


class VersusBuyAndHoldCriterion(AnalysisCriterion):
    """Ratio of a criterion's score to its score under buy-and-hold.

    NaN when the buy-and-hold score is zero.
    """

    def __init__(self, criterion: AnalysisCriterion):
        self.criterion = criterion

    def calculate(self, series, record):
        return self._versus(
            self.criterion.calculate(series, record),
            self.criterion.calculate(series, self._buy_and_hold(series)),
        )

    def calculate_trade(self, series, trade):
        return self._versus(
            self.criterion.calculate_trade(series, trade),
            self.criterion.calculate(series, self._buy_and_hold(series)),
        )

    def better_than(self, a, b):
        return self.criterion.better_than(a, b)

    @staticmethod
    def _buy_and_hold(series: BarSeries) -> TradingRecord:
        record = TradingRecord("buy_and_hold")
        if series.bar_count >= 2:
            record.enter(series.begin_index, series.first_bar.close)
            record.exit(series.end_index, series.last_bar.close)
        return record

    @staticmethod
    def _versus(value: float, benchmark: float) -> float:
        if benchmark == 0:
            return math.nan
        return value / benchmark

    def __repr__(self) -> str:
        return f"VersusBuyAndHoldCriterion({self.criterion!r})"
