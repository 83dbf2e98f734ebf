"""Statistics calculator for backtest results.

Bundles the analysis criteria into one report: overall trade counts and
returns, risk, the buy-and-hold benchmark, and a per-trade breakdown.
Returns are gross ratios (exit price / entry price), so 1.0 is break-even.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from tacore.models.bar import BarSeries
from tacore.models.trading import TradingRecord

from tabacktest.cash_flow import CashFlow
from tabacktest.criteria import (
    AverageProfitableTradesCriterion,
    BuyAndHoldCriterion,
    MaximumDrawdownCriterion,
    ProfitLossCriterion,
    RewardRiskRatioCriterion,
    TotalProfitCriterion,
    VersusBuyAndHoldCriterion,
)

logger = logging.getLogger(__name__)


@dataclass
class TradeSummary:
    entry_index: int
    exit_index: int
    entry_price: float
    exit_price: float
    gross_return: float
    profit: float

    @property
    def bars_held(self) -> int:
        return self.exit_index - self.entry_index


@dataclass
class BacktestReport:
    """Complete backtest results."""

    # Metadata
    strategy_name: str
    series_name: str
    begin_index: int
    end_index: int

    # Overall
    trade_count: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    has_open_trade: bool = False
    win_rate: float = 0.0
    total_profit: float = 1.0
    profit_loss: float = 0.0
    reward_risk_ratio: float = 0.0

    # Risk
    max_drawdown: float = 0.0
    final_equity: float = 1.0

    # Benchmark
    buy_and_hold: float = 1.0
    versus_buy_and_hold: float = math.nan

    # Breakdown
    trades: list[TradeSummary] = field(default_factory=list)

    @property
    def bar_count(self) -> int:
        return self.end_index - self.begin_index + 1

    @property
    def average_bars_held(self) -> float:
        if not self.trades:
            return 0.0
        return sum(t.bars_held for t in self.trades) / len(self.trades)


class StatisticsCalculator:
    """Calculate backtest statistics from a series and its trading record."""

    def calculate(
        self,
        series: BarSeries,
        record: TradingRecord,
        strategy_name: str = "",
    ) -> BacktestReport:
        report = BacktestReport(
            strategy_name=strategy_name or record.name,
            series_name=series.name,
            begin_index=series.begin_index,
            end_index=series.end_index,
        )
        self._calc_overall(report, series, record)
        self._calc_risk(report, series, record)
        self._calc_benchmark(report, series, record)
        self._calc_trades(report, record)
        logger.debug(
            "Report for '%s': %d trades, total profit %.4f",
            report.strategy_name, report.trade_count, report.total_profit,
        )
        return report

    def _calc_overall(
        self, report: BacktestReport, series: BarSeries, record: TradingRecord
    ) -> None:
        trades = record.closed_trades
        report.trade_count = len(trades)
        report.winning_trades = sum(1 for t in trades if t.gross_return > 1)
        report.losing_trades = sum(1 for t in trades if t.gross_return < 1)
        report.has_open_trade = record.open_trade is not None
        report.win_rate = AverageProfitableTradesCriterion().calculate(series, record)
        report.total_profit = TotalProfitCriterion().calculate(series, record)
        report.profit_loss = ProfitLossCriterion().calculate(series, record)
        report.reward_risk_ratio = RewardRiskRatioCriterion().calculate(series, record)

    def _calc_risk(
        self, report: BacktestReport, series: BarSeries, record: TradingRecord
    ) -> None:
        report.max_drawdown = MaximumDrawdownCriterion().calculate(series, record)
        cash_flow = CashFlow(series, record)
        if len(cash_flow):
            report.final_equity = cash_flow.get_value(series.end_index)

    def _calc_benchmark(
        self, report: BacktestReport, series: BarSeries, record: TradingRecord
    ) -> None:
        report.buy_and_hold = BuyAndHoldCriterion().calculate(series, record)
        report.versus_buy_and_hold = VersusBuyAndHoldCriterion(
            TotalProfitCriterion()
        ).calculate(series, record)

    def _calc_trades(self, report: BacktestReport, record: TradingRecord) -> None:
        report.trades = [
            TradeSummary(
                entry_index=t.entry.index,
                exit_index=t.exit.index,
                entry_price=t.entry.price,
                exit_price=t.exit.price,
                gross_return=t.gross_return,
                profit=t.profit,
            )
            for t in record.closed_trades
        ]
