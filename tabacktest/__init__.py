"""Backtest replay and analysis.

Usage:
    from tabacktest import BacktestSimulator, StatisticsCalculator
    record = BacktestSimulator().run(strategy, series)
    report = StatisticsCalculator().calculate(series, record, strategy.name)
"""

from tabacktest.cash_flow import CashFlow
from tabacktest.config import BacktestSettings, configure_logging, get_backtest_settings
from tabacktest.criteria import (
    AnalysisCriterion,
    AverageProfitableTradesCriterion,
    BuyAndHoldCriterion,
    MaximumDrawdownCriterion,
    NumberOfTradesCriterion,
    ProfitLossCriterion,
    RewardRiskRatioCriterion,
    TotalProfitCriterion,
    VersusBuyAndHoldCriterion,
)
from tabacktest.simulator import BacktestSimulator
from tabacktest.stats import BacktestReport, StatisticsCalculator, TradeSummary

__all__ = [
    "BacktestSimulator",
    "BacktestSettings",
    "get_backtest_settings",
    "configure_logging",
    "CashFlow",
    "AnalysisCriterion",
    "TotalProfitCriterion",
    "NumberOfTradesCriterion",
    "AverageProfitableTradesCriterion",
    "RewardRiskRatioCriterion",
    "ProfitLossCriterion",
    "MaximumDrawdownCriterion",
    "BuyAndHoldCriterion",
    "VersusBuyAndHoldCriterion",
    "StatisticsCalculator",
    "BacktestReport",
    "TradeSummary",
]
