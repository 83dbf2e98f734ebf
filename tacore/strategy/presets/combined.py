"""Combine several strategies into one."""

from __future__ import annotations

from typing import Sequence

from tacore.indicators import ClosePriceIndicator
from tacore.models.bar import BarSeries
from tacore.models.trading import OrderSide
from tacore.rules import BooleanRule, StopGainRule, StopLossRule, WaitForRule
from tacore.strategy.base import Strategy
from tacore.strategy.presets.models import CombinedStrategyConfig


def combine_strategies(
    strategies: Sequence[Strategy],
    series: BarSeries,
    config: CombinedStrategyConfig | None = None,
    name: str = "combined",
) -> Strategy:
    """Enter on any entry rule; exit on any exit rule, a stop, or a holding limit.

    The combined warm-up is the longest of the inputs.
    """
    config = config or CombinedStrategyConfig()
    close = ClosePriceIndicator(series)

    entry_rule = BooleanRule(False)
    exit_rule = BooleanRule(False)
    for strategy in strategies:
        entry_rule = entry_rule | strategy.entry_rule
        exit_rule = exit_rule | strategy.exit_rule

    exit_rule = (
        exit_rule
        | StopLossRule(close, config.stop_loss_pct)
        | StopGainRule(close, config.stop_gain_pct)
        | WaitForRule(OrderSide.ENTRY, config.max_holding_bars)
    )
    unstable_period = max((s.unstable_period for s in strategies), default=0)
    return Strategy(name, entry_rule, exit_rule, unstable_period, series)
