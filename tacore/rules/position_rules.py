"""Rules that read the trading record: stops and waiting periods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tacore.indicators.base import Indicator
from tacore.models.trading import OrderSide
from tacore.rules.base import Rule

if TYPE_CHECKING:
    from tacore.models.trading import TradingRecord


@dataclass(frozen=True)
class StopLossRule(Rule):
    """Price fell ``loss_percentage`` % or more below the open trade's entry.

    Never satisfied without a record or while flat.
    """

    price: Indicator
    loss_percentage: float

    def __post_init__(self):
        if self.loss_percentage < 0:
            raise ValueError(f"loss_percentage must be >= 0, got {self.loss_percentage}")

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        current = self.price.get_value(index)
        if record is None or record.open_trade is None:
            return False
        entry_price = record.open_trade.entry.price
        return current <= entry_price * (1 - self.loss_percentage / 100)


@dataclass(frozen=True)
class StopGainRule(Rule):
    """Price rose ``gain_percentage`` % or more above the open trade's entry."""

    price: Indicator
    gain_percentage: float

    def __post_init__(self):
        if self.gain_percentage < 0:
            raise ValueError(f"gain_percentage must be >= 0, got {self.gain_percentage}")

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        current = self.price.get_value(index)
        if record is None or record.open_trade is None:
            return False
        entry_price = record.open_trade.entry.price
        return current >= entry_price * (1 + self.gain_percentage / 100)


@dataclass(frozen=True)
class WaitForRule(Rule):
    """At least ``bar_count`` bars since the last order of ``side``."""

    side: OrderSide
    bar_count: int

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        if record is None:
            return False
        last = record.last_order_of(self.side)
        if last is None:
            return False
        return index - last.index >= self.bar_count
