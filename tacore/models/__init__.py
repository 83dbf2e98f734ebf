"""Bar, series and trading record models."""

from tacore.models.bar import Bar, BarSeries
from tacore.models.trading import Order, OrderSide, Trade, TradingRecord

__all__ = [
    "Bar",
    "BarSeries",
    "Order",
    "OrderSide",
    "Trade",
    "TradingRecord",
]
