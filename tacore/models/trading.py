"""Order, trade and trading record (ledger) models."""

from __future__ import annotations

import logging
import math
from enum import Enum

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class OrderSide(str, Enum):
    """Order side within a trade."""

    ENTRY = "entry"
    EXIT = "exit"


class Order(BaseModel):
    """A filled order at a bar index."""

    model_config = ConfigDict(frozen=True)

    side: OrderSide
    index: int
    price: float
    amount: float = 1.0

    @property
    def value(self) -> float:
        return self.price * self.amount


class Trade(BaseModel):
    """An entry order paired with an optional exit order.

    A trade is open while ``exit`` is None. Once closed it is never
    modified again.
    """

    model_config = ConfigDict(frozen=True)

    entry: Order
    exit: Order | None = None

    @property
    def is_open(self) -> bool:
        return self.exit is None

    @property
    def is_closed(self) -> bool:
        return self.exit is not None

    @property
    def gross_return(self) -> float:
        """Exit price over entry price (NaN while open)."""
        if self.exit is None:
            return math.nan
        return self.exit.price / self.entry.price

    @property
    def profit(self) -> float:
        """Absolute profit of the closed trade (NaN while open)."""
        if self.exit is None:
            return math.nan
        return (self.exit.price - self.entry.price) * self.exit.amount

    @property
    def is_profitable(self) -> bool:
        return self.is_closed and self.exit.price > self.entry.price


class TradingRecord:
    """Flat / in-position state machine holding the trade ledger.

    Invariants:
    - ENTRY is accepted only while flat, EXIT only while a trade is open.
    - Order indices strictly increase, so at most one order per bar.

    Violations are not exceptional: ``enter``/``exit`` return False and
    leave the record unchanged.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._orders: list[Order] = []
        self._closed_trades: list[Trade] = []
        self._open_trade: Trade | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def open_trade(self) -> Trade | None:
        return self._open_trade

    @property
    def closed_trades(self) -> tuple[Trade, ...]:
        return tuple(self._closed_trades)

    @property
    def trades(self) -> tuple[Trade, ...]:
        """Alias of ``closed_trades``."""
        return self.closed_trades

    @property
    def trade_count(self) -> int:
        return len(self._closed_trades)

    @property
    def orders(self) -> tuple[Order, ...]:
        return tuple(self._orders)

    @property
    def is_closed(self) -> bool:
        """True while flat."""
        return self._open_trade is None

    @property
    def last_order(self) -> Order | None:
        return self._orders[-1] if self._orders else None

    def last_order_of(self, side: OrderSide) -> Order | None:
        for order in reversed(self._orders):
            if order.side == side:
                return order
        return None

    @property
    def last_entry(self) -> Order | None:
        return self.last_order_of(OrderSide.ENTRY)

    @property
    def last_exit(self) -> Order | None:
        return self.last_order_of(OrderSide.EXIT)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def enter(self, index: int, price: float, amount: float = 1.0) -> bool:
        """Open a trade. Returns False if a trade is already open."""
        if self._open_trade is not None:
            logger.warning("Entry at index %d rejected: trade already open", index)
            return False
        if not self._accepts(index, price, amount):
            return False
        order = Order(side=OrderSide.ENTRY, index=index, price=price, amount=amount)
        self._orders.append(order)
        self._open_trade = Trade(entry=order)
        logger.debug("ENTRY index=%d price=%.4f amount=%s", index, price, amount)
        return True

    def exit(self, index: int, price: float, amount: float | None = None) -> bool:
        """Close the open trade. Returns False while flat.

        ``amount`` defaults to the entry amount.
        """
        trade = self._open_trade
        if trade is None:
            logger.warning("Exit at index %d rejected: no open trade", index)
            return False
        if amount is None:
            amount = trade.entry.amount
        if not self._accepts(index, price, amount):
            return False
        order = Order(side=OrderSide.EXIT, index=index, price=price, amount=amount)
        closed = trade.model_copy(update={"exit": order})
        self._orders.append(order)
        self._closed_trades.append(closed)
        self._open_trade = None
        logger.debug(
            "EXIT index=%d price=%.4f return=%.4f", index, price, closed.gross_return
        )
        return True

    def operate(self, index: int, price: float, amount: float = 1.0) -> bool:
        """Enter when flat, exit when in position."""
        if self._open_trade is None:
            return self.enter(index, price, amount)
        return self.exit(index, price, amount)

    def _accepts(self, index: int, price: float, amount: float) -> bool:
        last = self.last_order
        if last is not None and index <= last.index:
            logger.warning(
                "Order at index %d rejected: last order was at index %d",
                index, last.index,
            )
            return False
        if not (math.isfinite(price) and price > 0) or not math.isfinite(amount) or amount <= 0:
            logger.warning(
                "Order at index %d rejected: price=%s amount=%s", index, price, amount
            )
            return False
        return True

    def __repr__(self) -> str:
        state = "in position" if self._open_trade else "flat"
        return f"TradingRecord(trades={self.trade_count}, {state})"
