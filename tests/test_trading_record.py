"""Tests for orders, trades and the trading record state machine."""

import logging
import math

import pytest
from pydantic import ValidationError

from tacore.models import Order, OrderSide, Trade, TradingRecord


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_record(*trades: tuple[int, float, int, float]) -> TradingRecord:
    """Record with closed trades given as (entry_index, entry_price, exit_index, exit_price)."""
    record = TradingRecord("test")
    for entry_index, entry_price, exit_index, exit_price in trades:
        assert record.enter(entry_index, entry_price)
        assert record.exit(exit_index, exit_price)
    return record


# ---------------------------------------------------------------------------
# Trade
# ---------------------------------------------------------------------------


class TestTrade:
    def test_open_trade(self):
        trade = Trade(entry=Order(side=OrderSide.ENTRY, index=0, price=10.0))
        assert trade.is_open
        assert math.isnan(trade.gross_return)
        assert math.isnan(trade.profit)
        assert not trade.is_profitable

    def test_closed_trade(self):
        record = make_record((0, 10.0, 3, 12.0))
        trade = record.closed_trades[0]
        assert trade.is_closed
        assert trade.gross_return == pytest.approx(1.2)
        assert trade.profit == pytest.approx(2.0)
        assert trade.is_profitable

    def test_order_value(self):
        order = Order(side=OrderSide.ENTRY, index=0, price=10.0, amount=3)
        assert order.value == 30.0


# ---------------------------------------------------------------------------
# TradingRecord
# ---------------------------------------------------------------------------


class TestTransitions:
    def test_enter_then_exit(self):
        record = TradingRecord()
        assert record.is_closed
        assert record.enter(1, 10.0)
        assert record.open_trade is not None
        assert record.exit(2, 11.0)
        assert record.open_trade is None
        assert record.trade_count == 1

    def test_exit_while_flat_rejected(self):
        record = TradingRecord()
        assert not record.exit(1, 10.0)
        assert record.orders == ()

    def test_enter_while_open_rejected(self):
        record = TradingRecord()
        record.enter(1, 10.0)
        assert not record.enter(2, 11.0)
        assert len(record.orders) == 1
        assert record.open_trade.entry.index == 1

    def test_rejection_logs_warning(self, caplog):
        record = TradingRecord()
        with caplog.at_level(logging.WARNING, logger="tacore.models.trading"):
            record.exit(1, 10.0)
        assert "no open trade" in caplog.text

    def test_exit_amount_defaults_to_entry(self):
        record = TradingRecord()
        record.enter(0, 10.0, amount=4)
        record.exit(1, 12.0)
        assert record.last_exit.amount == 4
        assert record.closed_trades[0].profit == pytest.approx(8.0)

    def test_operate_alternates(self):
        record = TradingRecord()
        assert record.operate(0, 10.0)
        assert record.operate(1, 11.0)
        assert record.operate(2, 12.0)
        assert [o.side for o in record.orders] == [OrderSide.ENTRY, OrderSide.EXIT, OrderSide.ENTRY]


class TestOrderValidation:
    def test_index_must_increase(self):
        record = TradingRecord()
        record.enter(5, 10.0)
        assert not record.exit(5, 11.0)
        assert not record.exit(4, 11.0)
        assert record.exit(6, 11.0)

    def test_non_finite_price_rejected(self):
        record = TradingRecord()
        assert not record.enter(0, math.nan)
        assert not record.enter(0, math.inf)

    def test_non_positive_price_rejected(self):
        record = TradingRecord()
        assert not record.enter(0, 0.0)
        assert not record.enter(0, -5.0)
        assert record.orders == ()
        assert record.enter(0, 5.0)
        assert not record.exit(1, 0.0)
        assert record.open_trade is not None

    def test_non_positive_amount_rejected(self):
        record = TradingRecord()
        assert not record.enter(0, 10.0, amount=0)
        assert not record.enter(0, 10.0, amount=-1)
        assert record.is_closed


class TestInvariants:
    def test_orders_alternate(self):
        record = TradingRecord()
        sides = [record.operate(i, 10.0 + i) for i in range(7)]
        assert all(sides)
        orders = record.orders
        for prev, curr in zip(orders, orders[1:]):
            assert prev.side != curr.side
        assert record.trade_count == 3
        assert record.open_trade is not None

    def test_closed_trades_count_pairs(self):
        record = make_record((0, 10, 1, 11), (3, 11, 4, 9))
        assert len(record.closed_trades) == 2
        assert record.trades == record.closed_trades

    def test_last_orders(self):
        record = make_record((0, 10, 1, 11))
        record.enter(3, 12)
        assert record.last_order.index == 3
        assert record.last_entry.index == 3
        assert record.last_exit.index == 1
        assert record.last_order_of(OrderSide.EXIT).price == 11

    def test_closed_trades_are_immutable_views(self):
        record = make_record((0, 10, 1, 11))
        assert isinstance(record.closed_trades, tuple)

    def test_closed_trade_cannot_be_reopened(self):
        record = make_record((0, 10, 1, 11))
        trade = record.closed_trades[0]
        with pytest.raises(ValidationError):
            trade.exit = None
        assert record.closed_trades[0].is_closed
        assert record.trade_count == 1

    def test_open_trade_is_not_mutated_by_exit(self):
        record = TradingRecord()
        record.enter(0, 10.0)
        open_trade = record.open_trade
        record.exit(1, 11.0)
        assert open_trade.is_open
        assert record.closed_trades[0].exit.index == 1
