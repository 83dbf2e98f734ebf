"""Equity curve derived from a trading record."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from tacore.errors import BarIndexError
from tacore.models.bar import BarSeries
from tacore.models.trading import Trade, TradingRecord


class CashFlow:
    """Cumulative equity ratio per bar, relative to the first retained bar.

    The ratio is 1 until the first entry. While a trade is open it moves
    with ``close / entry price`` from the ratio at entry; the exit bar
    uses the exit price, and the realized ratio carries forward while
    flat. An open trade is marked to the close up to the end index.
    """

    def __init__(self, series: BarSeries, record: TradingRecord):
        trades = list(record.closed_trades)
        if record.open_trade is not None:
            trades.append(record.open_trade)
        self._build(series, trades)

    @classmethod
    def from_trades(cls, series: BarSeries, trades: Iterable[Trade]) -> CashFlow:
        cash_flow = cls.__new__(cls)
        cash_flow._build(series, list(trades))
        return cash_flow

    def _build(self, series: BarSeries, trades: list[Trade]) -> None:
        self._begin = series.begin_index
        values = np.ones(series.bar_count)
        end = series.end_index

        for trade in trades:
            exit_index = trade.exit.index if trade.exit is not None else end
            if exit_index < self._begin:
                continue
            entry_index = trade.entry.index
            ratio_at_entry = values[entry_index - self._begin] if entry_index >= self._begin else 1.0
            entry_price = trade.entry.price

            for index in range(max(entry_index + 1, self._begin), min(exit_index, end) + 1):
                if trade.exit is not None and index == exit_index:
                    price = trade.exit.price
                else:
                    price = series.get_bar(index).close
                values[index - self._begin] = ratio_at_entry * price / entry_price

            # Carry the realized ratio forward while flat
            if exit_index < end:
                values[exit_index - self._begin + 1:] = values[exit_index - self._begin]

        self._values = values

    def get_value(self, index: int) -> float:
        if not 0 <= index - self._begin < len(self._values):
            raise BarIndexError(index, self._begin, self._begin + len(self._values) - 1)
        return float(self._values[index - self._begin])

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(float(v) for v in self._values)

    def as_array(self) -> np.ndarray:
        return self._values.copy()

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        last = self._values[-1] if len(self._values) else 1.0
        return f"CashFlow(bars={len(self._values)}, final={last:.4f})"
