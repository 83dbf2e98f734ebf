"""Strategy: entry rule, exit rule and warm-up length."""

from __future__ import annotations

import logging

from tacore.models.bar import BarSeries
from tacore.models.trading import TradingRecord
from tacore.rules.base import Rule

logger = logging.getLogger(__name__)


class Strategy:
    """Paired entry/exit rules plus an unstable (warm-up) period.

    Entries are suppressed during the first ``unstable_period`` bars of
    the series, while slow indicators have not stabilized. State gating
    means entry and exit are never both considered at one index: entry
    only while flat, exit only while a trade is open.

    When built over a ``series``, the warm-up is measured from that
    series' current begin index unless the caller passes one, so it
    follows eviction.
    """

    def __init__(
        self,
        name: str,
        entry_rule: Rule,
        exit_rule: Rule,
        unstable_period: int = 0,
        series: BarSeries | None = None,
    ):
        if unstable_period < 0:
            raise ValueError(f"unstable_period must be >= 0, got {unstable_period}")
        self.name = name
        self.entry_rule = entry_rule
        self.exit_rule = exit_rule
        self.unstable_period = unstable_period
        self.series = series

    def _begin_index(self, begin_index: int | None) -> int:
        if begin_index is not None:
            return begin_index
        return self.series.begin_index if self.series is not None else 0

    def is_unstable_at(self, index: int, begin_index: int | None = None) -> bool:
        return index < self._begin_index(begin_index) + self.unstable_period

    def should_enter(
        self, index: int, record: TradingRecord, begin_index: int | None = None
    ) -> bool:
        """Past warm-up, flat, and the entry rule holds."""
        if self.is_unstable_at(index, begin_index):
            return False
        if record.open_trade is not None:
            return False
        return self.entry_rule.is_satisfied(index, record)

    def should_exit(self, index: int, record: TradingRecord) -> bool:
        """In position and the exit rule holds."""
        if record.open_trade is None:
            return False
        return self.exit_rule.is_satisfied(index, record)

    def should_operate(
        self, index: int, record: TradingRecord, begin_index: int | None = None
    ) -> bool:
        if record.open_trade is None:
            return self.should_enter(index, record, begin_index)
        return self.should_exit(index, record)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def and_(self, other: Strategy) -> Strategy:
        """Enter/exit only when both strategies agree."""
        return Strategy(
            f"and({self.name},{other.name})",
            self.entry_rule & other.entry_rule,
            self.exit_rule & other.exit_rule,
            max(self.unstable_period, other.unstable_period),
            self.series if self.series is not None else other.series,
        )

    def or_(self, other: Strategy) -> Strategy:
        """Enter/exit when either strategy fires."""
        return Strategy(
            f"or({self.name},{other.name})",
            self.entry_rule | other.entry_rule,
            self.exit_rule | other.exit_rule,
            max(self.unstable_period, other.unstable_period),
            self.series if self.series is not None else other.series,
        )

    def __repr__(self) -> str:
        return f"Strategy(name='{self.name}', unstable_period={self.unstable_period})"
