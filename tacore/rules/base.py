"""Rule base class and boolean combinators.

A rule is a per-bar predicate. Rules are immutable expression trees:
combinators build new nodes and never touch their operands, and
structurally identical trees compare equal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tacore.models.trading import TradingRecord


@dataclass(frozen=True)
class Rule(ABC):
    """Base class for all trading rules."""

    @abstractmethod
    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        """Evaluate the rule at ``index``.

        Args:
            index: absolute bar index
            record: trading record for position-relative rules
        """

    def and_(self, other: Rule) -> Rule:
        return AndRule(self, other)

    def or_(self, other: Rule) -> Rule:
        return OrRule(self, other)

    def xor(self, other: Rule) -> Rule:
        return XorRule(self, other)

    def negate(self) -> Rule:
        return NotRule(self)

    def __and__(self, other: Rule) -> Rule:
        return AndRule(self, other)

    def __or__(self, other: Rule) -> Rule:
        return OrRule(self, other)

    def __xor__(self, other: Rule) -> Rule:
        return XorRule(self, other)

    def __invert__(self) -> Rule:
        return NotRule(self)


@dataclass(frozen=True)
class BooleanRule(Rule):
    """Constant rule."""

    value: bool

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        return self.value


@dataclass(frozen=True)
class AndRule(Rule):
    first: Rule
    second: Rule

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        first = self.first.is_satisfied(index, record)
        second = self.second.is_satisfied(index, record)
        return first and second


@dataclass(frozen=True)
class OrRule(Rule):
    first: Rule
    second: Rule

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        first = self.first.is_satisfied(index, record)
        second = self.second.is_satisfied(index, record)
        return first or second


@dataclass(frozen=True)
class XorRule(Rule):
    first: Rule
    second: Rule

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        return self.first.is_satisfied(index, record) != self.second.is_satisfied(index, record)


@dataclass(frozen=True)
class NotRule(Rule):
    rule: Rule

    def is_satisfied(self, index: int, record: TradingRecord | None = None) -> bool:
        return not self.rule.is_satisfied(index, record)
