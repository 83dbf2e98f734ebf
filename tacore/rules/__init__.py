"""Trading rules: per-bar boolean predicates composable with and/or/xor/not."""

from tacore.rules.base import AndRule, BooleanRule, NotRule, OrRule, Rule, XorRule
from tacore.rules.indicator_rules import (
    CrossedDownIndicatorRule,
    CrossedUpIndicatorRule,
    IsEqualRule,
    IsFallingRule,
    IsRisingRule,
    OverIndicatorRule,
    UnderIndicatorRule,
)
from tacore.rules.position_rules import StopGainRule, StopLossRule, WaitForRule

__all__ = [
    "Rule",
    "BooleanRule",
    "AndRule",
    "OrRule",
    "XorRule",
    "NotRule",
    "OverIndicatorRule",
    "UnderIndicatorRule",
    "IsEqualRule",
    "CrossedUpIndicatorRule",
    "CrossedDownIndicatorRule",
    "IsRisingRule",
    "IsFallingRule",
    "StopLossRule",
    "StopGainRule",
    "WaitForRule",
]
