"""Strategy definitions and registry.

Public API:
- Strategy: entry rule, exit rule and warm-up length
- register_strategy: Decorator to register a strategy builder
- create_strategy: Build a registered strategy over a series
- list_strategies: Names of all registered strategies
- get_strategy_builder: Get a builder by name without calling it

Importing this package auto-registers all built-in strategies.
"""

from tacore.strategy.base import Strategy
from tacore.strategy.registry import (
    create_strategy,
    get_strategy_builder,
    list_strategies,
    register_strategy,
)

# Import built-in strategies to trigger auto-registration
import tacore.strategy.presets  # noqa: F401,E402
from tacore.strategy.presets import combine_strategies  # noqa: E402

__all__ = [
    "Strategy",
    "register_strategy",
    "create_strategy",
    "get_strategy_builder",
    "list_strategies",
    "combine_strategies",
]
