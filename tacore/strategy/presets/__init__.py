"""Built-in strategies.

Importing this package registers every preset builder.
"""

from tacore.strategy.presets.combined import combine_strategies
from tacore.strategy.presets.models import (
    CciCorrectionConfig,
    CombinedStrategyConfig,
    MacdStrategyConfig,
    MovingAveragesConfig,
    ParabolicSarStrategyConfig,
    Rsi2Config,
)
from tacore.strategy.presets.momentum import (
    CCI_CORRECTION_STRATEGY_NAME,
    MACD_STRATEGY_NAME,
    RSI2_STRATEGY_NAME,
    build_cci_correction_strategy,
    build_macd_strategy,
    build_rsi2_strategy,
)
from tacore.strategy.presets.trend import (
    MOVING_AVERAGES_STRATEGY_NAME,
    PARABOLIC_SAR_STRATEGY_NAME,
    build_moving_averages_strategy,
    build_parabolic_sar_strategy,
)

__all__ = [
    "combine_strategies",
    "CciCorrectionConfig",
    "CombinedStrategyConfig",
    "MacdStrategyConfig",
    "MovingAveragesConfig",
    "ParabolicSarStrategyConfig",
    "Rsi2Config",
    "CCI_CORRECTION_STRATEGY_NAME",
    "MACD_STRATEGY_NAME",
    "RSI2_STRATEGY_NAME",
    "MOVING_AVERAGES_STRATEGY_NAME",
    "PARABOLIC_SAR_STRATEGY_NAME",
    "build_cci_correction_strategy",
    "build_macd_strategy",
    "build_rsi2_strategy",
    "build_moving_averages_strategy",
    "build_parabolic_sar_strategy",
]
