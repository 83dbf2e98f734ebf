"""Technical indicators (pure math, no I/O).

Usage:
    from tacore.indicators import ClosePriceIndicator, SMAIndicator
    sma = SMAIndicator(ClosePriceIndicator(series), 20)
    value = sma.get_value(series.end_index)
"""

from tacore.indicators.base import (
    CachedIndicator,
    Indicator,
    RecursiveCachedIndicator,
)
from tacore.indicators.helpers import (
    ClosePriceIndicator,
    ConstantIndicator,
    DifferenceIndicator,
    GainIndicator,
    HighestValueIndicator,
    HighPriceIndicator,
    LossIndicator,
    LowestValueIndicator,
    LowPriceIndicator,
    MedianPriceIndicator,
    MultiplierIndicator,
    OpenPriceIndicator,
    PriceIndicator,
    TypicalPriceIndicator,
    VolumeIndicator,
    price_indicator,
)
from tacore.indicators.moving_average import (
    EMAIndicator,
    MACDIndicator,
    MMAIndicator,
    SMAIndicator,
    WMAIndicator,
)
from tacore.indicators.oscillators import (
    AccelerationDecelerationIndicator,
    ATRIndicator,
    AwesomeOscillatorIndicator,
    CCIIndicator,
    RSIIndicator,
    StochasticOscillatorKIndicator,
    StochasticRSIIndicator,
    TrueRangeIndicator,
)
from tacore.indicators.parabolic_sar import ParabolicSarConfig, ParabolicSarIndicator

__all__ = [
    "Indicator",
    "CachedIndicator",
    "RecursiveCachedIndicator",
    "PriceIndicator",
    "ClosePriceIndicator",
    "OpenPriceIndicator",
    "HighPriceIndicator",
    "LowPriceIndicator",
    "VolumeIndicator",
    "MedianPriceIndicator",
    "TypicalPriceIndicator",
    "ConstantIndicator",
    "DifferenceIndicator",
    "MultiplierIndicator",
    "GainIndicator",
    "LossIndicator",
    "HighestValueIndicator",
    "LowestValueIndicator",
    "price_indicator",
    "SMAIndicator",
    "WMAIndicator",
    "EMAIndicator",
    "MMAIndicator",
    "MACDIndicator",
    "RSIIndicator",
    "TrueRangeIndicator",
    "ATRIndicator",
    "StochasticOscillatorKIndicator",
    "StochasticRSIIndicator",
    "CCIIndicator",
    "AwesomeOscillatorIndicator",
    "AccelerationDecelerationIndicator",
    "ParabolicSarConfig",
    "ParabolicSarIndicator",
]
