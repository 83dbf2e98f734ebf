"""Immutable parameter sets for the built-in strategies.

Parameters are passed explicitly to each builder, so several tuned
variants of one strategy can coexist.
"""

from pydantic import BaseModel, ConfigDict, Field

from tacore.indicators.parabolic_sar import ParabolicSarConfig


class _FrozenConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Percentage stops applied on top of the exit signal
    stop_loss_pct: float = Field(default=1.0, ge=0)
    stop_gain_pct: float = Field(default=1.0, ge=0)


class ParabolicSarStrategyConfig(_FrozenConfig):
    """Close vs Parabolic SAR, confirmed by momentum and a stochastic RSI cross."""

    sar: ParabolicSarConfig = ParabolicSarConfig(start=0.05, maximum=0.20)
    rsi: int = Field(default=8, ge=1)
    stochastic_k: int = Field(default=17, ge=1)
    stochastic_d: int = Field(default=5, ge=1)
    # Awesome and acceleration/deceleration oscillator windows
    oscillator_short: int = Field(default=5, ge=1)
    oscillator_long: int = Field(default=34, ge=2)
    # Bars over which both oscillators must rise (or fall)
    trend_bars: int = Field(default=5, ge=1)
    unstable_period: int = Field(default=0, ge=0)


class CciCorrectionConfig(_FrozenConfig):
    """Buy a short-term CCI dip inside a long-term CCI uptrend."""

    long_cci: int = Field(default=200, ge=1)
    short_cci: int = Field(default=5, ge=1)
    threshold: float = Field(default=100.0, gt=0)
    unstable_period: int = Field(default=5, ge=0)


class MovingAveragesConfig(_FrozenConfig):
    """Two fast EMAs crossing a slow EMA."""

    shorter_ema: int = Field(default=5, ge=1)
    short_ema: int = Field(default=14, ge=1)
    long_ema: int = Field(default=21, ge=1)
    unstable_period: int = Field(default=21, ge=0)


class Rsi2Config(_FrozenConfig):
    """Short-period RSI momentum with an SMA trend filter."""

    rsi: int = Field(default=2, ge=1)
    rsi_threshold: float = 5.0
    rsi_rising_bars: int = Field(default=3, ge=1)
    ema: int = Field(default=21, ge=1)
    long_sma: int = Field(default=7, ge=1)
    short_sma: int = Field(default=4, ge=1)
    unstable_period: int = Field(default=21, ge=0)


class MacdStrategyConfig(_FrozenConfig):
    """MACD / signal-line cross with an EMA trend filter and ATR stop."""

    short_ema: int = Field(default=3, ge=1)
    long_ema: int = Field(default=21, ge=1)
    macd_short: int = Field(default=12, ge=1)
    macd_long: int = Field(default=26, ge=1)
    signal_sma: int = Field(default=9, ge=1)
    atr: int = Field(default=14, ge=1)
    atr_multiplier: float = Field(default=2.0, gt=0)
    unstable_period: int = Field(default=26, ge=0)


class CombinedStrategyConfig(_FrozenConfig):
    """Stops and holding limit added when combining strategies."""

    max_holding_bars: int = Field(default=20, ge=1)
