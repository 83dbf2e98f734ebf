"""Trend-following presets: Parabolic SAR and EMA crossovers."""

from __future__ import annotations

from tacore.indicators import (
    AccelerationDecelerationIndicator,
    AwesomeOscillatorIndicator,
    ClosePriceIndicator,
    EMAIndicator,
    ParabolicSarIndicator,
    RSIIndicator,
    SMAIndicator,
    StochasticRSIIndicator,
)
from tacore.models.bar import BarSeries
from tacore.rules import (
    CrossedDownIndicatorRule,
    CrossedUpIndicatorRule,
    IsFallingRule,
    IsRisingRule,
    OverIndicatorRule,
    StopGainRule,
    StopLossRule,
    UnderIndicatorRule,
)
from tacore.strategy.base import Strategy
from tacore.strategy.presets.models import MovingAveragesConfig, ParabolicSarStrategyConfig
from tacore.strategy.registry import register_strategy

PARABOLIC_SAR_STRATEGY_NAME = "parabolic_sar"
MOVING_AVERAGES_STRATEGY_NAME = "moving_averages"


@register_strategy(PARABOLIC_SAR_STRATEGY_NAME)
def build_parabolic_sar_strategy(
    series: BarSeries, config: ParabolicSarStrategyConfig | None = None
) -> Strategy:
    """Parabolic SAR strategy.

    Entry: close above the SAR, the awesome and acceleration/deceleration
    oscillators both rising over ``trend_bars``, and the smoothed
    stochastic RSI crossing above its signal.
    Exit: the mirror image (close below the SAR, both oscillators
    falling, a cross down), or exactly one stop (xor).
    """
    config = config or ParabolicSarStrategyConfig()
    close = ClosePriceIndicator(series)
    sar = ParabolicSarIndicator(series, config.sar)
    awesome = AwesomeOscillatorIndicator(
        series, config.oscillator_short, config.oscillator_long
    )
    acceleration = AccelerationDecelerationIndicator(
        series, config.oscillator_short, config.oscillator_long
    )
    stochastic_rsi = StochasticRSIIndicator(RSIIndicator(close, config.rsi), config.rsi)
    stochastic_k = SMAIndicator(stochastic_rsi, config.stochastic_k)
    stochastic_d = SMAIndicator(stochastic_k, config.stochastic_d)

    entry_rule = (
        OverIndicatorRule(close, sar)
        & IsRisingRule(acceleration, config.trend_bars)
        & IsRisingRule(awesome, config.trend_bars)
        & CrossedUpIndicatorRule(stochastic_k, stochastic_d)
    )
    exit_rule = (
        UnderIndicatorRule(close, sar)
        & IsFallingRule(acceleration, config.trend_bars)
        & IsFallingRule(awesome, config.trend_bars)
        & CrossedDownIndicatorRule(stochastic_k, stochastic_d)
    )
    exit_rule = (
        exit_rule
        ^ StopGainRule(close, config.stop_gain_pct)
        ^ StopLossRule(close, config.stop_loss_pct)
    )
    return Strategy(
        PARABOLIC_SAR_STRATEGY_NAME, entry_rule, exit_rule, config.unstable_period, series
    )


@register_strategy(MOVING_AVERAGES_STRATEGY_NAME)
def build_moving_averages_strategy(
    series: BarSeries, config: MovingAveragesConfig | None = None
) -> Strategy:
    """Enter when both fast EMAs cross above the slow EMA on the same bar."""
    config = config or MovingAveragesConfig()
    close = ClosePriceIndicator(series)
    shorter = EMAIndicator(close, config.shorter_ema)
    short = EMAIndicator(close, config.short_ema)
    long = EMAIndicator(close, config.long_ema)

    entry_rule = CrossedUpIndicatorRule(shorter, long) & CrossedUpIndicatorRule(short, long)
    exit_rule = CrossedDownIndicatorRule(shorter, long) & CrossedDownIndicatorRule(short, long)
    exit_rule = (
        exit_rule
        ^ StopGainRule(close, config.stop_gain_pct)
        ^ StopLossRule(close, config.stop_loss_pct)
    )
    return Strategy(
        MOVING_AVERAGES_STRATEGY_NAME, entry_rule, exit_rule, config.unstable_period, series
    )
