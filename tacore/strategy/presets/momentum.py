"""Momentum presets: 2-period RSI, MACD and CCI correction."""

from __future__ import annotations

from tacore.indicators import (
    ATRIndicator,
    CCIIndicator,
    ClosePriceIndicator,
    DifferenceIndicator,
    EMAIndicator,
    MACDIndicator,
    MultiplierIndicator,
    RSIIndicator,
    SMAIndicator,
)
from tacore.models.bar import BarSeries
from tacore.rules import (
    CrossedDownIndicatorRule,
    CrossedUpIndicatorRule,
    IsRisingRule,
    OverIndicatorRule,
    StopGainRule,
    StopLossRule,
    UnderIndicatorRule,
)
from tacore.strategy.base import Strategy
from tacore.strategy.presets.models import (
    CciCorrectionConfig,
    MacdStrategyConfig,
    Rsi2Config,
)
from tacore.strategy.registry import register_strategy

RSI2_STRATEGY_NAME = "rsi2"
MACD_STRATEGY_NAME = "macd"
CCI_CORRECTION_STRATEGY_NAME = "cci_correction"


@register_strategy(RSI2_STRATEGY_NAME)
def build_rsi2_strategy(series: BarSeries, config: Rsi2Config | None = None) -> Strategy:
    """2-period RSI strategy.

    Entry: short SMA above long SMA (trend), RSI above its threshold and
    rising, and close crossing above the EMA.
    Exit: close crossing below the EMA, or exactly one stop (xor).
    """
    config = config or Rsi2Config()
    close = ClosePriceIndicator(series)
    rsi = RSIIndicator(close, config.rsi)
    ema = EMAIndicator(close, config.ema)
    long_sma = SMAIndicator(close, config.long_sma)
    short_sma = SMAIndicator(close, config.short_sma)

    entry_rule = (
        OverIndicatorRule(short_sma, long_sma)
        & OverIndicatorRule(rsi, config.rsi_threshold)
        & IsRisingRule(rsi, config.rsi_rising_bars)
        & CrossedUpIndicatorRule(close, ema)
    )
    exit_rule = (
        CrossedDownIndicatorRule(close, ema)
        ^ StopGainRule(close, config.stop_gain_pct)
        ^ StopLossRule(close, config.stop_loss_pct)
    )
    return Strategy(
        RSI2_STRATEGY_NAME, entry_rule, exit_rule, config.unstable_period, series
    )


@register_strategy(MACD_STRATEGY_NAME)
def build_macd_strategy(series: BarSeries, config: MacdStrategyConfig | None = None) -> Strategy:
    """MACD strategy.

    Entry: MACD crosses above its signal SMA while the short EMA is
    above the long EMA.
    Exit (xor-combined): MACD crosses below the signal, close crosses
    below short EMA minus ``atr_multiplier`` ATRs, or a stop.
    """
    config = config or MacdStrategyConfig()
    close = ClosePriceIndicator(series)
    short_ema = EMAIndicator(close, config.short_ema)
    long_ema = EMAIndicator(close, config.long_ema)
    macd = MACDIndicator(close, config.macd_short, config.macd_long)
    signal = SMAIndicator(macd, config.signal_sma)
    atr_floor = DifferenceIndicator(
        short_ema, MultiplierIndicator(ATRIndicator(series, config.atr), config.atr_multiplier)
    )

    entry_rule = CrossedUpIndicatorRule(macd, signal) & OverIndicatorRule(short_ema, long_ema)
    exit_rule = (
        CrossedDownIndicatorRule(macd, signal)
        ^ CrossedDownIndicatorRule(close, atr_floor)
        ^ StopGainRule(close, config.stop_gain_pct)
        ^ StopLossRule(close, config.stop_loss_pct)
    )
    return Strategy(
        MACD_STRATEGY_NAME, entry_rule, exit_rule, config.unstable_period, series
    )


@register_strategy(CCI_CORRECTION_STRATEGY_NAME)
def build_cci_correction_strategy(
    series: BarSeries, config: CciCorrectionConfig | None = None
) -> Strategy:
    """Enter on a short CCI dip below -threshold while the long CCI is above +threshold.

    Exit on the mirror condition, or exactly one stop (xor).
    """
    config = config or CciCorrectionConfig()
    close = ClosePriceIndicator(series)
    long_cci = CCIIndicator(series, config.long_cci)
    short_cci = CCIIndicator(series, config.short_cci)

    entry_rule = OverIndicatorRule(long_cci, config.threshold) & UnderIndicatorRule(
        short_cci, -config.threshold
    )
    exit_rule = UnderIndicatorRule(long_cci, -config.threshold) & OverIndicatorRule(
        short_cci, config.threshold
    )
    exit_rule = (
        exit_rule
        ^ StopGainRule(close, config.stop_gain_pct)
        ^ StopLossRule(close, config.stop_loss_pct)
    )
    return Strategy(
        CCI_CORRECTION_STRATEGY_NAME, entry_rule, exit_rule, config.unstable_period, series
    )
