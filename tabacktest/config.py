"""Backtest settings loaded from the environment.

Variables use the ``TAREPLAY_`` prefix and may also come from a
``.env`` file, e.g. ``TAREPLAY_TRADE_AMOUNT=10``.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ORDER_PRICE_FIELDS = ("open", "high", "low", "close")


class BacktestSettings(BaseSettings):
    """Backtest configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TAREPLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Position size for each entry when the caller passes none
    trade_amount: float = Field(default=1.0, gt=0)
    # Bar field used as the order price
    price_field: str = "close"
    # Retention window for series built by helpers (None = unbounded)
    max_bar_count: int | None = Field(default=None, ge=1)
    log_level: str = "INFO"

    @field_validator("price_field")
    @classmethod
    def _check_price_field(cls, value: str) -> str:
        if value not in ORDER_PRICE_FIELDS:
            raise ValueError(
                f"price_field must be one of {', '.join(ORDER_PRICE_FIELDS)}, got '{value}'"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()


_settings: BacktestSettings | None = None


def get_backtest_settings() -> BacktestSettings:
    """Get cached backtest settings instance."""
    global _settings
    if _settings is None:
        _settings = BacktestSettings()
    return _settings


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging for scripts that drive a backtest.

    Library modules only create loggers; this is the single place that
    installs a handler.
    """
    if level is None:
        level = get_backtest_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
