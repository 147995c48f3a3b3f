"""spotprice configuration management.

Loads configuration from environment variables with sensible defaults.
Defaults follow the Swedish consumer tariff (SEK currency, 25% VAT,
Europe/Stockholm wall-clock time).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from spotprice.errors import ConfigError

# Load .env file if present
load_dotenv()

NORDPOOL_URL_HOUR = "https://www.nordpoolgroup.com/api/marketdata/page/10"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class MarketConfig:
    """Market data endpoint settings."""

    base_url: str = NORDPOOL_URL_HOUR
    currency: str = "SEK"
    timezone: str = "Europe/Stockholm"
    default_area: str = "SE3"

    @property
    def tz(self) -> ZoneInfo:
        """Market time zone used to resolve naive timestamps."""
        return ZoneInfo(self.timezone)


@dataclass(frozen=True)
class TariffConfig:
    """Consumer tariff applied on top of the wholesale energy price.

    All amounts are SEK. Peak hours are an inclusive window of local
    wall-clock hours on Monday to Friday.
    """

    vat_rate: Decimal = Decimal("0.25")
    vat_quantum: Decimal = Decimal("0.0001")  # two digits below öre
    fee_peak: Decimal = Decimal("0.70")
    fee_offpeak: Decimal = Decimal("0.12")
    peak_start_hour: int = 6
    peak_end_hour: int = 21
    energy_tax: Decimal = Decimal("0.45")

    def __post_init__(self) -> None:
        for name in ("vat_rate", "fee_peak", "fee_offpeak", "energy_tax"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.vat_quantum <= 0:
            raise ConfigError("vat_quantum must be positive")
        for name in ("peak_start_hour", "peak_end_hour"):
            if not 0 <= getattr(self, name) <= 23:
                raise ConfigError(f"{name} must be within 0-23")
        if self.peak_start_hour > self.peak_end_hour:
            raise ConfigError("peak_start_hour must not be after peak_end_hour")


@dataclass(frozen=True)
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    log_format: str = "text"  # json or text

    market: MarketConfig = field(default_factory=MarketConfig)
    tariff: TariffConfig = field(default_factory=TariffConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        No variable is required; every setting has a default matching the
        Swedish SE3 consumer tariff.

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        timezone = os.getenv("MARKET_TIMEZONE", "Europe/Stockholm")
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown MARKET_TIMEZONE: {timezone}") from e

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}: {log_level!r}"
            )

        return cls(
            log_level=log_level,
            log_format=os.getenv("LOG_FORMAT", "text"),
            market=MarketConfig(
                base_url=os.getenv("NORDPOOL_BASE_URL", NORDPOOL_URL_HOUR),
                currency=os.getenv("NORDPOOL_CURRENCY", "SEK"),
                timezone=timezone,
                default_area=os.getenv("DEFAULT_AREA", "SE3"),
            ),
            tariff=TariffConfig(
                vat_rate=_env_decimal("VAT_RATE", "0.25"),
                vat_quantum=_env_decimal("VAT_QUANTUM", "0.0001"),
                fee_peak=_env_decimal("GRID_FEE_PEAK", "0.70"),
                fee_offpeak=_env_decimal("GRID_FEE_OFFPEAK", "0.12"),
                peak_start_hour=_env_int("GRID_FEE_PEAK_START_HOUR", "6"),
                peak_end_hour=_env_int("GRID_FEE_PEAK_END_HOUR", "21"),
                energy_tax=_env_decimal("ENERGY_TAX", "0.45"),
            ),
        )


def _env_decimal(name: str, default: str) -> Decimal:
    raw = os.getenv(name, default)
    try:
        value = Decimal(raw)
    except InvalidOperation as e:
        raise ConfigError(f"{name} is not a decimal number: {raw!r}") from e
    if not value.is_finite():
        raise ConfigError(f"{name} must be finite: {raw!r}")
    return value


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} is not an integer: {raw!r}") from e


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Returns:
        AppConfig: Application configuration

    Raises:
        ConfigError: If environment variables hold invalid values
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration. Mainly for testing purposes."""
    global _config
    _config = None
