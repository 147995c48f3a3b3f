"""Consumer tariff: VAT, tiered grid fee and energy tax."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from spotprice.config import TariffConfig

SATURDAY = 5


class Tariff:
    """Applies a ``TariffConfig`` to zoned start times and energy prices."""

    def __init__(self, config: TariffConfig | None = None):
        self.config = config or TariffConfig()

    def vat(self, energy: Decimal) -> Decimal:
        """VAT on the energy price, rounded half up to ``vat_quantum``."""
        return (energy * self.config.vat_rate).quantize(
            self.config.vat_quantum, rounding=ROUND_HALF_UP
        )

    def is_peak(self, start_time: datetime) -> bool:
        """True on Monday-Friday within the inclusive peak hour window.

        ``start_time`` must already be in market local time; the hour and
        weekday are read off the wall clock.
        """
        if start_time.weekday() >= SATURDAY:
            return False
        return self.config.peak_start_hour <= start_time.hour <= self.config.peak_end_hour

    def grid_fee(self, start_time: datetime) -> Decimal:
        if self.is_peak(start_time):
            return self.config.fee_peak
        return self.config.fee_offpeak

    @property
    def energy_tax(self) -> Decimal:
        return self.config.energy_tax
