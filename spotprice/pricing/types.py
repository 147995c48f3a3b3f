"""Type definitions for priced hours."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from spotprice.pricing.money import round_to_ore


@dataclass(frozen=True)
class PricedHour:
    """Fully loaded consumer price for one hour.

    All amounts are SEK per kWh. Fee and tax are never negative; energy and
    VAT are negative for hours that cleared below zero. ``start_time`` is aware
    and expressed in market local time.
    """

    start_time: datetime
    energy: Decimal
    vat: Decimal
    fee: Decimal
    tax: Decimal

    def sum(self) -> Decimal:
        """Total price, computed on every call from the four components."""
        return self.energy + self.vat + self.fee + self.tax

    def as_dict(self, rounded: bool = False) -> dict[str, str]:
        """Serialize amounts as strings (optionally rounded to öre)."""
        amounts = {
            "energy": self.energy,
            "vat": self.vat,
            "fee": self.fee,
            "tax": self.tax,
            "total": self.sum(),
        }
        if rounded:
            amounts = {k: round_to_ore(v) for k, v in amounts.items()}
        return {
            "start_time": self.start_time.isoformat(),
            **{k: str(v) for k, v in amounts.items()},
        }
