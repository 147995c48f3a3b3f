"""Consumer pricing of day-ahead spot quotes."""

from spotprice.pricing.pricer import Pricer, SkipReason, resolve_local_time
from spotprice.pricing.tariff import Tariff
from spotprice.pricing.types import PricedHour

__all__ = [
    "Pricer",
    "PricedHour",
    "SkipReason",
    "Tariff",
    "resolve_local_time",
]
