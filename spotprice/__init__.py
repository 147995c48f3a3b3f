"""spotprice - Nord Pool day-ahead prices with Swedish consumer tariffs."""

from spotprice.errors import (
    ConfigError,
    DecodeError,
    FetchError,
    FetchStage,
    SpotPriceError,
    TransportError,
)
from spotprice.nordpool.client import NordPoolClient
from spotprice.pricing.types import PricedHour
from spotprice.service import get_prices

__all__ = [
    "ConfigError",
    "DecodeError",
    "FetchError",
    "FetchStage",
    "NordPoolClient",
    "PricedHour",
    "SpotPriceError",
    "TransportError",
    "get_prices",
]
