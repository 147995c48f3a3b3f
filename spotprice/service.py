"""Public entry point: fetch and price one day of hourly spot prices."""

from __future__ import annotations

from datetime import date

import httpx

from spotprice.config import AppConfig, get_config
from spotprice.nordpool.client import NordPoolClient
from spotprice.pricing.types import PricedHour


async def get_prices(
    area: str,
    end_date: date,
    *,
    config: AppConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> list[PricedHour]:
    """Fetch day-ahead prices for ``area`` and price them for consumers.

    Args:
        area: Bidding area, e.g. ``SE3``
        end_date: Delivery day in the market's local calendar
        config: Configuration to use instead of ``get_config()``
        http_client: Shared client; left open when provided

    Returns:
        Priced hours in chronological order (23-25 on a full day, fewer if
        the area is missing for some hours)

    Raises:
        TransportError: Network failure or non-2xx status
        DecodeError: Malformed response body
    """
    config = config or get_config()
    async with NordPoolClient(
        market=config.market,
        tariff=config.tariff,
        http_client=http_client,
    ) as client:
        return await client.fetch(area, end_date)
