"""Nord Pool day-ahead market data client."""

from __future__ import annotations

import json
import logging
from datetime import date

import httpx

from spotprice.config import MarketConfig, TariffConfig
from spotprice.errors import DecodeError, TransportError
from spotprice.nordpool.decoding import decode_response
from spotprice.nordpool.models import RawRow
from spotprice.pricing.pricer import Pricer
from spotprice.pricing.types import PricedHour

logger = logging.getLogger(__name__)

END_DATE_FORMAT = "%d-%m-%Y"


class NordPoolClient:
    """Client for the Nord Pool hourly market data page.

    Issues exactly one GET per retrieval: no retries, no caching, and the
    transport's default timeout.
    """

    def __init__(
        self,
        market: MarketConfig | None = None,
        tariff: TariffConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.market = market or MarketConfig()
        self.pricer = Pricer(tariff, tz=self.market.tz)
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient()

    def request_params(self, end_date: date) -> dict[str, str]:
        return {
            "currency": self.market.currency,
            "endDate": end_date.strftime(END_DATE_FORMAT),
        }

    async def fetch_rows(self, end_date: date) -> list[RawRow]:
        """Fetch and decode the rows for the day ending at ``end_date``.

        Raises:
            TransportError: On network failure or a non-2xx status
            DecodeError: If the body is not JSON or has the wrong shape
        """
        params = self.request_params(end_date)
        url = str(httpx.URL(self.market.base_url, params=params))

        try:
            response = await self.client.get(self.market.base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"HTTP {exc.response.status_code}",
                url=url,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"request failed: {exc!r}", url=url) from exc

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError(f"response body is not JSON: {exc}", url=url) from exc

        try:
            rows = decode_response(payload)
        except DecodeError as exc:
            exc.url = url
            raise

        logger.debug("Decoded %s rows from %s", len(rows), url)
        return rows

    async def fetch(self, area_code: str, end_date: date) -> list[PricedHour]:
        """Fetch and price the hours of ``area_code`` for ``end_date``.

        Args:
            area_code: Bidding area, e.g. ``SE3``
            end_date: Delivery day in the market's local calendar

        Returns:
            Priced hours in the order delivered by the API

        Raises:
            FetchError: If the retrieval fails as a whole
        """
        rows = await self.fetch_rows(end_date)
        return self.pricer.price(rows, area_code)

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> NordPoolClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
