"""Turns decoded Nord Pool rows into fully loaded consumer prices.

Row-level problems never fail the whole batch. A row is dropped when it is
a summary row, lacks the requested area column, carries an amount that is
not a number, or starts at a local time that does not map to
exactly one instant (DST gap or overlap).
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from enum import Enum
from zoneinfo import ZoneInfo

from spotprice.config import TariffConfig
from spotprice.nordpool.models import RawRow
from spotprice.pricing.money import parse_amount, per_kwh
from spotprice.pricing.tariff import Tariff
from spotprice.pricing.types import PricedHour

logger = logging.getLogger(__name__)

STOCKHOLM = ZoneInfo("Europe/Stockholm")


class SkipReason(str, Enum):
    """Why a row produced no priced hour."""

    EXTRA_ROW = "extra_row"
    MISSING_AREA = "missing_area"
    INVALID_AMOUNT = "invalid_amount"
    AMBIGUOUS_TIME = "ambiguous_time"


def resolve_local_time(naive: datetime, tz: ZoneInfo) -> datetime | None:
    """Attach ``tz`` to a naive wall-clock time if it names one instant.

    Returns None inside a DST gap (time does not exist) or overlap (time
    exists twice); in both cases the two fold interpretations disagree on
    the UTC offset.
    """
    earlier = naive.replace(tzinfo=tz, fold=0)
    later = naive.replace(tzinfo=tz, fold=1)
    if earlier.utcoffset() != later.utcoffset():
        return None
    return earlier


class Pricer:
    """Prices decoded rows for one bidding area."""

    def __init__(self, tariff: TariffConfig | None = None, tz: ZoneInfo = STOCKHOLM):
        self.tariff = Tariff(tariff)
        self.tz = tz

    def compute(self, start_time: datetime, energy: Decimal) -> PricedHour:
        """Build the four-component price for a zoned start time."""
        return PricedHour(
            start_time=start_time,
            energy=energy,
            vat=self.tariff.vat(energy),
            fee=self.tariff.grid_fee(start_time),
            tax=self.tariff.energy_tax,
        )

    def price_row(self, row: RawRow, area_code: str) -> PricedHour | SkipReason:
        if row.is_extra_row:
            return SkipReason.EXTRA_ROW

        column = row.column(area_code)
        if column is None:
            return SkipReason.MISSING_AREA

        amount = parse_amount(column.value)
        if amount is None:
            return SkipReason.INVALID_AMOUNT

        start_time = resolve_local_time(row.start_time, self.tz)
        if start_time is None:
            return SkipReason.AMBIGUOUS_TIME

        return self.compute(start_time, per_kwh(amount))

    def price(self, rows: Iterable[RawRow], area_code: str) -> list[PricedHour]:
        """Price every usable row, keeping the input order.

        Args:
            rows: Decoded rows, chronological as delivered by the API
            area_code: Bidding area column name, e.g. ``SE3``

        Returns:
            One PricedHour per usable row
        """
        hours: list[PricedHour] = []
        skipped: Counter[str] = Counter()

        for row in rows:
            result = self.price_row(row, area_code)
            if isinstance(result, SkipReason):
                skipped[result.value] += 1
                if result is not SkipReason.EXTRA_ROW:
                    logger.debug(
                        "Skipping %s row for %s: %s",
                        row.start_time.isoformat(),
                        area_code,
                        result.value,
                    )
                continue
            hours.append(result)

        logger.info(
            "Priced %s hours for %s (skipped: %s)",
            len(hours),
            area_code,
            dict(skipped) or "none",
        )
        return hours
