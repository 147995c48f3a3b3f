"""Unit tests for the pricer.

Covers row filtering, DST resolution and the four-component price.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from spotprice.config import TariffConfig
from spotprice.nordpool.models import Column, RawRow
from spotprice.pricing.pricer import Pricer, SkipReason, resolve_local_time
from spotprice.pricing.types import PricedHour

STOCKHOLM = ZoneInfo("Europe/Stockholm")


def _row(start: datetime, value: str = "523,45", area: str = "SE3", extra: bool = False) -> RawRow:
    return RawRow(
        start_time=start,
        columns=(Column("SE1", "1,00"), Column(area, value)),
        is_extra_row=extra,
    )


class TestResolveLocalTime:
    """Naive wall-clock times must map to exactly one instant."""

    def test_winter_time(self):
        resolved = resolve_local_time(datetime(2022, 11, 9, 14), STOCKHOLM)

        assert resolved.utcoffset() == timedelta(hours=1)
        assert resolved.hour == 14

    def test_summer_time(self):
        resolved = resolve_local_time(datetime(2022, 7, 1, 14), STOCKHOLM)

        assert resolved.utcoffset() == timedelta(hours=2)

    def test_spring_forward_gap_is_rejected(self):
        assert resolve_local_time(datetime(2023, 3, 26, 2, 0), STOCKHOLM) is None

    def test_fall_back_overlap_is_rejected(self):
        assert resolve_local_time(datetime(2023, 10, 29, 2, 0), STOCKHOLM) is None

    def test_hours_around_transitions_resolve(self):
        assert resolve_local_time(datetime(2023, 3, 26, 1, 0), STOCKHOLM) is not None
        assert resolve_local_time(datetime(2023, 3, 26, 3, 0), STOCKHOLM) is not None
        assert resolve_local_time(datetime(2023, 10, 29, 1, 0), STOCKHOLM) is not None
        assert resolve_local_time(datetime(2023, 10, 29, 3, 0), STOCKHOLM) is not None


class TestPriceRow:
    """Single-row outcomes."""

    @pytest.fixture
    def pricer(self) -> Pricer:
        return Pricer()

    def test_golden_example(self, pricer):
        hour = pricer.price_row(_row(datetime(2022, 11, 9, 14)), "SE3")

        assert isinstance(hour, PricedHour)
        assert hour.start_time == datetime(2022, 11, 9, 14, tzinfo=STOCKHOLM)
        assert hour.energy == Decimal("0.52345")
        assert hour.vat == Decimal("0.1309")
        assert hour.fee == Decimal("0.70")
        assert hour.tax == Decimal("0.45")
        assert hour.sum() == Decimal("1.80435")

    def test_period_decimal_separator(self, pricer):
        hour = pricer.price_row(_row(datetime(2022, 11, 9, 14), value="523.45"), "SE3")

        assert hour.energy == Decimal("0.52345")

    def test_extra_row(self, pricer):
        row = _row(datetime(2022, 11, 9, 14), extra=True)

        assert pricer.price_row(row, "SE3") is SkipReason.EXTRA_ROW

    def test_missing_area(self, pricer):
        row = _row(datetime(2022, 11, 9, 14), area="SE4")

        assert pricer.price_row(row, "SE3") is SkipReason.MISSING_AREA

    def test_area_match_is_case_sensitive(self, pricer):
        row = _row(datetime(2022, 11, 9, 14), area="se3")

        assert pricer.price_row(row, "SE3") is SkipReason.MISSING_AREA

    def test_unparsable_amount(self, pricer):
        row = _row(datetime(2022, 11, 9, 14), value="-")

        assert pricer.price_row(row, "SE3") is SkipReason.INVALID_AMOUNT

    def test_negative_amount_is_priced(self, pricer):
        hour = pricer.price_row(_row(datetime(2022, 11, 9, 14), value="-3,20"), "SE3")

        assert isinstance(hour, PricedHour)
        assert hour.energy == Decimal("-0.0032")
        assert hour.vat == Decimal("-0.0008")
        assert hour.fee == Decimal("0.70")
        assert hour.sum() == Decimal("1.1460")

    def test_negative_hour_kept_in_batch(self):
        rows = [
            _row(datetime(2023, 7, 2, 12), value="5,00"),
            _row(datetime(2023, 7, 2, 13), value="-12,50"),
        ]

        hours = Pricer().price(rows, "SE3")

        assert [h.energy for h in hours] == [Decimal("0.005"), Decimal("-0.0125")]

    def test_zero_amount_is_priced(self, pricer):
        hour = pricer.price_row(_row(datetime(2022, 11, 12, 3), value="0,00"), "SE3")

        assert hour.energy == Decimal("0")
        assert hour.vat == Decimal("0")
        assert hour.sum() == Decimal("0.57")

    def test_dst_gap(self, pricer):
        row = _row(datetime(2023, 3, 26, 2, 0))

        assert pricer.price_row(row, "SE3") is SkipReason.AMBIGUOUS_TIME

    def test_custom_tariff(self):
        pricer = Pricer(
            TariffConfig(
                vat_rate=Decimal("0.12"),
                fee_peak=Decimal("1.00"),
                energy_tax=Decimal("0.00"),
            )
        )

        hour = pricer.price_row(_row(datetime(2022, 11, 9, 14), value="1000,00"), "SE3")

        assert hour.energy == Decimal("1")
        assert hour.vat == Decimal("0.1200")
        assert hour.fee == Decimal("1.00")
        assert hour.tax == Decimal("0.00")


class TestPrice:
    """Whole-batch behaviour."""

    def test_keeps_input_order(self):
        starts = [datetime(2022, 11, 9, h) for h in (5, 3, 4)]

        hours = Pricer().price([_row(s) for s in starts], "SE3")

        assert [h.start_time.hour for h in hours] == [5, 3, 4]

    def test_drops_skipped_rows_only(self):
        rows = [
            _row(datetime(2022, 11, 9, 0)),
            _row(datetime(2022, 11, 9, 1), extra=True),
            _row(datetime(2022, 11, 9, 2), area="SE4"),
            _row(datetime(2022, 11, 9, 3), value="n/a"),
            _row(datetime(2022, 11, 9, 4)),
        ]

        hours = Pricer().price(rows, "SE3")

        assert [h.start_time.hour for h in hours] == [0, 4]

    def test_spring_forward_day(self):
        start = datetime(2023, 3, 26)
        rows = [_row(start + timedelta(hours=h)) for h in range(24)]

        hours = Pricer().price(rows, "SE3")

        assert len(hours) == 23
        assert all(h.start_time.hour != 2 for h in hours)

    def test_sum_is_exact_and_repeatable(self):
        rows = [_row(datetime(2022, 11, 9, h), value=f"{h}33,33") for h in range(24)]

        first = Pricer().price(rows, "SE3")
        second = Pricer().price(rows, "SE3")

        for a, b in zip(first, second):
            assert a.sum() == a.energy + a.vat + a.fee + a.tax
            assert a.sum() == b.sum()

    def test_logs_summary(self, caplog):
        rows = [_row(datetime(2022, 11, 9, 0)), _row(datetime(2022, 11, 9, 1), area="SE4")]

        with caplog.at_level(logging.DEBUG, logger="spotprice.pricing.pricer"):
            Pricer().price(rows, "SE3")

        assert "missing_area" in caplog.text
        assert "Priced 1 hours for SE3" in caplog.text
