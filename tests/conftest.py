"""Pytest configuration and fixtures for spotprice tests.

Provides synthetic Nord Pool payloads and a mock HTTP transport.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

import httpx
import pytest

from spotprice.config import reset_config

CONFIG_ENV_VARS = (
    "NORDPOOL_BASE_URL",
    "NORDPOOL_CURRENCY",
    "MARKET_TIMEZONE",
    "DEFAULT_AREA",
    "VAT_RATE",
    "VAT_QUANTUM",
    "GRID_FEE_PEAK",
    "GRID_FEE_OFFPEAK",
    "GRID_FEE_PEAK_START_HOUR",
    "GRID_FEE_PEAK_END_HOUR",
    "ENERGY_TAX",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


def make_row(
    start_time: str,
    columns: dict[str, str] | None = None,
    is_extra_row: bool = False,
) -> dict:
    """Build one row the way the market data page renders it."""
    columns = columns if columns is not None else {"SE3": "523,45"}
    return {
        "StartTime": start_time,
        "EndTime": start_time,
        "Columns": [{"Name": name, "Value": value, "IsValid": True} for name, value in columns.items()],
        "IsExtraRow": is_extra_row,
        "Name": start_time[11:13],
    }


def make_payload(rows: list[dict]) -> dict:
    return {"data": {"Rows": rows, "DataStartdate": "", "Units": ["SEK/MWh"]}, "currency": "SEK"}


def day_rows(day: str = "2022-11-09", area: str = "SE3", hours: int = 24) -> list[dict]:
    """One row per hour of ``day`` with a distinct price, plus summary rows."""
    start = datetime.fromisoformat(f"{day}T00:00:00")
    rows = [
        make_row(
            (start + timedelta(hours=h)).strftime("%Y-%m-%dT%H:%M:%S"),
            {"SE1": "100,00", "SE2": "110,00", area: f"{500 + h},25", "SE4": "900,00"},
        )
        for h in range(hours)
    ]
    rows.append(make_row(f"{day}T00:00:00", {area: "511,25"}, is_extra_row=True))
    rows.append(make_row(f"{day}T00:00:00", {area: "523,00"}, is_extra_row=True))
    return rows


@pytest.fixture
def payload_factory() -> Callable[..., dict]:
    return make_payload


@pytest.fixture
def row_factory() -> Callable[..., dict]:
    return make_row


@pytest.fixture
def full_day_payload() -> dict:
    """24 hourly SE3 rows for Wednesday 2022-11-09 plus two summary rows."""
    return make_payload(day_rows())


@pytest.fixture
def mock_http_client() -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient whose transport answers with a canned response.

    Every request is appended to ``client.requests`` for inspection.
    """

    def _build(
        json_body: object = None,
        status_code: int = 200,
        content: bytes | None = None,
        exc: Exception | None = None,
    ) -> httpx.AsyncClient:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if exc is not None:
                raise exc
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json_body)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client.requests = requests
        return client

    return _build


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Isolate tests from the developer's environment and cached config."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
