"""Decode Nord Pool JSON bodies into ``RawRow`` values.

Runs after generic JSON decoding: the shape is validated with pydantic,
then every ``StartTime`` goes through ``parse_start_time``.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from spotprice.errors import DecodeError
from spotprice.nordpool.models import Column, RawRow, ResponsePayload

START_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

# strptime accepts single-digit fields, so the exact layout is checked first
_START_TIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


def parse_start_time(text: str) -> datetime:
    """Parse a naive local timestamp in exactly ``YYYY-MM-DDTHH:MM:SS`` form.

    No UTC offset, trailing ``Z`` or fractional seconds is accepted.

    Args:
        text: Timestamp as sent by the API

    Returns:
        Naive datetime (no tzinfo)

    Raises:
        DecodeError: If the text does not match the format exactly
    """
    if not _START_TIME_PATTERN.fullmatch(text):
        raise DecodeError(f"invalid StartTime {text!r}, expected YYYY-MM-DDTHH:MM:SS")
    try:
        return datetime.strptime(text, START_TIME_FORMAT)
    except ValueError as e:
        raise DecodeError(f"invalid StartTime {text!r}: {e}") from e


def decode_response(payload: Any) -> list[RawRow]:
    """Convert an already JSON-decoded body into rows.

    Args:
        payload: Result of ``json.loads`` / ``response.json()``

    Returns:
        Rows in the order the API sent them

    Raises:
        DecodeError: If the body does not have the expected shape
    """
    try:
        response = ResponsePayload.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"unexpected response shape: {e.error_count()} error(s)") from e

    return [
        RawRow(
            start_time=parse_start_time(row.start_time),
            columns=tuple(Column(name=c.name, value=c.value) for c in row.columns),
            is_extra_row=row.is_extra_row,
        )
        for row in response.data.rows
    ]
