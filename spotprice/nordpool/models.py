"""Nord Pool market data models.

Two layers:
- Pydantic wire models mirroring the JSON body (PascalCase field names,
  timestamps still text).
- Frozen ``RawRow`` / ``Column`` dataclasses handed to the pricer once the
  timestamps have been parsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ColumnPayload(BaseModel):
    """One ``{"Name": ..., "Value": ...}`` cell of a row."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(alias="Name")
    value: str = Field(alias="Value")


class RowPayload(BaseModel):
    """One hourly row; ``StartTime`` is a naive local timestamp string."""

    model_config = ConfigDict(frozen=True)

    start_time: str = Field(alias="StartTime")
    columns: list[ColumnPayload] = Field(alias="Columns")
    is_extra_row: bool = Field(alias="IsExtraRow")


class DataPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    rows: list[RowPayload] = Field(alias="Rows")


class ResponsePayload(BaseModel):
    """Top-level ``{"data": {"Rows": [...]}}`` body."""

    model_config = ConfigDict(frozen=True)

    data: DataPayload


@dataclass(frozen=True)
class Column:
    """Named price cell; ``value`` is still a locale-formatted number."""

    name: str
    value: str


@dataclass(frozen=True)
class RawRow:
    """One hour's quote with its start time parsed (no zone attached)."""

    start_time: datetime
    columns: tuple[Column, ...]
    is_extra_row: bool = False

    def column(self, name: str) -> Column | None:
        """Return the first column called ``name`` (exact match), if any."""
        for column in self.columns:
            if column.name == name:
                return column
        return None
