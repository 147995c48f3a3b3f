"""Exception hierarchy for spotprice.

Only retrieval failures cross the public boundary. Row-level problems
(missing area column, unparsable amount, DST gap/overlap) are absorbed by
the pricer and never raised.
"""

from __future__ import annotations

from enum import Enum


class SpotPriceError(Exception):
    """Base exception for spotprice."""
    pass


class ConfigError(SpotPriceError):
    """Raised when configuration values are missing or invalid."""
    pass


class FetchStage(str, Enum):
    """Stage of a retrieval at which a failure occurred."""

    TRANSPORT = "transport"
    DECODE = "decode"


class FetchError(SpotPriceError):
    """A retrieval failed as a whole.

    Attributes:
        stage: Whether the failure happened on the wire or while decoding
        url: Request URL, when known
    """

    stage: FetchStage = FetchStage.TRANSPORT

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url

    def __str__(self) -> str:
        message = super().__str__()
        if self.url:
            return f"{self.stage.value} error: {message} ({self.url})"
        return f"{self.stage.value} error: {message}"


class TransportError(FetchError):
    """Network unreachable, connection reset or non-2xx HTTP status."""

    stage = FetchStage.TRANSPORT

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, url)
        self.status_code = status_code


class DecodeError(FetchError):
    """Response body is not JSON, has the wrong shape or a bad timestamp."""

    stage = FetchStage.DECODE
