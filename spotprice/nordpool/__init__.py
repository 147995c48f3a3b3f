"""Nord Pool market data retrieval.

The client lives in ``spotprice.nordpool.client``; it is not imported here
because it depends on the pricing package, which itself uses these models.
"""

from spotprice.nordpool.decoding import decode_response, parse_start_time
from spotprice.nordpool.models import Column, RawRow

__all__ = [
    "Column",
    "RawRow",
    "decode_response",
    "parse_start_time",
]
