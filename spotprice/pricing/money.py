"""Exact SEK amount helpers.

Amounts are ``decimal.Decimal`` throughout; floats never enter the
calculation.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

ORE = Decimal("0.01")
KWH_PER_MWH = Decimal(1000)

# Regular, no-break and narrow no-break spaces used as thousands separators
_GROUP_SPACES = (" ", "\u00a0", "\u202f")

# Plain digits after separator normalization; no exponent, underscores or specials
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_amount(text: str) -> Decimal | None:
    """Parse a locale-formatted decimal string.

    Accepts ``523.45``, ``523,45``, ``1 234,56`` and ``1.234,56``. When both
    ``,`` and ``.`` occur, the right-most one is the decimal separator and
    the other one groups thousands.

    Returns:
        The amount, or None when the text is not a finite number
        (Nord Pool renders missing quotes as ``-``)
    """
    cleaned = text.strip()
    for space in _GROUP_SPACES:
        cleaned = cleaned.replace(space, "")
    if not cleaned:
        return None

    decimal_sep = max((",", "."), key=cleaned.rfind)
    if decimal_sep in cleaned:
        group_sep = "." if decimal_sep == "," else ","
        whole, _, fraction = cleaned.rpartition(decimal_sep)
        whole = whole.replace(group_sep, "")
        if decimal_sep in whole:
            return None
        cleaned = f"{whole}.{fraction}"

    if not _NUMBER.fullmatch(cleaned):
        return None
    return Decimal(cleaned)


def per_kwh(amount_per_mwh: Decimal) -> Decimal:
    """Convert a SEK/MWh quote to SEK/kWh without rounding."""
    return amount_per_mwh / KWH_PER_MWH


def round_to_ore(amount: Decimal) -> Decimal:
    """Round to the minor unit (öre), half up."""
    return amount.quantize(ORE, rounding=ROUND_HALF_UP)
