"""Leading-number extraction from free-form quantity strings."""

from __future__ import annotations

import math
import re

# Returned by parse_leading_number when the leading token is not a number.
NOT_NUMERIC = None

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")


def parse_leading_number(quantity: str | None) -> float | None:
    """Return the numeric value of the first token of a quantity string.

    "200" -> 200.0, "1,5 kg" -> 1.5, "do smaku" -> None, "" -> None.
    Only the first whitespace-separated token is inspected and it must be a
    plain decimal; anything else classifies as NOT_NUMERIC rather than
    raising. Unlike prefix parsing, "200g" and "1/2" are not read as 200
    and 1: a token that is only partly a number stays text.
    """
    if not quantity:
        return NOT_NUMERIC
    text = quantity.strip().replace(",", ".")
    if not text:
        return NOT_NUMERIC

    token = text.split(None, 1)[0]
    if not _DECIMAL_RE.match(token):
        return NOT_NUMERIC
    value = float(token)
    if not math.isfinite(value):
        return NOT_NUMERIC
    return value


def format_number(value: float) -> str:
    """Format a magnitude for display: 500.0 -> "500", 0.1 + 0.2 -> "0.3"."""
    rounded = round(value, 6)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.6f}".rstrip("0").rstrip(".")
