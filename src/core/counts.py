"""
Parsing of human-readable engagement counts ("12.3K", "1,204", "2M")
"""
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_COUNT_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmb])?", re.IGNORECASE)

_MULTIPLIERS = {
    "k": 1_000,
    "m": 1_000_000,
    "b": 1_000_000_000,
}


def parse_count(value: Optional[str]) -> int:
    """
    Convert a displayed count into an integer, rounding halves up.

    Missing or unparseable values are treated as zero, never as an error.
    """
    if not value:
        return 0

    match = _COUNT_PATTERN.match(str(value).replace(",", ""))
    if not match:
        return 0

    number = Decimal(match.group(1))
    suffix = match.group(2)
    if suffix:
        number *= _MULTIPLIERS[suffix.lower()]

    return int(number.quantize(Decimal(1), rounding=ROUND_HALF_UP))
