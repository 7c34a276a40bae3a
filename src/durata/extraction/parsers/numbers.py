"""Resolve quantity tokens (digit literals and quantity words) to numbers."""
from __future__ import annotations

import math
import re
from typing import Optional

__all__ = ["QUANTITY_WORDS", "parse_number_literal", "parse_quantity"]

# Not configurable: each of these reads as exactly one unit.
QUANTITY_WORDS = frozenset({"a", "an", "one"})

_LITERAL_PATTERN = re.compile(r"^(?:\d+(?:[.,]\d+)?|[.,]\d+)$")
_THOUSANDS_PATTERN = re.compile(r"^\d{1,3}(?:,\d{3})+(?:\.\d+)?$")


def parse_number_literal(raw: str) -> Optional[float]:
    """Parse an unsigned integer or decimal literal such as ``15`` or ``2.5``.

    Comma-grouped thousands read as English numerals ("1,500" is 1500,
    "1,000.5" is 1000.5). Any other single comma is a decimal separator
    ("2,5"). Signs, exponents and values too large for a float are not
    quantities and yield ``None``.
    """

    candidate = raw.strip()
    if _THOUSANDS_PATTERN.match(candidate):
        normalized = candidate.replace(",", "")
    elif _LITERAL_PATTERN.match(candidate):
        normalized = candidate.replace(",", ".")
    else:
        return None
    value = float(normalized)
    if not math.isfinite(value):
        return None
    return value


def parse_quantity(raw: str, *, case_sensitive: bool = False) -> Optional[float]:
    """Return the quantity expressed by ``raw`` or ``None``."""

    word = raw if case_sensitive else raw.casefold()
    if word in QUANTITY_WORDS:
        return 1.0
    return parse_number_literal(raw)
