"""Parser primitives for deterministic duration extraction."""

from .numbers import QUANTITY_WORDS, parse_number_literal, parse_quantity

__all__ = [
    "QUANTITY_WORDS",
    "parse_number_literal",
    "parse_quantity",
]
