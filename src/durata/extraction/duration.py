"""Token-level grammar for duration phrases.

A phrase is one or more *unit groups* ("3 hours", "half an hour",
"1 hour and a half") joined by filler words ("and"). :class:`DurationScanner`
classifies tokens against a :class:`~durata.extraction.lexicon.Lexicon`,
recognises single groups with :meth:`DurationScanner.scan_group` and chains
neighbouring groups with :meth:`DurationScanner.compose_at`.

Every step only looks at a handful of tokens past the current one and never
revisits a token it has rejected, so a scan is linear in the token count.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .lexicon import LexicalEntry, Lexicon, TokenCategory, UnitKind
from .tokens import Token, strip_boundary

__all__ = ["DurationMatch", "DurationScanner", "LexedToken", "UnitGroup"]

# Tokens allowed between two groups of the same phrase.
_SEPARATORS = frozenset({TokenCategory.FILLER, TokenCategory.QUANTITY_WORD})
_QUANTITIES = frozenset({TokenCategory.NUMBER_LITERAL, TokenCategory.QUANTITY_WORD})
_SIGNS = ("-", "‐", "‑", "‒", "–")
_UNRECOGNIZED = LexicalEntry(TokenCategory.UNRECOGNIZED)


@dataclass(frozen=True)
class LexedToken:
    """A token paired with its lexicon entry."""

    token: Token
    entry: LexicalEntry

    @property
    def category(self) -> TokenCategory:
        return self.entry.category


@dataclass(frozen=True)
class UnitGroup:
    """A single ``quantity x unit`` reading such as "3 and half minutes".

    ``quantity`` already includes any half adjustment. ``first_token`` and
    ``last_token`` are inclusive indices of the consumed tokens; ``span`` may
    start later than ``first_token`` because a leading quantity word ("an
    hour") is consumed without being part of the reported text.
    """

    quantity: float
    unit: UnitKind
    span: Tuple[int, int]
    has_half_adjustment: bool
    first_token: int
    last_token: int

    @property
    def millis(self) -> float:
        return self.quantity * self.unit.millis


@dataclass(frozen=True)
class DurationMatch:
    """One or more composed unit groups reported as a single duration."""

    total_ms: int
    span: Tuple[int, int]
    groups: Tuple[UnitGroup, ...]
    first_token: int
    last_token: int


class DurationScanner:
    """Recognise duration phrases over a lexed token sequence."""

    def __init__(
        self,
        lexicon: Lexicon,
        *,
        require_quantity: bool = False,
        interpret_dangling_quantity: bool = False,
    ) -> None:
        self._lexicon = lexicon
        self._require_quantity = require_quantity
        self._interpret_dangling_quantity = interpret_dangling_quantity

    def lex(self, tokens: Sequence[Token]) -> List[LexedToken]:
        """Classify ``tokens``, retrying without boundary punctuation on a miss.

        A leading dash is a sign when it precedes a number: "-5" stays
        unrecognized instead of reading as 5.
        """

        lexed: List[LexedToken] = []
        for token in tokens:
            entry = self._lexicon.classify(token.value)
            if entry.category is TokenCategory.UNRECOGNIZED:
                stripped = strip_boundary(token)
                if stripped is not token:
                    entry = self._lexicon.classify(stripped.value)
                    if entry.category is TokenCategory.NUMBER_LITERAL and token.value.startswith(_SIGNS):
                        entry = _UNRECOGNIZED
                    else:
                        token = stripped
            lexed.append(LexedToken(token, entry))
        return lexed

    def scan_group(
        self,
        lexed: Sequence[LexedToken],
        index: int,
        *,
        allow_suffix: bool = True,
    ) -> Optional[UnitGroup]:
        """Recognise ``[Quantity] [HalfPrefix] Unit [HalfSuffix]`` at ``index``.

        Returns ``None`` when no unit word closes the group; the caller moves
        on to the next position.
        """

        size = len(lexed)
        if index >= size:
            return None

        quantity: Optional[float] = None
        half = False
        anchor: Optional[int] = None
        cursor = index
        head = lexed[cursor]

        if head.category is TokenCategory.QUANTITY_WORD and self._is_category(
            lexed, cursor + 1, TokenCategory.HALF_WORD
        ):
            # "a half hour": the article does not count as a quantity.
            cursor += 1
            head = lexed[cursor]

        if head.category in _QUANTITIES:
            quantity = head.entry.value
            if quantity is None:
                return None
            if head.category is TokenCategory.NUMBER_LITERAL:
                anchor = cursor
            half_at = self._match_half_tail(lexed, cursor + 1)
            if half_at is not None:
                # "3 and half minutes", "one and a half hours"
                quantity += 0.5
                half = True
                anchor = cursor
                cursor = half_at + 1
            else:
                cursor += 1
        elif head.category is TokenCategory.HALF_WORD:
            # "half an hour"
            quantity = 0.5
            half = True
            anchor = cursor
            cursor += 1
            if self._is_category(lexed, cursor, TokenCategory.QUANTITY_WORD):
                cursor += 1
        elif head.category is not TokenCategory.UNIT:
            return None

        if not self._is_category(lexed, cursor, TokenCategory.UNIT):
            return None
        if quantity is None:
            if self._require_quantity:
                return None
            quantity = 1.0

        unit = lexed[cursor].entry.unit
        if unit is None:
            return None
        if anchor is None:
            anchor = cursor
        last = cursor

        if allow_suffix and not half:
            half_at = self._match_half_tail(lexed, cursor + 1)
            # A half word that opens a group of its own is not a suffix:
            # "10 minutes and half an hour".
            if half_at is not None and self.scan_group(lexed, half_at, allow_suffix=False) is None:
                quantity += 0.5
                half = True
                last = half_at

        return UnitGroup(
            quantity=quantity,
            unit=unit,
            span=(lexed[anchor].token.start, lexed[last].token.end),
            has_half_adjustment=half,
            first_token=index,
            last_token=last,
        )

    def compose_at(self, lexed: Sequence[LexedToken], index: int) -> Optional[DurationMatch]:
        """Build the longest phrase whose first group starts at ``index``."""

        first = self.scan_group(lexed, index)
        if first is None:
            return None

        groups = [first]
        size = len(lexed)
        while True:
            cursor = groups[-1].last_token + 1
            following: Optional[UnitGroup] = None
            while cursor < size:
                following = self.scan_group(lexed, cursor)
                if following is not None or lexed[cursor].category not in _SEPARATORS:
                    break
                cursor += 1
            if following is None:
                break
            groups.append(following)

        total = sum(group.millis for group in groups)
        start = groups[0].span[0]
        end = groups[-1].span[1]
        last = groups[-1].last_token

        if self._interpret_dangling_quantity:
            dangling = self._match_dangling_quantity(lexed, last + 1, groups[-1].unit)
            if dangling is not None:
                position, millis = dangling
                total += millis
                end = lexed[position].token.end
                last = position

        # Finite quantities can still overflow once scaled to milliseconds.
        if not math.isfinite(total):
            return None

        return DurationMatch(
            total_ms=int(round(total)),
            span=(start, end),
            groups=tuple(groups),
            first_token=first.first_token,
            last_token=last,
        )

    @staticmethod
    def _is_category(lexed: Sequence[LexedToken], index: int, category: TokenCategory) -> bool:
        return index < len(lexed) and lexed[index].category is category

    def _match_half_tail(self, lexed: Sequence[LexedToken], index: int) -> Optional[int]:
        """Match ``[FILLER] [QUANTITY_WORD] HALF_WORD``; return the half word index."""

        cursor = index
        if self._is_category(lexed, cursor, TokenCategory.FILLER):
            cursor += 1
        if self._is_category(lexed, cursor, TokenCategory.QUANTITY_WORD):
            cursor += 1
        if self._is_category(lexed, cursor, TokenCategory.HALF_WORD):
            return cursor
        return None

    def _match_dangling_quantity(
        self, lexed: Sequence[LexedToken], index: int, unit: UnitKind
    ) -> Optional[Tuple[int, float]]:
        smaller = unit.smaller()
        if smaller is None:
            return None
        cursor = index
        while self._is_category(lexed, cursor, TokenCategory.FILLER):
            cursor += 1
        if not self._is_category(lexed, cursor, TokenCategory.NUMBER_LITERAL):
            return None
        value = lexed[cursor].entry.value
        if value is None:
            return None
        return cursor, value * smaller.millis
