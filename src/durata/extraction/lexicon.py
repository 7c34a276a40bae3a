"""Word-form lexicon mapping token text to duration categories."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from .options import DurationAnnotatorOptions
from .parsers.numbers import QUANTITY_WORDS, parse_quantity

__all__ = ["Lexicon", "LexicalEntry", "TokenCategory", "UnitKind"]


class UnitKind(str, Enum):
    """Duration granularities understood by the annotator."""

    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"

    @property
    def millis(self) -> int:
        return _UNIT_MILLIS[self]

    def smaller(self) -> Optional["UnitKind"]:
        """Return the next finer granularity, ``None`` for seconds."""

        order = list(UnitKind)
        index = order.index(self)
        return order[index + 1] if index + 1 < len(order) else None


_UNIT_MILLIS = {
    UnitKind.WEEK: 7 * 24 * 60 * 60 * 1000,
    UnitKind.DAY: 24 * 60 * 60 * 1000,
    UnitKind.HOUR: 60 * 60 * 1000,
    UnitKind.MINUTE: 60 * 1000,
    UnitKind.SECOND: 1000,
}


class TokenCategory(str, Enum):
    UNIT = "unit"
    QUANTITY_WORD = "quantity_word"
    HALF_WORD = "half_word"
    FILLER = "filler"
    NUMBER_LITERAL = "number_literal"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class LexicalEntry:
    """Category of a word form, with the unit kind or value where relevant."""

    category: TokenCategory
    unit: Optional[UnitKind] = None
    value: Optional[float] = None


_UNRECOGNIZED = LexicalEntry(TokenCategory.UNRECOGNIZED)
_HALF = LexicalEntry(TokenCategory.HALF_WORD, value=0.5)
_FILLER = LexicalEntry(TokenCategory.FILLER)


class Lexicon:
    """Immutable table of configured word forms.

    Entries are inserted lowest priority first so that a form listed twice
    keeps its strongest reading: unit, then half word, then quantity word,
    then filler.
    """

    def __init__(self, entries: Mapping[str, LexicalEntry], *, case_sensitive: bool = False) -> None:
        self._entries: Mapping[str, LexicalEntry] = MappingProxyType(dict(entries))
        self._case_sensitive = case_sensitive

    @classmethod
    def from_options(cls, options: DurationAnnotatorOptions) -> "Lexicon":
        case_sensitive = options.case_sensitive

        def key(word: str) -> str:
            return word if case_sensitive else word.casefold()

        entries: Dict[str, LexicalEntry] = {}

        def register(words: Iterable[str], entry: LexicalEntry) -> None:
            for word in words:
                entries[key(word)] = entry

        register(options.filler_expressions, _FILLER)
        for word in QUANTITY_WORDS:
            entries[key(word)] = LexicalEntry(TokenCategory.QUANTITY_WORD, value=parse_quantity(word))
        register(options.half_expressions, _HALF)
        units = (
            (UnitKind.WEEK, options.week_expressions),
            (UnitKind.DAY, options.day_expressions),
            (UnitKind.HOUR, options.hour_expressions),
            (UnitKind.MINUTE, options.minute_expressions),
            (UnitKind.SECOND, options.second_expressions),
        )
        for kind, words in units:
            register(words, LexicalEntry(TokenCategory.UNIT, unit=kind))
        return cls(entries, case_sensitive=case_sensitive)

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        return self.classify(word).category is not TokenCategory.UNRECOGNIZED

    def classify(self, word: str) -> LexicalEntry:
        """Return the category of ``word`` (exact whole-word lookup)."""

        if not word:
            return _UNRECOGNIZED
        entry = self._entries.get(word if self._case_sensitive else word.casefold())
        if entry is not None:
            return entry
        value = parse_quantity(word, case_sensitive=self._case_sensitive)
        if value is not None:
            return LexicalEntry(TokenCategory.NUMBER_LITERAL, value=value)
        return _UNRECOGNIZED
