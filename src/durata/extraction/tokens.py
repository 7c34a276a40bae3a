"""Token type consumed by the annotators and a minimal whitespace tokenizer."""
from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

__all__ = ["Token", "split_at", "strip_boundary", "tokenize"]

_WORD_PATTERN = re.compile(r"\S+")


@dataclass(frozen=True)
class Token:
    """A token with its text and half-open codepoint span ``[start, end)``."""

    value: str
    start: int
    end: int

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)


def tokenize(text: str) -> List[Token]:
    """Split ``text`` on whitespace, keeping codepoint offsets."""

    return [Token(match.group(0), match.start(), match.end()) for match in _WORD_PATTERN.finditer(text)]


def _is_boundary_char(char: str) -> bool:
    return unicodedata.category(char).startswith("P")


def strip_boundary(token: Token) -> Token:
    """Return ``token`` without leading/trailing punctuation.

    "minutes," becomes "minutes" with the span shrunk accordingly. A token
    made only of punctuation comes back empty, anchored at its start.
    """

    value = token.value
    head = 0
    tail = len(value)
    while head < tail and _is_boundary_char(value[head]):
        head += 1
    while tail > head and _is_boundary_char(value[tail - 1]):
        tail -= 1
    if head == 0 and tail == len(value):
        return token
    return Token(value[head:tail], token.start + head, token.start + tail)


def split_at(tokens: Sequence[Token], offsets: Iterable[int]) -> List[Token]:
    """Cut every token that strictly contains one of ``offsets`` at that offset."""

    cuts = sorted(set(offsets))
    result: List[Token] = []
    for token in tokens:
        pieces = [token]
        for cut in cuts:
            last = pieces[-1]
            if last.start < cut < last.end:
                boundary = cut - last.start
                pieces[-1] = Token(last.value[:boundary], last.start, cut)
                pieces.append(Token(last.value[boundary:], cut, last.end))
        result.extend(pieces)
    return result
