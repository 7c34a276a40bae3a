"""Rule-based duration extraction primitives.

The :mod:`durata.extraction` package exposes the configurable word lexicon,
the token-level duration grammar and the :class:`DurationAnnotator` entry
point used by the CLI and the HTTP service.
"""

from .annotator import (
    DURATION_COLLECTION,
    AnnotatedSpan,
    AnnotationUsecase,
    ClassificationResult,
    DurationAnnotator,
)
from .duration import DurationMatch, DurationScanner, UnitGroup
from .lexicon import Lexicon, LexicalEntry, TokenCategory, UnitKind
from .options import DurationAnnotatorOptions, load_duration_options
from .parsers.numbers import QUANTITY_WORDS, parse_number_literal, parse_quantity
from .tokens import Token, tokenize

__all__ = [
    "DURATION_COLLECTION",
    "AnnotatedSpan",
    "AnnotationUsecase",
    "ClassificationResult",
    "DurationAnnotator",
    "DurationAnnotatorOptions",
    "DurationMatch",
    "DurationScanner",
    "Lexicon",
    "LexicalEntry",
    "QUANTITY_WORDS",
    "Token",
    "TokenCategory",
    "UnitGroup",
    "UnitKind",
    "load_duration_options",
    "parse_number_literal",
    "parse_quantity",
    "tokenize",
]
