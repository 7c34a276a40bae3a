"""Duration annotator exposing single-span classification and find-all."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .duration import DurationMatch, DurationScanner
from .lexicon import Lexicon
from .options import DurationAnnotatorOptions, load_duration_options
from .tokens import Token, split_at, tokenize

__all__ = [
    "DURATION_COLLECTION",
    "AnnotatedSpan",
    "AnnotationUsecase",
    "ClassificationResult",
    "DurationAnnotator",
]

LOGGER = logging.getLogger(__name__)

DURATION_COLLECTION = "duration"

Tokenizer = Callable[[str], Sequence[Token]]


class AnnotationUsecase(str, Enum):
    """Caller context forwarded by the annotation platform."""

    SMART = "smart"
    RAW = "raw"


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    collection: str = DURATION_COLLECTION
    duration_ms: int = Field(..., ge=0, description="Total duration in milliseconds")


class AnnotatedSpan(BaseModel):
    """A duration mention located in text."""

    model_config = ConfigDict(frozen=True)

    span: Tuple[int, int]
    classification: Tuple[ClassificationResult, ...]


def _overlap(left: Tuple[int, int], right: Tuple[int, int]) -> int:
    return min(left[1], right[1]) - max(left[0], right[0])


class DurationAnnotator:
    """Find and classify duration phrases such as "an hour and a half".

    The annotator is built once from read-only options and holds no mutable
    state afterwards, so one instance can serve concurrent callers. When the
    options are disabled every call returns an empty result without scanning.
    """

    def __init__(
        self,
        options: Optional[DurationAnnotatorOptions] = None,
        *,
        tokenizer: Tokenizer = tokenize,
    ) -> None:
        self._options = options if options is not None else load_duration_options()
        self._lexicon = Lexicon.from_options(self._options)
        self._scanner = DurationScanner(
            self._lexicon,
            require_quantity=self._options.require_quantity,
            interpret_dangling_quantity=self._options.enable_dangling_quantity_interpretation,
        )
        self._tokenizer = tokenizer
        LOGGER.debug(
            "Duration annotator ready (enabled=%s, %d word forms)",
            self._options.enabled,
            len(self._lexicon),
        )

    @property
    def options(self) -> DurationAnnotatorOptions:
        return self._options

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

    @property
    def enabled(self) -> bool:
        return self._options.enabled

    def find_all(
        self,
        tokens: Sequence[Token],
        usecase: AnnotationUsecase = AnnotationUsecase.SMART,
    ) -> List[AnnotatedSpan]:
        """Return every non-overlapping duration mention, left to right."""

        if not self.enabled:
            LOGGER.debug("Duration annotator disabled; skipping find_all (usecase=%s)", usecase.value)
            return []
        return [self._to_annotated_span(match) for match in self._find_matches(tokens)]

    def annotate(
        self,
        text: str,
        usecase: AnnotationUsecase = AnnotationUsecase.SMART,
    ) -> List[AnnotatedSpan]:
        """Tokenize ``text`` and run :meth:`find_all` on it."""

        if not self.enabled:
            return []
        return self.find_all(self._tokenizer(text), usecase)

    def classify_text(
        self,
        text: str,
        span: Tuple[int, int],
        usecase: AnnotationUsecase = AnnotationUsecase.SMART,
    ) -> Optional[ClassificationResult]:
        """Classify the duration overlapping the codepoint ``span`` of ``text``.

        ``span`` does not have to sit on token boundaries: the phrase found
        around it only needs to intersect it. When several phrases do, the one
        sharing the most characters with ``span`` wins.
        """

        if not self.enabled:
            LOGGER.debug("Duration annotator disabled; skipping classify_text (usecase=%s)", usecase.value)
            return None

        start = max(0, span[0])
        end = min(len(text), span[1])
        if start >= end:
            return None
        selection = (start, end)

        tokens = list(self._tokenizer(text))
        if not any(_overlap(token.span, selection) > 0 for token in tokens):
            return None

        match = self._best_overlap(self._find_matches(tokens), selection)
        if match is None:
            # The selection may cut through glued text ("in15 minutesok?").
            match = self._best_overlap(self._find_matches(split_at(tokens, selection)), selection)
        if match is None:
            return None
        return ClassificationResult(duration_ms=match.total_ms)

    def _find_matches(self, tokens: Sequence[Token]) -> List[DurationMatch]:
        lexed = self._scanner.lex(tokens)
        matches: List[DurationMatch] = []
        index = 0
        while index < len(lexed):
            match = self._scanner.compose_at(lexed, index)
            if match is None:
                index += 1
                continue
            matches.append(match)
            index = match.last_token + 1
        return matches

    @staticmethod
    def _best_overlap(matches: Sequence[DurationMatch], selection: Tuple[int, int]) -> Optional[DurationMatch]:
        best: Optional[DurationMatch] = None
        best_overlap = 0
        for match in matches:
            overlap = _overlap(match.span, selection)
            if overlap > best_overlap:
                best, best_overlap = match, overlap
        return best

    @staticmethod
    def _to_annotated_span(match: DurationMatch) -> AnnotatedSpan:
        return AnnotatedSpan(
            span=match.span,
            classification=(ClassificationResult(duration_ms=match.total_ms),),
        )
