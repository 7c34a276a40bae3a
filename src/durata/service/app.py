from __future__ import annotations

import os
import threading
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from .._version import __version__
from ..extraction.annotator import AnnotatedSpan, AnnotationUsecase, ClassificationResult, DurationAnnotator
from ..extraction.options import load_duration_options

# ---- Env config ----
ENV_OPTIONS = os.getenv("DURATA_OPTIONS_PATH")

# ---- Singleton with lock ----
_annotator_lock = threading.Lock()
_state: Dict[str, Optional[DurationAnnotator]] = {"annotator": None}


def _load_annotator_once() -> DurationAnnotator:
    with _annotator_lock:
        if _state["annotator"] is None:
            _state["annotator"] = DurationAnnotator(load_duration_options(ENV_OPTIONS))
        annotator = _state["annotator"]
    return annotator


# ---- FastAPI app ----
app = FastAPI(title="durata API", version=__version__)


class ClassifyIn(BaseModel):
    text: str = Field(..., description="Full text containing the selection")
    start: int = Field(..., ge=0, description="Selection start (codepoint offset)")
    end: int = Field(..., ge=0, description="Selection end (codepoint offset, exclusive)")
    usecase: AnnotationUsecase = AnnotationUsecase.SMART

    @model_validator(mode="after")
    def _ordered(self) -> "ClassifyIn":
        if self.start > self.end:
            raise ValueError("start must be less or equal to end")
        return self


class ClassifyOut(BaseModel):
    classification: Optional[ClassificationResult]


class AnnotateIn(BaseModel):
    text: str = Field(..., description="Text to scan")
    usecase: AnnotationUsecase = AnnotationUsecase.RAW


class AnnotateOut(BaseModel):
    spans: List[AnnotatedSpan]


@app.get("/health")
def health():
    annotator = _load_annotator_once()
    return {
        "status": "ok",
        "version": __version__,
        "enabled": annotator.enabled,
        "env": {"options": ENV_OPTIONS},
    }


@app.post("/classify", response_model=ClassifyOut)
def classify(payload: ClassifyIn):
    annotator = _load_annotator_once()
    if payload.end > len(payload.text):
        raise HTTPException(status_code=422, detail="end is past the end of the text")
    result = annotator.classify_text(payload.text, (payload.start, payload.end), payload.usecase)
    return ClassifyOut(classification=result)


@app.post("/annotate", response_model=AnnotateOut)
def annotate(payload: AnnotateIn):
    annotator = _load_annotator_once()
    return AnnotateOut(spans=annotator.annotate(payload.text, payload.usecase))
