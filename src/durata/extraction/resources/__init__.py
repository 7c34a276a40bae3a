"""Vocabulary files bundled with the duration annotator."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

__all__ = ["default_path", "load_default"]

_DEFAULT_OPTIONS = Path(__file__).resolve().parent / "duration_en.json"


def default_path() -> Path:
    """Return the path to the bundled English vocabulary."""

    return _DEFAULT_OPTIONS


def load_default() -> Dict[str, Any]:
    """Load the bundled vocabulary as a raw mapping."""

    with default_path().open("r", encoding="utf-8") as handle:
        return json.load(handle)
