"""Validated configuration for the duration annotator."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import get_settings, load_config_file
from .resources import load_default

__all__ = ["DurationAnnotatorOptions", "load_duration_options"]


class DurationAnnotatorOptions(BaseModel):
    """Word lists and switches read once when an annotator is built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = True
    week_expressions: Tuple[str, ...] = ()
    day_expressions: Tuple[str, ...] = ()
    hour_expressions: Tuple[str, ...] = ()
    minute_expressions: Tuple[str, ...] = ()
    second_expressions: Tuple[str, ...] = ()
    filler_expressions: Tuple[str, ...] = ()
    half_expressions: Tuple[str, ...] = ()
    case_sensitive: bool = Field(False, description="Match word forms without case folding")
    require_quantity: bool = Field(
        False, description="Reject unit words that are not preceded by a quantity"
    )
    enable_dangling_quantity_interpretation: bool = Field(
        False,
        description="Read a trailing bare number in the next smaller unit ('2 hours 30')",
    )

    @field_validator(
        "week_expressions",
        "day_expressions",
        "hour_expressions",
        "minute_expressions",
        "second_expressions",
        "filler_expressions",
        "half_expressions",
        mode="before",
    )
    @classmethod
    def _clean_expressions(cls, value: Any) -> Tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            raise ValueError("expressions must be a list of words, not a single string")
        cleaned = (str(item).strip() for item in value)
        return tuple(dict.fromkeys(item for item in cleaned if item))


def load_duration_options(path: str | Path | None = None) -> DurationAnnotatorOptions:
    """Load options from a JSON, TOML or YAML document.

    Without ``path`` the location resolved by :func:`durata.config.get_settings`
    is used, falling back to the bundled English vocabulary when that file is
    missing. A document may either hold the options at top level or nest them
    under a ``duration`` key.
    """

    payload: Mapping[str, Any]
    if path is not None:
        payload = load_config_file(Path(path))
    else:
        options_path = get_settings().options_path
        payload = load_config_file(options_path) if options_path.exists() else load_default()
    nested = payload.get("duration")
    if isinstance(nested, Mapping):
        payload = nested
    return DurationAnnotatorOptions.model_validate(dict(payload))
