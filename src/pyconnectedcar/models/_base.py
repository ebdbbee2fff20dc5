"""Base model and value coercion for CarNet API responses.

Every response model inherits from :class:`CarNetBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops CarNet placeholder
  values (``""``, ``"--"``, NaN) so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_SENTINELS = frozenset({"", "--", "NaN", "nan"})

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def parse_api_timestamp(value: Any) -> datetime | None:
    """Convert a CarNet timestamp to an aware UTC datetime.

    Accepts ISO-8601 strings (``Z`` suffix, explicit offset or naive,
    naive being UTC), epoch seconds or epoch milliseconds. Returns
    ``None`` for empty or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        ts = int(value)
        if ts <= 0:
            return None
        if ts >= _MS_THRESHOLD:
            ts = ts // 1000
        # Epochs past the platform's time_t or datetime.max.
        try:
            return datetime.fromtimestamp(ts, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None

    text = str(value).strip()
    if text in _SENTINELS:
        return None
    if text.isdigit():
        return parse_api_timestamp(int(text))
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


ApiTimestamp = Annotated[datetime | None, BeforeValidator(parse_api_timestamp)]
"""Annotated type that coerces CarNet timestamps to aware UTC datetimes."""


class CarNetBaseModel(BaseModel):
    """Base for CarNet API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_api_values(cls, values: Any) -> Any:
        """Drop placeholder values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)
        cleaned = CarNetBaseModel._clean_dict(original)
        # Keep the caller's raw= when constructing from kwargs.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
