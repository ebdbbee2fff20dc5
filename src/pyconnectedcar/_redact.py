"""Redaction of CarNet request headers and response bodies for DEBUG logs.

Every CarNet request carries the OAuth access token in an
``Authorization: Bearer ...`` header. Position bodies hold no secrets,
but error bodies from the gateway can echo token or cookie values, and
some gateways return the bearer string inside free-text descriptions.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

_REDACTED = "<redacted>"

_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "access_token",
        "accesstoken",
        "refresh_token",
        "refreshtoken",
        "id_token",
        "token",
        "password",
        "cookie",
        "set-cookie",
    }
)

_BEARER_RE = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)

_MAX_DEPTH = 20


def _clip(text: str, max_string: int) -> str:
    text = _BEARER_RE.sub(rf"\g<1>{_REDACTED}", text)
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* with secrets masked and long strings clipped.

    Keys listed in ``_SECRET_KEYS`` (case-insensitive) are replaced
    wholesale; bearer tokens embedded in any string are masked.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _clip(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return {
            str(key): _REDACTED
            if str(key).lower() in _SECRET_KEYS
            else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
    return repr(value)
