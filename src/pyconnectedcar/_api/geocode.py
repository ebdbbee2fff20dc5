"""Reverse geocoding of vehicle positions via Nominatim."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from pyconnectedcar._constants import HTTP_OK
from pyconnectedcar.exceptions import GeocodingError
from pyconnectedcar.models.position import PointType

_logger = logging.getLogger(__name__)


class AddressCache:
    """Resolved addresses keyed by rounded coordinates.

    A parked vehicle reports the same position on every poll; rounding keeps
    GPS jitter below the precision from triggering a new lookup.
    """

    def __init__(self, precision: int = 4, max_entries: int = 256) -> None:
        self._precision = precision
        self._max_entries = max_entries
        self._entries: dict[tuple[float, float], str | None] = {}

    def _key(self, point: PointType) -> tuple[float, float]:
        return point.rounded(self._precision)

    def __contains__(self, point: object) -> bool:
        return isinstance(point, PointType) and self._key(point) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, point: PointType) -> str | None:
        return self._entries.get(self._key(point))

    def put(self, point: PointType, address: str | None) -> None:
        key = self._key(point)
        if key not in self._entries and len(self._entries) >= self._max_entries:
            # Drop the oldest entry (dicts keep insertion order).
            self._entries.pop(next(iter(self._entries)))
        self._entries[key] = address


async def reverse_geocode(
    http_session: aiohttp.ClientSession,
    point: PointType,
    *,
    url: str,
    user_agent: str,
    timeout: float = 10.0,
) -> str | None:
    """Resolve *point* to a display address.

    Returns ``None`` when the service knows no address for the point.

    Raises
    ------
    GeocodingError
        On network failure, non-200 status or an unparseable body.
    """
    params = {
        "format": "jsonv2",
        "lat": str(point.latitude),
        "lon": str(point.longitude),
    }
    headers = {"user-agent": user_agent, "accept": "application/json"}
    try:
        async with http_session.get(
            url,
            params=params,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            if resp.status != HTTP_OK:
                raise GeocodingError(f"Reverse geocoding of {point} failed: HTTP {resp.status}")
            body: Any = await resp.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise GeocodingError(f"Reverse geocoding of {point} failed: {exc!r}") from exc

    if not isinstance(body, dict):
        raise GeocodingError(f"Reverse geocoding of {point} returned {type(body).__name__}")

    address = body.get("display_name")
    _logger.debug("Reverse geocoded %s -> %s", point, address)
    if not isinstance(address, str) or not address.strip():
        return None
    return address.strip()
