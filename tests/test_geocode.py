from __future__ import annotations

from typing import Any

import aiohttp
import pytest

from pyconnectedcar._api.geocode import AddressCache, reverse_geocode
from pyconnectedcar.exceptions import GeocodingError
from pyconnectedcar.models.position import PointType

POINT = PointType(latitude=48.137154, longitude=11.576124)


class _FakeResponse:
    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        self._body = body

    async def json(self, content_type: str | None = None) -> Any:
        if isinstance(self._body, Exception):
            raise self._body
        return self._body

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append((url, kwargs))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response


async def _lookup(session: _FakeSession) -> str | None:
    return await reverse_geocode(
        session,  # type: ignore[arg-type]
        POINT,
        url="https://nominatim.test/reverse",
        user_agent="pyconnectedcar-tests",
    )


@pytest.mark.asyncio
async def test_reverse_geocode_returns_display_name() -> None:
    session = _FakeSession(_FakeResponse(200, {"display_name": " Marienplatz 1, 80331 München "}))

    assert await _lookup(session) == "Marienplatz 1, 80331 München"
    url, kwargs = session.calls[0]
    assert url == "https://nominatim.test/reverse"
    assert kwargs["params"] == {"format": "jsonv2", "lat": "48.137154", "lon": "11.576124"}
    assert kwargs["headers"]["user-agent"] == "pyconnectedcar-tests"


@pytest.mark.asyncio
async def test_reverse_geocode_without_address() -> None:
    session = _FakeSession(_FakeResponse(200, {"error": "Unable to geocode"}))

    assert await _lookup(session) is None


@pytest.mark.parametrize(
    "session",
    [
        _FakeSession(_FakeResponse(503, {})),
        _FakeSession(_FakeResponse(200, ValueError("bad json"))),
        _FakeSession(_FakeResponse(200, ["not", "a", "dict"])),
        _FakeSession(error=aiohttp.ClientConnectionError("down")),
    ],
)
@pytest.mark.asyncio
async def test_reverse_geocode_failures(session: _FakeSession) -> None:
    with pytest.raises(GeocodingError):
        await _lookup(session)


class TestAddressCache:
    def test_nearby_points_share_entry(self) -> None:
        cache = AddressCache(precision=4)
        cache.put(POINT, "Marienplatz")

        assert PointType(latitude=48.13716, longitude=11.57613) in cache
        assert cache.get(PointType(latitude=48.13716, longitude=11.57613)) == "Marienplatz"
        assert PointType(latitude=48.2, longitude=11.5) not in cache

    def test_none_is_cached(self) -> None:
        cache = AddressCache()
        cache.put(POINT, None)

        assert POINT in cache
        assert cache.get(POINT) is None

    def test_oldest_entry_evicted(self) -> None:
        cache = AddressCache(precision=0, max_entries=2)
        first = PointType(latitude=1.0, longitude=1.0)
        cache.put(first, "a")
        cache.put(PointType(latitude=2.0, longitude=2.0), "b")
        cache.put(PointType(latitude=3.0, longitude=3.0), "c")

        assert len(cache) == 2
        assert first not in cache
