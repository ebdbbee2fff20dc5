"""High-level async client for the CarNet car finder API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyconnectedcar._api import geocode as _geocode_api
from pyconnectedcar._api import position as _position_api
from pyconnectedcar._constants import USER_AGENT
from pyconnectedcar._transport import HttpTransport, Transport
from pyconnectedcar.config import CarNetConfig
from pyconnectedcar.exceptions import ConnectedCarError
from pyconnectedcar.models.position import GeoPosition, PointType

_logger = logging.getLogger(__name__)


class CarNetClient:
    """Async client for the CarNet vehicle position API.

    Usage::

        async with CarNetClient(config) as client:
            position = await client.get_vehicle_position()
    """

    def __init__(
        self,
        config: CarNetConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._addresses = _geocode_api.AddressCache(precision=config.geocoding_precision)

    @property
    def config(self) -> CarNetConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CarNetClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        if self._transport is None:
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise ConnectedCarError("Client not initialized. Use 'async with CarNetClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------

    async def get_vehicle_position(self) -> GeoPosition:
        """Current position; raises ``ApiError`` with ``http_code == 204`` while moving."""
        return await _position_api.fetch_vehicle_position(self._config, self._require_transport())

    async def get_stored_position(self) -> GeoPosition:
        """Last stored (parking) position."""
        return await _position_api.fetch_stored_position(self._config, self._require_transport())

    # ------------------------------------------------------------------
    # Addresses
    # ------------------------------------------------------------------

    async def resolve_address(self, point: PointType) -> str | None:
        """Street address of *point*, ``None`` when geocoding is disabled or unknown.

        Raises
        ------
        GeocodingError
            If the lookup fails. Failures are not cached.
        """
        if not self._config.geocoding_enabled:
            return None
        if point in self._addresses:
            return self._addresses.get(point)
        if self._http_session is None:
            raise ConnectedCarError("Client not initialized. Use 'async with CarNetClient(...) as client:'")

        address = await _geocode_api.reverse_geocode(
            self._http_session,
            point,
            url=self._config.geocoding_url,
            user_agent=f"pyconnectedcar ({USER_AGENT})",
            timeout=self._config.request_timeout,
        )
        self._addresses.put(point, address)
        return address
