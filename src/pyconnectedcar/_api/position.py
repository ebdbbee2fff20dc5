"""Car finder position endpoints.

Endpoints:
  - /bs/cf/v1/{brand}/{country}/vehicles/{vin}/position (current position)
  - /bs/cf/v1/{brand}/{country}/vehicles/{vin}/parkingposition (last stored position)

Both return a ``findCarResponse`` envelope. The current position endpoint
answers HTTP 204 while the vehicle is moving; that surfaces here as an
:class:`~pyconnectedcar.exceptions.ApiError` with ``http_code == 204``.
A body that does not validate as a position (for example coordinates
out of range) raises :class:`~pyconnectedcar.exceptions.ApiTransportError`.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyconnectedcar._constants import HTTP_OK, STORED_POSITION_PATH, VEHICLE_POSITION_PATH
from pyconnectedcar._transport import Transport
from pyconnectedcar.config import CarNetConfig
from pyconnectedcar.exceptions import ApiResult, ApiTransportError
from pyconnectedcar.models.position import GeoPosition

_logger = logging.getLogger(__name__)


def _format_endpoint(template: str, config: CarNetConfig) -> str:
    return template.format(brand=config.brand, country=config.country, vin=config.vin.strip())


def vehicle_position_endpoint(config: CarNetConfig) -> str:
    return _format_endpoint(VEHICLE_POSITION_PATH, config)


def stored_position_endpoint(config: CarNetConfig) -> str:
    return _format_endpoint(STORED_POSITION_PATH, config)


def _parse_position(endpoint: str, body: dict[str, Any]) -> GeoPosition:
    try:
        return GeoPosition.model_validate(body)
    except ValidationError as exc:
        _logger.debug("Invalid position from %s: %s", endpoint, exc)
        raise ApiTransportError(
            f"Invalid position from {endpoint}",
            result=ApiResult(http_code=HTTP_OK, endpoint=endpoint, message="invalid position"),
        ) from exc


async def fetch_vehicle_position(config: CarNetConfig, transport: Transport) -> GeoPosition:
    """Fetch the current position of the vehicle."""
    endpoint = vehicle_position_endpoint(config)
    position = _parse_position(endpoint, await transport.get_json(endpoint))
    _logger.debug("Vehicle position: lat=%s lon=%s sent=%s", position.latitude, position.longitude, position.car_sent_time)
    return position


async def fetch_stored_position(config: CarNetConfig, transport: Transport) -> GeoPosition:
    """Fetch the last stored (parking) position of the vehicle."""
    endpoint = stored_position_endpoint(config)
    position = _parse_position(endpoint, await transport.get_json(endpoint))
    _logger.debug("Stored position: lat=%s lon=%s parked=%s", position.latitude, position.longitude, position.parking_time)
    return position
