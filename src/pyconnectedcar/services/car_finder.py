"""Car finder service: vehicle position, parking position and moving state."""

from __future__ import annotations

import logging

from pyconnectedcar._constants import (
    CHANNEL_CAR_MOVING,
    CHANNEL_GROUP_LOCATION,
    CHANNEL_LOCATION_ADDRESS,
    CHANNEL_LOCATION_GEO,
    CHANNEL_LOCATION_TIME,
    CHANNEL_PARK_ADDRESS,
    CHANNEL_PARK_LOCATION,
    CHANNEL_PARK_TIME,
    HTTP_NO_CONTENT,
    SERVICE_CAR_FINDER,
)
from pyconnectedcar.exceptions import ApiError
from pyconnectedcar.models.channels import UNDEF, ChannelDefinition, OnOffType
from pyconnectedcar.services.base import AddressResolver, ApiBaseService, PositionApi
from pyconnectedcar.state.store import ChannelSink

_logger = logging.getLogger(__name__)


class CarFinderService(ApiBaseService):
    """Maps the car finder API onto the ``location`` channel group.

    The live position endpoint answers HTTP 204 while the vehicle is
    driving. That is reported as ``vehicleMoving = ON`` instead of an
    error; every other API error propagates to the caller.
    """

    def __init__(
        self,
        thing_id: str,
        api: PositionApi,
        sink: ChannelSink,
        *,
        address_resolver: AddressResolver | None = None,
    ) -> None:
        super().__init__(
            SERVICE_CAR_FINDER,
            thing_id,
            api,
            sink,
            channel_group=CHANNEL_GROUP_LOCATION,
            address_resolver=address_resolver,
        )

    def create_channels(self, channels: dict[str, ChannelDefinition]) -> bool:
        self.add_channels(
            channels,
            CHANNEL_GROUP_LOCATION,
            CHANNEL_LOCATION_GEO,
            CHANNEL_LOCATION_TIME,
            CHANNEL_LOCATION_ADDRESS,
            CHANNEL_PARK_LOCATION,
            CHANNEL_PARK_ADDRESS,
            CHANNEL_PARK_TIME,
            CHANNEL_CAR_MOVING,
        )
        return True

    async def service_update(self) -> bool:
        updated = False
        try:
            _logger.debug("%s: Get Vehicle Position", self.thing_id)
            position = await self.api.get_vehicle_position()
            point = position.as_point()
            updated |= self.update_channel(CHANNEL_LOCATION_GEO, point if point is not None else UNDEF)
            updated |= self.update_channel(
                CHANNEL_LOCATION_TIME,
                position.car_sent_time if position.car_sent_time is not None else UNDEF,
            )
            updated |= await self.update_location_address(point, CHANNEL_LOCATION_ADDRESS)

            _logger.debug("%s: Get Stored Position", self.thing_id)
            stored = await self.api.get_stored_position()
            park_point = stored.as_point()
            updated |= self.update_channel(CHANNEL_PARK_LOCATION, park_point if park_point is not None else UNDEF)
            updated |= await self.update_location_address(park_point, CHANNEL_PARK_ADDRESS)
            updated |= self.update_channel(
                CHANNEL_PARK_TIME,
                stored.parking_time if stored.parking_time is not None else UNDEF,
            )
            updated |= self.update_channel(CHANNEL_CAR_MOVING, OnOffType.OFF)
        except ApiError as exc:
            _logger.debug("%s: API error (HTTP %d): %s", self.thing_id, exc.http_code, exc)
            updated |= self.update_channel(CHANNEL_LOCATION_GEO, UNDEF)
            updated |= self.update_channel(CHANNEL_LOCATION_TIME, UNDEF)
            if exc.http_code != HTTP_NO_CONTENT:
                raise
            _logger.debug("%s: No position available, vehicle is moving", self.thing_id)
            updated |= self.update_channel(CHANNEL_CAR_MOVING, OnOffType.ON)
        return updated
