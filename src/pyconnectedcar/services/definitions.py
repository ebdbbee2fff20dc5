"""Catalogue of the channels services may create."""

from __future__ import annotations

from pyconnectedcar._constants import (
    CHANNEL_CAR_MOVING,
    CHANNEL_GROUP_LOCATION,
    CHANNEL_LOCATION_ADDRESS,
    CHANNEL_LOCATION_GEO,
    CHANNEL_LOCATION_TIME,
    CHANNEL_PARK_ADDRESS,
    CHANNEL_PARK_LOCATION,
    CHANNEL_PARK_TIME,
)
from pyconnectedcar.models.channels import ChannelDefinition, ChannelType


def _define(
    group: str,
    channel_id: str,
    item_type: ChannelType,
    label: str,
    *,
    advanced: bool = False,
) -> ChannelDefinition:
    return ChannelDefinition(group=group, channel_id=channel_id, item_type=item_type, label=label, advanced=advanced)


CHANNEL_DEFINITIONS: dict[str, ChannelDefinition] = {
    definition.uid: definition
    for definition in (
        _define(CHANNEL_GROUP_LOCATION, CHANNEL_LOCATION_GEO, ChannelType.LOCATION, "Current Position"),
        _define(CHANNEL_GROUP_LOCATION, CHANNEL_LOCATION_TIME, ChannelType.DATETIME, "Position Timestamp"),
        _define(CHANNEL_GROUP_LOCATION, CHANNEL_LOCATION_ADDRESS, ChannelType.STRING, "Position Address"),
        _define(CHANNEL_GROUP_LOCATION, CHANNEL_PARK_LOCATION, ChannelType.LOCATION, "Parking Position"),
        _define(CHANNEL_GROUP_LOCATION, CHANNEL_PARK_ADDRESS, ChannelType.STRING, "Parking Address"),
        _define(CHANNEL_GROUP_LOCATION, CHANNEL_PARK_TIME, ChannelType.DATETIME, "Parking Time"),
        _define(CHANNEL_GROUP_LOCATION, CHANNEL_CAR_MOVING, ChannelType.SWITCH, "Vehicle Moving"),
    )
}
