"""Data models for CarNet API responses and channel state."""

from pyconnectedcar.models._base import ApiTimestamp, CarNetBaseModel, parse_api_timestamp
from pyconnectedcar.models.channels import (
    UNDEF,
    ChannelDefinition,
    ChannelType,
    ChannelValue,
    OnOffType,
    UnDefType,
    channel_uid,
)
from pyconnectedcar.models.position import GeoPosition, PointType

__all__ = [
    "UNDEF",
    "ApiTimestamp",
    "CarNetBaseModel",
    "ChannelDefinition",
    "ChannelType",
    "ChannelValue",
    "GeoPosition",
    "OnOffType",
    "PointType",
    "UnDefType",
    "channel_uid",
    "parse_api_timestamp",
]
