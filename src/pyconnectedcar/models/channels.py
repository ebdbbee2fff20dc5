"""Channel definitions and channel state values."""

from __future__ import annotations

import enum
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyconnectedcar.models.position import PointType


class ChannelType(StrEnum):
    """Item type accepted by a channel."""

    LOCATION = "Location"
    DATETIME = "DateTime"
    STRING = "String"
    SWITCH = "Switch"


class OnOffType(StrEnum):
    ON = "ON"
    OFF = "OFF"

    @classmethod
    def from_bool(cls, value: bool) -> OnOffType:
        return cls.ON if value else cls.OFF


class UnDefType(enum.Enum):
    """Explicit "value unknown" state, valid for every channel type."""

    UNDEF = "UNDEF"

    def __str__(self) -> str:
        return self.value


UNDEF = UnDefType.UNDEF

ChannelValue = PointType | datetime | str | OnOffType | UnDefType


def channel_uid(group: str, channel_id: str) -> str:
    """Build the ``"<group>#<channel>"`` identifier of a channel."""
    return f"{group}#{channel_id}"


class ChannelDefinition(BaseModel):
    """Static description of a channel owned by a thing."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    group: str
    channel_id: str
    item_type: ChannelType
    label: str = ""
    advanced: bool = False
    read_only: bool = True
    description: str = Field(default="")

    @field_validator("group", "channel_id")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("group and channel_id must be non-empty")
        if "#" in value:
            raise ValueError(f"'#' is reserved as group separator: {value!r}")
        return value

    @property
    def uid(self) -> str:
        return channel_uid(self.group, self.channel_id)
