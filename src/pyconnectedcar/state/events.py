"""Channel update events emitted by the store."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChannelUpdate(BaseModel):
    """A changed channel value.

    ``value`` is one of the channel value types (see
    :data:`pyconnectedcar.models.channels.ChannelValue`) and is passed
    through unvalidated so enum members keep their identity.
    """

    model_config = ConfigDict(frozen=True)

    thing_id: str = Field(..., description="Owning thing (vehicle VIN)")
    channel_uid: str = Field(..., description="Channel identifier, '<group>#<channel>'")
    value: Any
    previous: Any = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("thing_id")
    @classmethod
    def _normalize_thing_id(cls, value: str) -> str:
        thing_id = value.strip()
        if not thing_id:
            raise ValueError("thing_id must be non-empty")
        return thing_id

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
