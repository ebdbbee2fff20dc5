"""In-memory channel store.

This is the only component allowed to hold channel values. Services write
through :meth:`ChannelStore.update`; the store decides whether the value
changed and notifies subscribers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from pyconnectedcar.models.channels import ChannelDefinition
from pyconnectedcar.state.events import ChannelUpdate
from pyconnectedcar.state.policy import has_changed, is_compatible

_logger = logging.getLogger(__name__)

Listener = Callable[[ChannelUpdate], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ChannelSink(Protocol):
    """Structural sink interface used by services.

    Host integrations may pass their own implementation; :class:`ChannelStore`
    is the in-process one.
    """

    def register(self, thing_id: str, definitions: Iterable[ChannelDefinition]) -> None: ...

    def update(self, thing_id: str, channel_uid: str, value: Any) -> bool: ...


class ChannelSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    definition: ChannelDefinition
    value: Any = None
    updated_at: datetime | None = None


class ThingChannels(BaseModel):
    model_config = ConfigDict(extra="forbid")

    channels: dict[str, ChannelSnapshot] = Field(default_factory=dict)


class ChannelStore:
    """In-memory store for channel values, keyed by thing and channel uid.

    A channel holds ``None`` until its first update (never written), then
    one of the channel value types, ``UNDEF`` included.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._things: dict[str, ThingChannels] = {}
        self._listeners: list[Listener] = []

    def _thing(self, thing_id: str) -> ThingChannels:
        thing = self._things.get(thing_id)
        if thing is None:
            thing = ThingChannels()
            self._things[thing_id] = thing
        return thing

    def register(self, thing_id: str, definitions: Iterable[ChannelDefinition]) -> None:
        """Register channel definitions; re-registering keeps current values."""
        thing = self._thing(thing_id)
        for definition in definitions:
            existing = thing.channels.get(definition.uid)
            if existing is not None:
                existing.definition = definition
                continue
            thing.channels[definition.uid] = ChannelSnapshot(definition=definition)
            _logger.debug("%s: Registered channel %s (%s)", thing_id, definition.uid, definition.item_type)

    def definitions(self, thing_id: str) -> list[ChannelDefinition]:
        thing = self._things.get(thing_id)
        if thing is None:
            return []
        return [snapshot.definition for snapshot in thing.channels.values()]

    def update(self, thing_id: str, channel_uid: str, value: Any) -> bool:
        """Store *value* and return ``True`` when it differs from the current value.

        Raises
        ------
        ValueError
            If the channel is not registered or the value type does not fit
            the channel's item type.
        """
        thing = self._things.get(thing_id)
        snapshot = thing.channels.get(channel_uid) if thing is not None else None
        if snapshot is None:
            raise ValueError(f"{thing_id}: unknown channel {channel_uid!r}")
        if value is None or not is_compatible(snapshot.definition.item_type, value):
            raise ValueError(
                f"{thing_id}: value {value!r} not valid for {snapshot.definition.item_type} channel {channel_uid!r}"
            )

        previous = snapshot.value
        if not has_changed(previous, value):
            return False

        now = self._clock()
        snapshot.value = value
        snapshot.updated_at = now
        self._notify(
            ChannelUpdate(
                thing_id=thing_id,
                channel_uid=channel_uid,
                value=value,
                previous=previous,
                observed_at=now,
            )
        )
        return True

    def get(self, thing_id: str, channel_uid: str) -> Any:
        """Current value of a channel, ``None`` if unknown or never written."""
        thing = self._things.get(thing_id)
        if thing is None:
            return None
        snapshot = thing.channels.get(channel_uid)
        return snapshot.value if snapshot is not None else None

    def snapshot(self, thing_id: str) -> dict[str, Any]:
        """All channel values of a thing."""
        thing = self._things.get(thing_id)
        if thing is None:
            return {}
        return {uid: snapshot.value for uid, snapshot in thing.channels.items()}

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* for every changed value. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, update: ChannelUpdate) -> None:
        for listener in list(self._listeners):
            try:
                listener(update)
            except Exception:
                _logger.warning("Channel listener failed for %s", update.channel_uid, exc_info=True)
