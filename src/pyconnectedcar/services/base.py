"""Common plumbing for API services.

A service owns a set of channels of one thing. It declares them in
:meth:`ApiBaseService.create_channels` and refreshes them from the API in
:meth:`ApiBaseService.service_update`.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from pyconnectedcar.exceptions import GeocodingError
from pyconnectedcar.models.channels import UNDEF, ChannelDefinition, channel_uid
from pyconnectedcar.models.position import GeoPosition, PointType
from pyconnectedcar.services.definitions import CHANNEL_DEFINITIONS
from pyconnectedcar.state.store import ChannelSink

_logger = logging.getLogger(__name__)

AddressResolver = Callable[[PointType], Awaitable[str | None]]


class PositionApi(Protocol):
    """Vehicle position lookups (implemented by :class:`pyconnectedcar.client.CarNetClient`)."""

    async def get_vehicle_position(self) -> GeoPosition: ...

    async def get_stored_position(self) -> GeoPosition: ...


class ApiBaseService(abc.ABC):
    """Base class for services bound to one thing."""

    def __init__(
        self,
        service_id: str,
        thing_id: str,
        api: Any,
        sink: ChannelSink,
        *,
        channel_group: str,
        address_resolver: AddressResolver | None = None,
    ) -> None:
        self.service_id = service_id
        self.thing_id = thing_id
        self.api = api
        self._sink = sink
        self._channel_group = channel_group
        self._address_resolver = address_resolver

    def __repr__(self) -> str:
        return f"{type(self).__name__}(service_id={self.service_id!r}, thing_id={self.thing_id!r})"

    # ------------------------------------------------------------------
    # Channel creation
    # ------------------------------------------------------------------

    def add_channels(
        self,
        channels: dict[str, ChannelDefinition],
        group: str,
        *channel_ids: str,
        enabled: bool = True,
    ) -> None:
        """Add catalogue definitions for *channel_ids* of *group* to *channels*.

        Raises
        ------
        KeyError
            If a channel is not in the catalogue.
        """
        if not enabled:
            return
        for channel_id in channel_ids:
            uid = channel_uid(group, channel_id)
            definition = CHANNEL_DEFINITIONS.get(uid)
            if definition is None:
                raise KeyError(f"{self.thing_id}: no channel definition for {uid!r}")
            channels.setdefault(uid, definition)

    @abc.abstractmethod
    def create_channels(self, channels: dict[str, ChannelDefinition]) -> bool:
        """Add this service's channel definitions; return ``True`` if the service is usable."""

    # ------------------------------------------------------------------
    # Channel updates
    # ------------------------------------------------------------------

    def update_channel(self, channel_id: str, value: Any, *, group: str | None = None) -> bool:
        """Write *value* to a channel of this service; ``True`` when it changed."""
        uid = channel_uid(group or self._channel_group, channel_id)
        return self._sink.update(self.thing_id, uid, value)

    async def update_location_address(self, point: PointType | None, channel_id: str) -> bool:
        """Resolve *point* to an address and write it to *channel_id*.

        The channel becomes UNDEF when there is no point, no resolver, no
        known address or the lookup fails. Lookup failures are logged and
        never fail the poll.
        """
        if point is None or self._address_resolver is None:
            return self.update_channel(channel_id, UNDEF)
        try:
            address = await self._address_resolver(point)
        except GeocodingError as exc:
            _logger.debug("%s: Address lookup for %s failed: %s", self.thing_id, point, exc)
            address = None
        return self.update_channel(channel_id, address if address else UNDEF)

    @abc.abstractmethod
    async def service_update(self) -> bool:
        """Refresh the service's channels; return ``True`` if any channel changed."""
