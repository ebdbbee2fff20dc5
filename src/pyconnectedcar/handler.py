"""Vehicle handler: owns the services of one vehicle and drives their updates."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import StrEnum

from pyconnectedcar.client import CarNetClient
from pyconnectedcar.exceptions import ApiAuthenticationError, ConnectedCarError
from pyconnectedcar.models.channels import ChannelDefinition
from pyconnectedcar.services.base import ApiBaseService
from pyconnectedcar.services.car_finder import CarFinderService
from pyconnectedcar.state.store import ChannelSink

_logger = logging.getLogger(__name__)


class ThingStatus(StrEnum):
    UNKNOWN = "UNKNOWN"
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class ThingStatusDetail(StrEnum):
    NONE = "NONE"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    COMMUNICATION_ERROR = "COMMUNICATION_ERROR"


class VehicleHandler:
    """Registers service channels with the sink and refreshes them.

    API errors stop at this layer: they are logged and reflected in
    :attr:`status` so one failing poll does not tear down the host.
    """

    def __init__(self, thing_id: str, sink: ChannelSink, services: Iterable[ApiBaseService]) -> None:
        self.thing_id = thing_id
        self._sink = sink
        self._services = list(services)
        self._active: list[ApiBaseService] = []
        self.status = ThingStatus.UNKNOWN
        self.status_detail = ThingStatusDetail.NONE
        self.status_message = ""

    @classmethod
    def for_client(cls, client: CarNetClient, sink: ChannelSink) -> VehicleHandler:
        """Handler with the car finder service bound to *client*."""
        vin = client.config.vin.strip()
        service = CarFinderService(vin, client, sink, address_resolver=client.resolve_address)
        return cls(vin, sink, [service])

    @property
    def services(self) -> list[ApiBaseService]:
        return list(self._active)

    def initialize(self) -> dict[str, ChannelDefinition]:
        """Collect channel definitions from all services and register them."""
        channels: dict[str, ChannelDefinition] = {}
        self._active = []
        for service in self._services:
            if service.create_channels(channels):
                self._active.append(service)
            else:
                _logger.debug("%s: Service %s not available", self.thing_id, service.service_id)
        self._sink.register(self.thing_id, channels.values())
        _logger.debug("%s: %d channels created for %d services", self.thing_id, len(channels), len(self._active))
        self._set_status(ThingStatus.ONLINE)
        return channels

    async def refresh(self) -> bool:
        """Run every active service once; return ``True`` if any channel changed."""
        updated = False
        for service in self._active:
            try:
                updated |= await service.service_update()
            except ApiAuthenticationError as exc:
                _logger.warning("%s: Access denied by %s: %s", self.thing_id, service.service_id, exc)
                self._set_status(ThingStatus.OFFLINE, ThingStatusDetail.CONFIGURATION_ERROR, str(exc))
                return updated
            except ConnectedCarError as exc:
                _logger.warning("%s: Service %s update failed: %s", self.thing_id, service.service_id, exc)
                self._set_status(ThingStatus.OFFLINE, ThingStatusDetail.COMMUNICATION_ERROR, str(exc))
                return updated
        self._set_status(ThingStatus.ONLINE)
        return updated

    def _set_status(
        self,
        status: ThingStatus,
        detail: ThingStatusDetail = ThingStatusDetail.NONE,
        message: str = "",
    ) -> None:
        if status != self.status or detail != self.status_detail:
            _logger.info("%s: Thing status %s/%s %s", self.thing_id, status, detail, message)
        self.status = status
        self.status_detail = detail
        self.status_message = message
