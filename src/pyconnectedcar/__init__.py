"""pyconnectedcar - Async Python client for the CarNet car finder service."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyconnectedcar")
except PackageNotFoundError:
    __version__ = "0+local"
from pyconnectedcar.client import CarNetClient
from pyconnectedcar.config import CarNetConfig
from pyconnectedcar.exceptions import (
    ApiAuthenticationError,
    ApiError,
    ApiResult,
    ApiTransportError,
    ConfigError,
    ConnectedCarError,
    GeocodingError,
)
from pyconnectedcar.handler import ThingStatus, ThingStatusDetail, VehicleHandler
from pyconnectedcar.models import (
    UNDEF,
    ChannelDefinition,
    ChannelType,
    GeoPosition,
    OnOffType,
    PointType,
    UnDefType,
)
from pyconnectedcar.services import ApiBaseService, CarFinderService
from pyconnectedcar.state import ChannelStore, ChannelUpdate

__all__ = [
    "__version__",
    "UNDEF",
    "ApiAuthenticationError",
    "ApiBaseService",
    "ApiError",
    "ApiResult",
    "ApiTransportError",
    "CarFinderService",
    "CarNetClient",
    "CarNetConfig",
    "ChannelDefinition",
    "ChannelStore",
    "ChannelType",
    "ChannelUpdate",
    "ConfigError",
    "ConnectedCarError",
    "GeoPosition",
    "GeocodingError",
    "OnOffType",
    "PointType",
    "ThingStatus",
    "ThingStatusDetail",
    "UnDefType",
    "VehicleHandler",
]
