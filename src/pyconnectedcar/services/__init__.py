"""Services map API data onto channels, one service per API feature."""

from pyconnectedcar.services.base import AddressResolver, ApiBaseService, PositionApi
from pyconnectedcar.services.car_finder import CarFinderService

__all__ = ["AddressResolver", "ApiBaseService", "CarFinderService", "PositionApi"]
