"""Vehicle position models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from pyconnectedcar._constants import COORDINATE_SCALE
from pyconnectedcar.models._base import ApiTimestamp, CarNetBaseModel, safe_float


class PointType(BaseModel):
    """A WGS84 coordinate pair.

    ``str(point)`` renders ``"<latitude>,<longitude>"``, the textual
    form automation platforms use for location channels.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def rounded(self, precision: int) -> tuple[float, float]:
        """Coordinates rounded to *precision* decimal places."""
        return round(self.latitude, precision), round(self.longitude, precision)


def _scale_coordinate(value: Any) -> float | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return parsed / COORDINATE_SCALE


class GeoPosition(CarNetBaseModel):
    """A position reported by the car finder service.

    Built from the ``findCarResponse`` envelope returned by both the
    live and the stored position endpoints, or from an already flat
    dict. Coordinates in the envelope are integer micro-degrees and are
    converted to degrees.

    Parameters
    ----------
    latitude : float or None
        Latitude in degrees, within [-90, 90].
    longitude : float or None
        Longitude in degrees, within [-180, 180].
    car_sent_time : datetime or None
        When the vehicle sent the position (UTC).
    tss_received_time : datetime or None
        When the backend received the position (UTC).
    parking_time : datetime or None
        When the vehicle was parked (UTC). Absent for live positions.
    raw : dict
        Full API response dict.
    """

    latitude: float | None = Field(
        default=None,
        ge=-90.0,
        le=90.0,
        validation_alias=AliasChoices("latitude", "lat"),
    )
    longitude: float | None = Field(
        default=None,
        ge=-180.0,
        le=180.0,
        validation_alias=AliasChoices("longitude", "lng", "lon"),
    )
    car_sent_time: ApiTimestamp = Field(
        default=None,
        validation_alias=AliasChoices("timestampCarSent", "carSentTime", "car_sent_time"),
    )
    tss_received_time: ApiTimestamp = Field(
        default=None,
        validation_alias=AliasChoices("timestampTssReceived", "tssReceivedTime", "tss_received_time"),
    )
    parking_time: ApiTimestamp = Field(
        default=None,
        validation_alias=AliasChoices("parkingTimeUTC", "parkingTime", "lastUpdatedAt", "parking_time"),
    )

    @model_validator(mode="before")
    @classmethod
    def _unwrap_find_car_response(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        find_car = values.get("findCarResponse")
        if not isinstance(find_car, dict):
            return values

        position = find_car.get("Position") or find_car.get("position")
        if not isinstance(position, dict):
            position = {}
        coordinate = position.get("carCoordinate")
        if not isinstance(coordinate, dict):
            coordinate = {}

        flat: dict[str, Any] = {
            "latitude": _scale_coordinate(coordinate.get("latitude")),
            "longitude": _scale_coordinate(coordinate.get("longitude")),
            "timestampCarSent": position.get("timestampCarSent"),
            "timestampTssReceived": position.get("timestampTssReceived"),
            "parkingTimeUTC": find_car.get("parkingTimeUTC"),
            "raw": values.get("raw", values),
        }
        return {key: value for key, value in flat.items() if value is not None}

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def as_point(self) -> PointType | None:
        """Return the coordinates as a :class:`PointType`, ``None`` when absent."""
        if self.latitude is None or self.longitude is None:
            return None
        return PointType(latitude=self.latitude, longitude=self.longitude)

    def parking_duration(self, now: datetime) -> timedelta | None:
        """Time elapsed since the vehicle was parked, never negative.

        A naive *now* is taken as UTC, like naive API timestamps.
        """
        if self.parking_time is None:
            return None
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        elapsed = now - self.parking_time
        return max(elapsed, timedelta(0))
