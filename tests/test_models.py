"""Tests for position and channel models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from pyconnectedcar.models._base import parse_api_timestamp
from pyconnectedcar.models.channels import UNDEF, ChannelDefinition, ChannelType, OnOffType, channel_uid
from pyconnectedcar.models.position import GeoPosition, PointType

FIND_CAR_PAYLOAD: dict = {
    "findCarResponse": {
        "Position": {
            "timestampCarSent": "2023-05-01T10:15:30",
            "timestampTssReceived": "2023-05-01T10:15:32Z",
            "carCoordinate": {"latitude": 48137154, "longitude": 11576124},
        },
        "parkingTimeUTC": "2023-05-01T10:14:00Z",
    }
}

# ------------------------------------------------------------------
# Timestamps
# ------------------------------------------------------------------


class TestParseApiTimestamp:
    def test_naive_iso_is_utc(self) -> None:
        assert parse_api_timestamp("2023-05-01T10:15:30") == datetime(2023, 5, 1, 10, 15, 30, tzinfo=UTC)

    def test_zulu_suffix(self) -> None:
        assert parse_api_timestamp("2023-05-01T10:15:30Z") == datetime(2023, 5, 1, 10, 15, 30, tzinfo=UTC)

    def test_offset_converted_to_utc(self) -> None:
        parsed = parse_api_timestamp("2023-05-01T12:15:30+02:00")
        assert parsed == datetime(2023, 5, 1, 10, 15, 30, tzinfo=UTC)
        assert parsed is not None and parsed.tzinfo == UTC

    def test_epoch_seconds_and_milliseconds(self) -> None:
        expected = datetime(2023, 5, 1, 10, 15, 30, tzinfo=UTC)
        assert parse_api_timestamp(1_682_936_130) == expected
        assert parse_api_timestamp(1_682_936_130_000) == expected
        assert parse_api_timestamp("1682936130") == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "--", "not a date", 0, -5, True, "99999999999999999999", 10**20, float("inf"), float("nan")],
    )
    def test_unusable_values(self, value: object) -> None:
        assert parse_api_timestamp(value) is None


# ------------------------------------------------------------------
# GeoPosition
# ------------------------------------------------------------------


class TestGeoPosition:
    def test_find_car_response_envelope(self) -> None:
        position = GeoPosition.model_validate(FIND_CAR_PAYLOAD)

        assert position.latitude == pytest.approx(48.137154)
        assert position.longitude == pytest.approx(11.576124)
        assert position.car_sent_time == datetime(2023, 5, 1, 10, 15, 30, tzinfo=UTC)
        assert position.tss_received_time == datetime(2023, 5, 1, 10, 15, 32, tzinfo=UTC)
        assert position.parking_time == datetime(2023, 5, 1, 10, 14, tzinfo=UTC)
        assert position.raw == FIND_CAR_PAYLOAD

    def test_flat_payload(self) -> None:
        position = GeoPosition.model_validate(
            {"latitude": "52.52", "longitude": 13.405, "lastUpdatedAt": "2023-05-01T08:00:00Z"}
        )

        assert position.latitude == 52.52
        assert position.longitude == 13.405
        assert position.car_sent_time is None
        assert position.parking_time == datetime(2023, 5, 1, 8, tzinfo=UTC)

    def test_empty_parking_time_is_none(self) -> None:
        payload = {
            "findCarResponse": {
                "Position": {"carCoordinate": {"latitude": 1000000, "longitude": 2000000}},
                "parkingTimeUTC": "",
            }
        }

        position = GeoPosition.model_validate(payload)

        assert position.parking_time is None
        assert position.as_point() == PointType(latitude=1.0, longitude=2.0)

    def test_missing_coordinates(self) -> None:
        position = GeoPosition.model_validate({"findCarResponse": {"parkingTimeUTC": "2023-05-01T10:14:00Z"}})

        assert not position.has_coordinates
        assert position.as_point() is None

    def test_parking_duration(self) -> None:
        position = GeoPosition.model_validate(FIND_CAR_PAYLOAD)
        now = datetime(2023, 5, 1, 12, 14, tzinfo=UTC)

        assert position.parking_duration(now) == timedelta(hours=2)
        assert position.parking_duration(datetime(2023, 5, 1, 10, tzinfo=UTC)) == timedelta(0)

    def test_parking_duration_naive_now_is_utc(self) -> None:
        position = GeoPosition.model_validate(FIND_CAR_PAYLOAD)

        assert position.parking_duration(datetime(2023, 5, 1, 11, 14)) == timedelta(hours=1)

    def test_out_of_range_coordinates_rejected(self) -> None:
        payload = {"findCarResponse": {"Position": {"carCoordinate": {"latitude": 91000000, "longitude": 0}}}}

        with pytest.raises(ValidationError):
            GeoPosition.model_validate(payload)
        with pytest.raises(ValidationError):
            GeoPosition(latitude=10.0, longitude=-180.5)

    def test_parking_duration_without_parking_time(self) -> None:
        position = GeoPosition(latitude=1.0, longitude=2.0)

        assert position.parking_duration(datetime.now(UTC)) is None

    def test_frozen(self) -> None:
        position = GeoPosition.model_validate(FIND_CAR_PAYLOAD)

        with pytest.raises(ValidationError):
            position.latitude = 0.0  # type: ignore[misc]


# ------------------------------------------------------------------
# PointType
# ------------------------------------------------------------------


class TestPointType:
    def test_str_is_lat_comma_lon(self) -> None:
        assert str(PointType(latitude=48.137154, longitude=11.576124)) == "48.137154,11.576124"

    def test_rounded(self) -> None:
        assert PointType(latitude=48.137154, longitude=11.576124).rounded(3) == (48.137, 11.576)

    @pytest.mark.parametrize(("lat", "lon"), [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.1)])
    def test_out_of_range(self, lat: float, lon: float) -> None:
        with pytest.raises(ValidationError):
            PointType(latitude=lat, longitude=lon)


# ------------------------------------------------------------------
# Channels
# ------------------------------------------------------------------


class TestChannelDefinition:
    def test_uid(self) -> None:
        definition = ChannelDefinition(group="location", channel_id="position", item_type=ChannelType.LOCATION)

        assert definition.uid == "location#position"
        assert channel_uid("location", "position") == definition.uid

    def test_hash_in_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChannelDefinition(group="location", channel_id="a#b", item_type=ChannelType.STRING)

    def test_on_off_from_bool(self) -> None:
        assert OnOffType.from_bool(True) is OnOffType.ON
        assert OnOffType.from_bool(False) is OnOffType.OFF

    def test_undef_str(self) -> None:
        assert str(UNDEF) == "UNDEF"
