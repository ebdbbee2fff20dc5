from __future__ import annotations

import pytest

from pyconnectedcar._constants import BASE_URL
from pyconnectedcar.config import CarNetConfig
from pyconnectedcar.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "CARNET_VIN",
        "CARNET_ACCESS_TOKEN",
        "CARNET_BRAND",
        "CARNET_COUNTRY",
        "CARNET_BASE_URL",
        "CARNET_GEOCODING_URL",
        "CARNET_GEOCODING_ENABLED",
        "CARNET_GEOCODING_PRECISION",
        "CARNET_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = CarNetConfig(vin="WVWZZZ1KZAW000001", access_token="token")

    assert config.brand == "VW"
    assert config.country == "DE"
    assert config.base_url == BASE_URL
    assert config.geocoding_enabled is False


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARNET_VIN", "WAUZZZ8V0KA000001")
    monkeypatch.setenv("CARNET_ACCESS_TOKEN", "token")
    monkeypatch.setenv("CARNET_BRAND", "Audi")
    monkeypatch.setenv("CARNET_REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("CARNET_GEOCODING_ENABLED", "yes")
    monkeypatch.setenv("CARNET_GEOCODING_PRECISION", "3")

    config = CarNetConfig.from_env()

    assert config.vin == "WAUZZZ8V0KA000001"
    assert config.brand == "Audi"
    assert config.request_timeout == 12.5
    assert config.geocoding_enabled is True
    assert config.geocoding_precision == 3


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARNET_VIN", "ENV-VIN")
    monkeypatch.setenv("CARNET_ACCESS_TOKEN", "token")
    monkeypatch.setenv("CARNET_GEOCODING_ENABLED", "true")

    config = CarNetConfig.from_env(vin="OVERRIDE-VIN", geocoding_enabled=False)

    assert config.vin == "OVERRIDE-VIN"
    assert config.geocoding_enabled is False


def test_from_env_unknown_bool_keeps_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARNET_VIN", "VIN")
    monkeypatch.setenv("CARNET_ACCESS_TOKEN", "token")
    monkeypatch.setenv("CARNET_GEOCODING_ENABLED", "maybe")

    assert CarNetConfig.from_env().geocoding_enabled is False


def test_from_env_missing_token_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARNET_VIN", "VIN")

    with pytest.raises(ConfigError, match="access_token"):
        CarNetConfig.from_env()


def test_from_env_invalid_number_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARNET_VIN", "VIN")
    monkeypatch.setenv("CARNET_ACCESS_TOKEN", "token")
    monkeypatch.setenv("CARNET_REQUEST_TIMEOUT", "soon")

    with pytest.raises(ConfigError):
        CarNetConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"vin": "  ", "access_token": "token"},
        {"vin": "VIN", "access_token": ""},
        {"vin": "VIN", "access_token": "token", "request_timeout": 0},
        {"vin": "VIN", "access_token": "token", "geocoding_precision": -1},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        CarNetConfig(**kwargs)  # type: ignore[arg-type]
