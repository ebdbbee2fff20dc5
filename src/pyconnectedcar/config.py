"""Client configuration for pyconnectedcar."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyconnectedcar._constants import BASE_URL, NOMINATIM_URL
from pyconnectedcar.exceptions import ConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class CarNetConfig:
    """Client configuration.

    Parameters
    ----------
    vin : str
        Vehicle Identification Number of the polled vehicle.
    access_token : str
        OAuth bearer token for the CarNet API.
    brand : str
        Brand segment of the API path (e.g. ``"VW"``, ``"Audi"``).
    country : str
        Country segment of the API path (e.g. ``"DE"``).
    base_url : str
        API base URL. Defaults to the CarNet ``fs-car`` endpoint.
    request_timeout : float
        Total timeout for a single HTTP request in seconds.
    geocoding_enabled : bool
        Resolve positions to street addresses via Nominatim.
    geocoding_url : str
        Reverse geocoding endpoint.
    geocoding_precision : int
        Decimal places of the coordinates used as address cache key.
    """

    vin: str
    access_token: str
    brand: str = "VW"
    country: str = "DE"
    base_url: str = BASE_URL
    request_timeout: float = 30.0
    geocoding_enabled: bool = False
    geocoding_url: str = NOMINATIM_URL
    geocoding_precision: int = 4

    def __post_init__(self) -> None:
        if not self.vin or not self.vin.strip():
            raise ConfigError("vin must be non-empty")
        if not self.access_token or not self.access_token.strip():
            raise ConfigError("access_token must be non-empty")
        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.geocoding_precision < 0:
            raise ConfigError(f"geocoding_precision must be >= 0, got {self.geocoding_precision}")

    @classmethod
    def from_env(cls, **overrides: Any) -> CarNetConfig:
        """Create configuration from environment variables.

        Reads ``CARNET_VIN``, ``CARNET_ACCESS_TOKEN`` and optional
        ``CARNET_*`` variables. Explicit keyword arguments override
        environment values.

        Raises
        ------
        ConfigError
            If a required value is missing or a numeric variable is
            not parseable.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CARNET_VIN": "vin",
            "CARNET_ACCESS_TOKEN": "access_token",
            "CARNET_BRAND": "brand",
            "CARNET_COUNTRY": "country",
            "CARNET_BASE_URL": "base_url",
            "CARNET_GEOCODING_URL": "geocoding_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        try:
            timeout_env = env.get("CARNET_REQUEST_TIMEOUT")
            if timeout_env is not None and "request_timeout" not in overrides:
                config_kwargs["request_timeout"] = float(timeout_env)

            precision_env = env.get("CARNET_GEOCODING_PRECISION")
            if precision_env is not None and "geocoding_precision" not in overrides:
                config_kwargs["geocoding_precision"] = int(precision_env)
        except ValueError as exc:
            raise ConfigError(f"Invalid numeric CARNET_* variable: {exc}") from exc

        if "geocoding_enabled" not in overrides:
            config_kwargs["geocoding_enabled"] = _env_bool(env.get("CARNET_GEOCODING_ENABLED"), False)

        config_kwargs.update(overrides)

        for required in ("vin", "access_token"):
            if required not in config_kwargs:
                raise ConfigError(f"Missing required setting {required!r} (set CARNET_{required.upper()})")

        return cls(**config_kwargs)
