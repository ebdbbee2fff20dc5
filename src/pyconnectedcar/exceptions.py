"""Custom exception hierarchy for pyconnectedcar."""

from __future__ import annotations

import dataclasses


class ConnectedCarError(Exception):
    """Base exception for all pyconnectedcar errors."""


class ConfigError(ConnectedCarError):
    """Invalid or missing configuration."""


@dataclasses.dataclass(frozen=True)
class ApiResult:
    """Outcome of a single API call.

    Parameters
    ----------
    http_code : int
        HTTP status returned by the server, ``0`` when no response was
        received at all.
    endpoint : str
        Endpoint path that was called.
    message : str
        Error description from the server or the transport.
    api_code : str
        Application-level error code from the response body, if any.
    """

    http_code: int = 0
    endpoint: str = ""
    message: str = ""
    api_code: str = ""


class ApiError(ConnectedCarError):
    """API call failed with a coded result."""

    def __init__(self, message: str, *, result: ApiResult | None = None) -> None:
        self.api_result = result if result is not None else ApiResult(message=message)
        super().__init__(message)

    @property
    def http_code(self) -> int:
        return self.api_result.http_code

    @property
    def endpoint(self) -> str:
        return self.api_result.endpoint


class ApiAuthenticationError(ApiError):
    """Access token rejected by the server (HTTP 401/403)."""


class ApiTransportError(ApiError):
    """Network failure, timeout or a response body that is not JSON.

    ``http_code`` is ``0`` when the request never produced a response.
    """


class GeocodingError(ConnectedCarError):
    """Reverse geocoding lookup failed."""
