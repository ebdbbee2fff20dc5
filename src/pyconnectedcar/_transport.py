"""HTTP transport for the CarNet REST API."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from pyconnectedcar._constants import AUTH_FAILURE_CODES, HTTP_NO_CONTENT, HTTP_OK, USER_AGENT
from pyconnectedcar._redact import redact_for_log
from pyconnectedcar.config import CarNetConfig
from pyconnectedcar.exceptions import ApiAuthenticationError, ApiError, ApiResult, ApiTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> dict[str, Any]:
        ...


def _error_details(text: str) -> tuple[str, str]:
    """Extract ``(api_code, description)`` from a CarNet error body."""
    try:
        body = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return "", ""
    if not isinstance(body, dict):
        return "", ""
    error = body.get("error")
    if not isinstance(error, dict):
        return "", ""
    code = error.get("errorCode") or error.get("error_code") or ""
    description = error.get("description") or error.get("error_description") or ""
    return str(code), str(description)


class HttpTransport:
    """Bearer-token authenticated JSON transport."""

    def __init__(self, config: CarNetConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "authorization": f"Bearer {self._config.access_token}",
            "user-agent": USER_AGENT,
        }

    async def get_json(self, endpoint: str) -> dict[str, Any]:
        """GET *endpoint* and return the decoded JSON object.

        Raises
        ------
        ApiError
            For any non-200 status. HTTP 204 is raised as well: callers
            decide what "no content" means for their endpoint.
        ApiAuthenticationError
            For HTTP 401/403.
        ApiTransportError
            For network failures, timeouts and non-JSON bodies.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = self._headers()
        _logger.debug("GET %s headers=%s", url, redact_for_log(headers))

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                status = resp.status
                text = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ApiTransportError(
                f"Request to {endpoint} failed: {exc!r}",
                result=ApiResult(endpoint=endpoint, message=str(exc)),
            ) from exc

        _logger.debug("GET %s -> HTTP %d", endpoint, status)

        if status == HTTP_NO_CONTENT:
            raise ApiError(
                f"HTTP {status} (no content) from {endpoint}",
                result=ApiResult(http_code=status, endpoint=endpoint, message="no content"),
            )
        if status != HTTP_OK:
            api_code, description = _error_details(text)
            result = ApiResult(
                http_code=status,
                endpoint=endpoint,
                message=description or text[:200],
                api_code=api_code,
            )
            error_cls = ApiAuthenticationError if status in AUTH_FAILURE_CODES else ApiError
            raise error_cls(f"HTTP {status} from {endpoint}: {result.message}", result=result)

        try:
            body: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ApiTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                result=ApiResult(http_code=status, endpoint=endpoint, message="invalid JSON"),
            ) from exc

        if not isinstance(body, dict):
            raise ApiTransportError(
                f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
                result=ApiResult(http_code=status, endpoint=endpoint, message="unexpected JSON type"),
            )

        _logger.debug("GET %s body=%s", endpoint, redact_for_log(body))
        return body
