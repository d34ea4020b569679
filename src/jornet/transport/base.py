"""Transport interface and shared response handling."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

_log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def parse_response(method: str, url: str, response: httpx.Response) -> Any | None:
    """Decode a JSON response, or ``None`` if the request failed.

    Only 2xx replies succeed. Redirects are not followed, so a 3xx means the
    request was not handled.

    An empty successful body decodes to ``{}`` so callers can tell
    "succeeded without payload" from failure.
    """
    if not response.is_success:
        _log.warning("%s %s failed with HTTP %s", method, url, response.status_code)
        return None
    if not response.content.strip():
        return {}
    try:
        return response.json()
    except ValueError as exc:
        _log.warning("%s %s returned invalid JSON: %s", method, url, exc)
        return None


def log_transport_error(method: str, url: str, exc: httpx.HTTPError) -> None:
    _log.warning("%s %s failed: %s", method, url, exc)


class Transport(ABC):
    """GET/POST of JSON payloads. Every failure collapses to ``None``."""

    @abstractmethod
    async def get(self, url: str) -> Any | None: ...

    @abstractmethod
    async def post(self, url: str, body: Any) -> Any | None: ...

    @abstractmethod
    async def aclose(self) -> None: ...
