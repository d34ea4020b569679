"""Transport that runs blocking httpx calls on anyio's worker threads."""

from functools import partial
from typing import Any

import anyio
import httpx

from jornet.transport.base import (
    DEFAULT_TIMEOUT,
    Transport,
    log_transport_error,
    parse_response,
)


class ThreadedTransport(Transport):
    """Each request runs in a worker thread; the awaiting caller suspends."""

    def __init__(
        self, client: httpx.Client | None = None, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        self._client = client or httpx.Client(timeout=timeout)

    def _request(self, method: str, url: str, **kwargs: Any) -> Any | None:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            log_transport_error(method, url, exc)
            return None
        return parse_response(method, url, response)

    async def get(self, url: str) -> Any | None:
        return await anyio.to_thread.run_sync(partial(self._request, "GET", url))

    async def post(self, url: str, body: Any) -> Any | None:
        return await anyio.to_thread.run_sync(
            partial(self._request, "POST", url, json=body)
        )

    async def aclose(self) -> None:
        await anyio.to_thread.run_sync(self._client.close)
