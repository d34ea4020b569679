"""Transport for single-threaded hosts: requests run on the event loop."""

from typing import Any

import httpx

from jornet.transport.base import (
    DEFAULT_TIMEOUT,
    Transport,
    log_transport_error,
    parse_response,
)


class CooperativeTransport(Transport):
    """Awaits httpx's async client directly. Never starts a thread.

    Pair with ``Leaderboard.refresh_leaderboard()`` and a per-frame
    ``check_for_updates()`` so the host loop is never blocked.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any | None:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            log_transport_error(method, url, exc)
            return None
        return parse_response(method, url, response)

    async def get(self, url: str) -> Any | None:
        return await self._request("GET", url)

    async def post(self, url: str, body: Any) -> Any | None:
        return await self._request("POST", url, json=body)

    async def aclose(self) -> None:
        await self._client.aclose()
