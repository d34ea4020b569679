"""Shared test fixtures for jornet tests."""

import json
from collections.abc import AsyncGenerator
from typing import Any
from uuid import UUID, uuid4

import httpx
import pytest

from jornet.client import Leaderboard
from jornet.models import Player
from jornet.signing import sign
from jornet.transport import CooperativeTransport, ThreadedTransport, Transport

LEADERBOARD_ID = UUID("11111111-1111-1111-1111-111111111111")
LEADERBOARD_KEY = UUID("22222222-2222-2222-2222-222222222222")
STUB_HOST = "http://stub.test"

GENERATED_NAMES = ("brave-otter", "quiet-falcon", "lucky-newt")


class StubServer:
    """In-memory leaderboard server for httpx.MockTransport.

    Records every request, verifies score signatures the way the real
    server does, and serves a fixed leaderboard snapshot.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.players: dict[UUID, Player] = {}
        self.submissions: list[dict[str, Any]] = []
        self.leaderboard: list[dict[str, Any]] = []
        self.fail_with: int | None = None

    @property
    def score_posts(self) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == "POST" and r.url.path.startswith("/api/v1/scores/")
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"error": "stub failure"})

        path = request.url.path
        if request.method == "POST" and path == "/api/v1/players":
            return self._create_player(json.loads(request.content))
        if path == f"/api/v1/scores/{LEADERBOARD_ID}":
            if request.method == "POST":
                return self._submit_score(json.loads(request.content))
            if request.method == "GET":
                return httpx.Response(200, json=self.leaderboard)
        return httpx.Response(404)

    def _create_player(self, body: dict[str, Any]) -> httpx.Response:
        name = body.get("name") or GENERATED_NAMES[len(self.players) % len(GENERATED_NAMES)]
        player = Player(id=uuid4(), key=uuid4(), name=name)
        self.players[player.id] = player
        return httpx.Response(201, json=player.to_json())

    def _submit_score(self, body: dict[str, Any]) -> httpx.Response:
        player = self.players.get(UUID(body["player"]))
        if player is None:
            return httpx.Response(404)
        expected = sign(
            player.key,
            body["timestamp"],
            LEADERBOARD_KEY,
            player.id,
            body["score"],
            body["meta"],
        )
        if body["k"] != expected:
            return httpx.Response(401)
        self.submissions.append(body)
        return httpx.Response(201)


class RecordingTransport(Transport):
    """Transport that records calls and returns canned results."""

    def __init__(self, result: Any = None) -> None:
        self.result = result
        self.calls: list[tuple[str, str, Any]] = []
        self.closed = False

    async def get(self, url: str) -> Any:
        self.calls.append(("GET", url, None))
        return self.result

    async def post(self, url: str, body: Any) -> Any:
        self.calls.append(("POST", url, body))
        return self.result

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def stub_server() -> StubServer:
    return StubServer()


@pytest.fixture(params=["cooperative", "threaded"])
async def stub_transport(
    request: pytest.FixtureRequest, stub_server: StubServer
) -> AsyncGenerator[Transport, None]:
    """Both transports, wired to the stub server."""
    mock = httpx.MockTransport(stub_server.handle)
    if request.param == "cooperative":
        transport: Transport = CooperativeTransport(httpx.AsyncClient(transport=mock))
    else:
        transport = ThreadedTransport(httpx.Client(transport=mock))
    yield transport
    await transport.aclose()


@pytest.fixture
async def cooperative_transport(
    stub_server: StubServer,
) -> AsyncGenerator[CooperativeTransport, None]:
    transport = CooperativeTransport(
        httpx.AsyncClient(transport=httpx.MockTransport(stub_server.handle))
    )
    yield transport
    await transport.aclose()


@pytest.fixture
def leaderboard(stub_transport: Transport) -> Leaderboard:
    return Leaderboard(LEADERBOARD_ID, LEADERBOARD_KEY, host=STUB_HOST, transport=stub_transport)


@pytest.fixture
def sample_player() -> Player:
    return Player(
        id=UUID("33333333-3333-3333-3333-333333333333"),
        key=UUID("44444444-4444-4444-4444-444444444444"),
        name="Ada",
    )
