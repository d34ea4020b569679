"""Client handle for one session against one leaderboard."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any
from uuid import UUID

from jornet.models import Player, PlayerInput, Score, ScoreInput
from jornet.slot import ResultSlot
from jornet.transport import Transport, default_transport

_log = logging.getLogger(__name__)

DEFAULT_HOST = "https://jornet.vleue.com"

MALFORMED_RESPONSE_ERRORS = (KeyError, TypeError, ValueError)


class JornetError(Exception):
    """A leaderboard request failed (network, HTTP status or bad payload)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _parse_uuid(value: UUID | str, what: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"invalid leaderboard {what}: {value!r}") from exc


class Leaderboard:
    """Creates players, sends signed scores and fetches the leaderboard.

    Either ``create_player`` or ``connect_as_player`` must be called before
    scores can be sent.

    Hosts that cannot await in their main loop use the fire-and-forget
    variants (``refresh_leaderboard``, ``spawn_create_player``,
    ``spawn_send_score``) and call ``check_for_updates()`` once per frame to
    publish whatever finished in the background.
    """

    def __init__(
        self,
        leaderboard_id: UUID | str,
        leaderboard_key: UUID | str,
        host: str | None = None,
        transport: Transport | None = None,
    ) -> None:
        self.leaderboard_id = _parse_uuid(leaderboard_id, "ID")
        self.leaderboard_key = _parse_uuid(leaderboard_key, "key")
        self.host = (host or DEFAULT_HOST).rstrip("/")
        self._transport = transport or default_transport()
        self._player: Player | None = None
        self._scores: list[Score] = []
        self._pending_player: ResultSlot[Player] = ResultSlot("player")
        self._pending_scores: ResultSlot[list[Score]] = ResultSlot("leaderboard")
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def players_url(self) -> str:
        return f"{self.host}/api/v1/players"

    @property
    def scores_url(self) -> str:
        return f"{self.host}/api/v1/scores/{self.leaderboard_id}"

    @property
    def scores(self) -> list[Score]:
        """Last leaderboard snapshot published by ``check_for_updates()``."""
        return list(self._scores)

    def get_player(self) -> Player | None:
        """Get the current player.

        Use this to read the name generated by the server, or to save the
        ``id``/``key`` so the same player can reconnect later.
        """
        return self._player

    async def create_player(self, name: str | None = None) -> Player:
        """Create a player. The server generates a name if none is given.

        Raises:
            JornetError: If the request fails. The current player is kept.
        """
        player = await self._request_player(name)
        self._player = player
        return player

    async def _request_player(self, name: str | None) -> Player:
        data = await self._transport.post(
            self.players_url, PlayerInput(name=name).to_json()
        )
        if data is None:
            raise JornetError("error creating a player")
        try:
            return Player.from_json(data)
        except MALFORMED_RESPONSE_ERRORS as exc:
            raise JornetError(f"error creating a player: {exc}") from exc

    def connect_as_player(self, player: Player) -> None:
        """Connect as a returning player. No request is made."""
        self._player = player

    async def send_score(self, score: float) -> bool:
        """Send a score. Returns False if there is no player or the send failed."""
        return await self._send_score(score, None)

    async def send_score_with_meta(self, score: float, meta: str) -> bool:
        """Send a score with metadata (game details, victory conditions, ...)."""
        return await self._send_score(score, meta)

    async def _send_score(self, score: float, meta: str | None) -> bool:
        player = self._player
        if player is None:
            _log.warning("Not sending score %s: no current player", score)
            return False

        submission = ScoreInput.new(self.leaderboard_key, score, player, meta)
        if await self._transport.post(self.scores_url, submission.to_json()) is None:
            _log.warning("Error sending score %s for player %s", score, player.id)
            return False
        return True

    async def get_leaderboard(self) -> list[Score]:
        """Fetch the leaderboard, in the order the server ranked it.

        Raises:
            JornetError: If the request fails or the payload is not a list
                of scores.
        """
        data = await self._transport.get(self.scores_url)
        if data is None:
            raise JornetError("error getting the leaderboard")
        if not isinstance(data, list):
            raise JornetError(
                f"error getting the leaderboard: expected a list, got {type(data).__name__}"
            )
        try:
            return [Score.from_json(item) for item in data]
        except MALFORMED_RESPONSE_ERRORS as exc:
            raise JornetError(f"error getting the leaderboard: {exc}") from exc

    # Fire-and-forget operations, drained by check_for_updates().

    def refresh_leaderboard(self) -> None:
        """Start fetching the leaderboard in the background.

        Must be called from a running event loop.
        """
        self._spawn(self._refresh_leaderboard())

    def spawn_create_player(self, name: str | None = None) -> None:
        """Start creating a player in the background."""
        self._spawn(self._create_player_in_background(name))

    def spawn_send_score(self, score: float, meta: str | None = None) -> None:
        """Start sending a score in the background. The outcome is only logged."""
        self._spawn(self._send_score(score, meta))

    def check_for_updates(self) -> bool:
        """Publish results of finished background operations.

        Returns:
            True if a new player or leaderboard snapshot was published.
        """
        updated = False
        player = self._pending_player.take()
        if player is not None:
            self._player = player
            updated = True
        scores = self._pending_scores.take()
        if scores is not None:
            self._scores = scores
            updated = True
        return updated

    @property
    def has_pending_work(self) -> bool:
        """True while a background operation runs or its result is undrained."""
        return (
            bool(self._tasks)
            or self._pending_player.pending
            or self._pending_scores.pending
        )

    async def aclose(self) -> None:
        """Cancel background operations and close the transport."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        await self._transport.aclose()

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _refresh_leaderboard(self) -> None:
        try:
            scores = await self.get_leaderboard()
        except JornetError as exc:
            _log.warning("Leaderboard refresh failed: %s", exc.message)
            return
        self._pending_scores.put(scores)

    async def _create_player_in_background(self, name: str | None) -> None:
        try:
            player = await self._request_player(name)
        except JornetError as exc:
            _log.warning("Background player creation failed: %s", exc.message)
            return
        self._pending_player.put(player)
