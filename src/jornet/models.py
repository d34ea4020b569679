"""Wire records exchanged with the leaderboard server."""

import struct
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from jornet.signing import sign, timestamp_now


def as_f32(value: float) -> float:
    """Round a float to IEEE-754 single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _expect(
    data: dict[str, Any],
    field: str,
    types: type | tuple[type, ...],
    required: bool = True,
) -> Any:
    """Read a JSON field, raising ``TypeError`` if it has the wrong type."""
    value = data[field] if required else data.get(field)
    # bool is an int subclass, but true/false is never a valid field here.
    if isinstance(value, bool) or not isinstance(value, types):
        raise TypeError(f"{field!r} has unexpected type {type(value).__name__}")
    return value


@dataclass
class Player:
    """A player, as returned from the server.

    ``key`` is secret: it is only used locally to sign scores. Changing
    ``name`` here is not reflected on the server.
    """

    id: UUID
    key: UUID
    name: str

    def to_json(self) -> dict[str, str]:
        return {"id": str(self.id), "key": str(self.key), "name": self.name}

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Player":
        return cls(
            id=UUID(_expect(data, "id", str)),
            key=UUID(_expect(data, "key", str)),
            name=_expect(data, "name", str),
        )


@dataclass(frozen=True)
class Score:
    """A score from a leaderboard."""

    score: float
    player: str
    meta: str | None
    timestamp: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Score":
        return cls(
            score=float(_expect(data, "score", (int, float))),
            player=_expect(data, "player", str),
            meta=_expect(data, "meta", (str, type(None)), required=False),
            timestamp=_expect(data, "timestamp", str),
        )


@dataclass
class PlayerInput:
    name: str | None = None

    def to_json(self) -> dict[str, str | None]:
        return {"name": self.name}


@dataclass
class ScoreInput:
    """A signed score submission. Built fresh for every send."""

    score: float
    player_id: UUID
    meta: str | None
    timestamp: int
    signature: str

    @classmethod
    def new(
        cls,
        leaderboard_key: UUID,
        score: float,
        player: Player,
        meta: str | None = None,
        timestamp: int | None = None,
    ) -> "ScoreInput":
        if timestamp is None:
            timestamp = timestamp_now()
        score = as_f32(score)
        signature = sign(
            player.key, timestamp, leaderboard_key, player.id, score, meta
        )
        return cls(
            score=score,
            player_id=player.id,
            meta=meta,
            timestamp=timestamp,
            signature=signature,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "player": str(self.player_id),
            "meta": self.meta,
            "timestamp": self.timestamp,
            "k": self.signature,
        }
