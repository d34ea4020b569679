"""Client for Jornet leaderboards: create players, send signed scores, fetch rankings."""

from jornet.client import DEFAULT_HOST, JornetError, Leaderboard
from jornet.config import LeaderboardConfig
from jornet.models import Player, Score, ScoreInput
from jornet.signing import sign
from jornet.slot import ResultSlot
from jornet.transport import (
    CooperativeTransport,
    ThreadedTransport,
    Transport,
    default_transport,
)

__all__ = [
    "CooperativeTransport",
    "DEFAULT_HOST",
    "JornetError",
    "Leaderboard",
    "LeaderboardConfig",
    "Player",
    "ResultSlot",
    "Score",
    "ScoreInput",
    "ThreadedTransport",
    "Transport",
    "default_transport",
    "sign",
]
