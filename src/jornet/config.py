"""Leaderboard configuration from code, a .env file or the environment."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from uuid import UUID

from dotenv import dotenv_values

from jornet.client import Leaderboard
from jornet.transport import default_transport

ENV_LEADERBOARD_ID = "JORNET_LEADERBOARD_ID"
ENV_LEADERBOARD_KEY = "JORNET_LEADERBOARD_KEY"
ENV_HOST = "JORNET_HOST"
ENV_TRANSPORT = "JORNET_TRANSPORT"

DEFAULT_ENV_PATH = Path(".env")


@dataclass(frozen=True)
class LeaderboardConfig:
    """Identifies a leaderboard and how to reach it."""

    leaderboard_id: UUID
    leaderboard_key: UUID
    host: str | None = None
    transport: str | None = None

    @classmethod
    def with_leaderboard(cls, leaderboard_id: str, key: str) -> "LeaderboardConfig":
        """Parse the leaderboard ``id`` and ``key``. Both must be UUIDs.

        Raises:
            ValueError: If either value is not a UUID.
        """
        try:
            parsed_id = UUID(leaderboard_id)
        except (AttributeError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid leaderboard ID: {leaderboard_id!r}") from exc
        try:
            parsed_key = UUID(key)
        except (AttributeError, TypeError, ValueError) as exc:
            raise ValueError("invalid leaderboard key") from exc
        return cls(leaderboard_id=parsed_id, leaderboard_key=parsed_key)

    def with_host(self, host: str) -> "LeaderboardConfig":
        return replace(self, host=host)

    def with_transport(self, transport: str) -> "LeaderboardConfig":
        return replace(self, transport=transport)

    @classmethod
    def from_env(cls, env_path: Path | None = DEFAULT_ENV_PATH) -> "LeaderboardConfig":
        """Load from a .env file, with process environment variables taking precedence."""
        values: dict[str, str] = {}
        if env_path is not None and env_path.exists():
            values.update(
                {k: v for k, v in dotenv_values(env_path).items() if v is not None}
            )
        values.update(
            {
                name: os.environ[name]
                for name in (ENV_LEADERBOARD_ID, ENV_LEADERBOARD_KEY, ENV_HOST, ENV_TRANSPORT)
                if name in os.environ
            }
        )

        missing = [
            name for name in (ENV_LEADERBOARD_ID, ENV_LEADERBOARD_KEY) if not values.get(name)
        ]
        if missing:
            raise ValueError(f"missing configuration: {', '.join(missing)}")

        config = cls.with_leaderboard(values[ENV_LEADERBOARD_ID], values[ENV_LEADERBOARD_KEY])
        return replace(
            config,
            host=values.get(ENV_HOST) or None,
            transport=values.get(ENV_TRANSPORT) or None,
        )

    def build(self) -> Leaderboard:
        """Create a client for this leaderboard."""
        return Leaderboard(
            self.leaderboard_id,
            self.leaderboard_key,
            host=self.host,
            transport=default_transport(self.transport),
        )
