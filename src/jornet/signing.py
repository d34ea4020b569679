"""HMAC-SHA256 signature binding a score submission to a player's key.

The server recomputes the tag over the same bytes, so the layout below
is a wire contract:

    timestamp        8 bytes, little-endian unsigned
    leaderboard key  16 raw UUID bytes
    player id        16 raw UUID bytes
    score            4 bytes, little-endian IEEE-754 single
    meta             UTF-8 bytes, only when present
"""

import hashlib
import hmac
import struct
import time
from uuid import UUID


def timestamp_now() -> int:
    """Current wall-clock time in whole seconds since the epoch."""
    return int(time.time())


def signing_message(
    timestamp: int,
    leaderboard_key: UUID,
    player_id: UUID,
    score: float,
    meta: str | None = None,
) -> bytes:
    if not 0 <= timestamp < 2**64:
        raise ValueError(f"timestamp out of range: {timestamp}")
    parts = [
        struct.pack("<Q", timestamp),
        leaderboard_key.bytes,
        player_id.bytes,
        struct.pack("<f", score),
    ]
    if meta is not None:
        parts.append(meta.encode("utf-8"))
    return b"".join(parts)


def sign(
    player_key: UUID | bytes,
    timestamp: int,
    leaderboard_key: UUID,
    player_id: UUID,
    score: float,
    meta: str | None = None,
) -> str:
    """Return the lowercase hex HMAC-SHA256 tag for a score submission.

    Raises:
        ValueError: If the key is empty or the timestamp does not fit in
            an unsigned 64-bit integer.
    """
    key = player_key.bytes if isinstance(player_key, UUID) else bytes(player_key)
    if not key:
        raise ValueError("cannot sign a score with an empty player key")

    message = signing_message(timestamp, leaderboard_key, player_id, score, meta)
    return hmac.new(key, message, hashlib.sha256).hexdigest()
