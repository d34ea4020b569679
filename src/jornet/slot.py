"""Single-item hand-off between a background task and the host's poll step."""

import logging
import threading
from typing import Generic, TypeVar

_log = logging.getLogger(__name__)

T = TypeVar("T")


class ResultSlot(Generic[T]):
    """Holds at most one undelivered result.

    ``take()`` returns and clears the value in one step, so a result is
    delivered exactly once. A ``put()`` over an unread value replaces it.
    """

    def __init__(self, name: str = "result") -> None:
        self._name = name
        self._lock = threading.Lock()
        self._value: T | None = None
        self._filled = False

    @property
    def pending(self) -> bool:
        return self._filled

    def put(self, value: T) -> None:
        with self._lock:
            if self._filled:
                _log.debug("Replacing unread %s", self._name)
            self._value = value
            self._filled = True

    def take(self) -> T | None:
        # Checked without the lock: the poll step runs every frame.
        if not self._filled:
            return None
        with self._lock:
            value, self._value = self._value, None
            self._filled = False
        return value
