"""HTTP transports for the leaderboard client."""

import sys

from jornet.transport.base import Transport
from jornet.transport.cooperative import CooperativeTransport
from jornet.transport.threaded import ThreadedTransport

TRANSPORTS: dict[str, type[Transport]] = {
    "threaded": ThreadedTransport,
    "cooperative": CooperativeTransport,
}


def default_transport(kind: str | None = None) -> Transport:
    """Create the transport for this host.

    Browser hosts (Pyodide reports ``sys.platform == "emscripten"``) have no
    usable threads, so they get the cooperative transport unless ``kind``
    says otherwise.
    """
    if kind is None:
        kind = "cooperative" if sys.platform == "emscripten" else "threaded"
    try:
        transport_cls = TRANSPORTS[kind]
    except KeyError:
        raise ValueError(
            f"unknown transport {kind!r}, expected one of {sorted(TRANSPORTS)}"
        ) from None
    return transport_cls()


__all__ = [
    "CooperativeTransport",
    "TRANSPORTS",
    "ThreadedTransport",
    "Transport",
    "default_transport",
]
