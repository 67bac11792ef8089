"""Transport layer implementations."""

import os

from .base import (
    RequestInProgress,
    State,
    TransportError,
    TransportTimeout,
    TransportClosed,
    TransportConnectionError,
)

_BACKEND = os.environ.get("TINYQ_TRANSPORT", "zmq")

if _BACKEND == "zmq":
    from .zmq.stream import StreamTransport
else:
    raise ImportError(f"unknown TINYQ_TRANSPORT backend: {_BACKEND!r}")

from .session import RequestSession
