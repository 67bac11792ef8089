"""Transport-agnostic session layer."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from ..protocol.errors import MalformedResponse
from ..protocol.request import Request
from ..protocol.wire import Incomplete
from .base import (
    RequestInProgress,
    Transport,
    TransportConnectionError,
    TransportTimeout,
)


logger = logging.getLogger('tinyq')


class PendingRequest:
    """Client-side record of the one request awaiting a response."""

    def __init__(self, req: Request):
        self.req = req
        self.buffer = bytearray()

    def feed(self, data: bytes) -> Any:
        """Append *data* and attempt to parse the cumulative response.

        Raises :class:`tinyq.protocol.wire.Incomplete` if more bytes are
        needed, :class:`tinyq.protocol.errors.ServerError` if the server
        refused the request.
        """
        self.buffer += data
        return self.req.parse(self.buffer)


class RequestSession:
    """Client-side request/response pattern logic.

    The protocol carries no request identifiers, so a response can only
    be matched to a request if there is never more than one outstanding.
    The session enforces that: :attr:`pending` is either None (idle) or
    the single :class:`PendingRequest` awaiting its response.
    """

    def __init__(self, transport: Transport, timeout: Optional[float] = None):
        self.transport = transport
        self.timeout = timeout
        self.pending: Optional[PendingRequest] = None
        self._lock = threading.Lock()

    def send(self, request: Request) -> Any:
        """Issue *request* and block until its response is complete."""

        if not self._lock.acquire(blocking=False):
            raise RequestInProgress(f"{request!r}: another request is pending on this connection")

        try:
            self.transport.open()
            self.pending = PendingRequest(request)
            self.transport.write(request.frame())

            while True:
                data = self.transport.receive(self.timeout)
                try:
                    return self.pending.feed(data)
                except Incomplete:
                    continue

        except (TransportTimeout, MalformedResponse):
            # Whatever arrives next would be read as the response to the
            # next request.
            self.transport.close()
            raise
        except TransportConnectionError as exc:
            logger.debug("%r failed: %s", request, exc)
            raise
        finally:
            self.pending = None
            self._lock.release()

    def close(self) -> None:
        """Close the transport, failing any pending request."""

        self.transport.interrupt()

        with self._lock:
            self.transport.close()
