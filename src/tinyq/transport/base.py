"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`tinyq.protocol` so the protocol remains transport-agnostic.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Optional

from ..protocol.errors import TinyQError


# Transport agnostic exceptions

class TransportError(TinyQError):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A request did not receive a timely response."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class TransportClosed(TransportConnectionError):
    """The connection was closed, by the peer or locally, mid-request."""


class RequestInProgress(TransportError):
    """A second request was issued while one is still pending."""


class State(enum.Enum):
    """Connection lifecycle."""

    ABSENT = "absent"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class Transport(ABC):
    """Minimal contract for a wire-level transport.

    Only the thread that currently owns the request session may call
    :meth:`open`, :meth:`write`, :meth:`receive` and :meth:`close`;
    :meth:`interrupt` is safe from any thread.
    """

    state = State.ABSENT

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection, if it is not already open."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Queue *data* for transmission; does not wait for delivery."""

    @abstractmethod
    def receive(self, timeout: Optional[float] = None) -> bytes:
        """Return the next chunk of bytes from the peer."""

    @abstractmethod
    def interrupt(self) -> None:
        """Wake a thread blocked in :meth:`open` or :meth:`receive`."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return self.state == State.OPEN
