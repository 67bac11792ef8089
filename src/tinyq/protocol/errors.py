"""Protocol-level exceptions.

Transport failures live in :mod:`tinyq.transport.base`; everything here
is raised without regard to how the bytes moved.
"""


class TinyQError(Exception):
    """Base class for every error raised by tinyq."""


class InvalidRequest(TinyQError, ValueError):
    """A request failed client-side validation and was never sent."""


class InvalidMessage(InvalidRequest):
    """The message is empty or larger than the server accepts."""


class InvalidQueue(InvalidRequest):
    """The queue name cannot be represented on the wire."""


class ServerError(TinyQError):
    """The server answered with an ERR marker.

    The exception text is the reason supplied by the server.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class MalformedResponse(TinyQError):
    """The response bytes cannot be framed; the connection is unusable."""
