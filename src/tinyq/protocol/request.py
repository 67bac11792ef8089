""" Request classes for each tinyq operation. A :class:`Request` knows how
    to put itself on the wire, and how to recognize its own response in
    the bytes that come back.
"""

from __future__ import annotations

from typing import List as ListType, Optional, Union

from . import fields
from . import wire
from .errors import InvalidMessage, InvalidQueue, ServerError


def _queue_name(queue) -> str:

    if not isinstance(queue, str):
        raise InvalidQueue(f"queue name must be a string, got {type(queue).__name__}")

    if queue == "":
        raise InvalidQueue("queue name must not be empty")

    # The server reads the name as a single whitespace-delimited token.

    if any(character.isspace() for character in queue):
        raise InvalidQueue(f"queue name may not contain whitespace: {queue!r}")

    if len(queue.encode("utf-8")) > fields.MAXIMUM_QUEUE_NAME:
        raise InvalidQueue(
            f"queue name exceeds {fields.MAXIMUM_QUEUE_NAME} bytes: {queue!r}"
        )

    return queue


class Request:
    """ The :class:`Request` is the base for every operation. Subclasses
        set the operation name, implement :func:`frame` to produce the
        outgoing bytes, and :func:`parse` to interpret the cumulative bytes
        of the response.

        :func:`parse` has three possible outcomes: it returns the typed
        result, it raises :class:`tinyq.protocol.errors.ServerError` if
        the server rejected the request, or it raises
        :class:`tinyq.protocol.wire.Incomplete` if the response has not
        fully arrived yet. It holds no state between calls; every call
        starts again from the first byte of the buffer.
    """

    operation = None

    def __init__(self, queue: str):
        self.queue = _queue_name(queue)


    def __repr__(self):
        return f"{self.__class__.__name__}({self.queue!r})"


    def frame(self) -> bytes:
        return wire.pack_line(self.operation, self.queue)


    def parse(self, buffer):
        raise NotImplementedError()


    def _status(self, buffer):
        """ Read the header line, raising :class:`ServerError` for any
            ERR marker. Returns the remainder of the header and the offset
            of the first byte after it.
        """

        line, offset = wire.read_line(buffer)
        status, remainder = wire.split_status(line)

        if status == fields.ERR:
            raise ServerError(remainder)

        return remainder, offset


# end of class Request



class Enqueue(Request):
    """ Append *message* to the named queue. A :class:`str` message is
        encoded as UTF-8; the server rejects empty messages, so they are
        refused here before anything goes on the wire.
    """

    operation = fields.ENQUEUE

    def __init__(self, queue: str, message: Union[bytes, bytearray, memoryview, str]):

        Request.__init__(self, queue)

        if isinstance(message, str):
            message = message.encode("utf-8")
        elif isinstance(message, (bytes, bytearray, memoryview)):
            message = bytes(message)
        else:
            raise InvalidMessage(
                f"message must be bytes or str, got {type(message).__name__}"
            )

        if len(message) == 0:
            raise InvalidMessage("Invalid message length: message is empty")

        if len(message) > fields.MAXIMUM_MESSAGE:
            raise InvalidMessage(
                f"Invalid message length: {len(message)} bytes exceeds {fields.MAXIMUM_MESSAGE}"
            )

        self.message = message


    def frame(self) -> bytes:
        return wire.pack_line(self.operation, self.queue) + wire.pack_block(self.message)


    def parse(self, buffer) -> bool:
        self._status(buffer)
        return True


# end of class Enqueue



class Dequeue(Request):
    """ Remove and return the oldest message in the named queue. An empty
        queue is not an error; the result is None.
    """

    operation = fields.DEQUEUE

    def parse(self, buffer) -> Optional[bytes]:

        line, offset = wire.read_line(buffer)
        status, remainder = wire.split_status(line)

        if status == fields.ERR:
            if remainder == fields.QUEUE_EMPTY:
                return None
            raise ServerError(remainder)

        length = wire.parse_count(remainder)
        message, offset = wire.read_block(buffer, offset, length)
        return message


# end of class Dequeue



class List(Request):
    """ Return up to *limit* messages from the head of the named queue
        without removing them. A *limit* of None or zero asks for every
        message.
    """

    operation = fields.LIST

    def __init__(self, queue: str, limit: Optional[int] = None):

        Request.__init__(self, queue)

        if limit is not None:
            if isinstance(limit, bool) or not isinstance(limit, int):
                raise ValueError(f"limit must be an integer, got {limit!r}")
            if limit < 0:
                raise ValueError(f"limit must not be negative, got {limit!r}")
            if limit == 0:
                limit = None

        self.limit = limit


    def __repr__(self):
        return f"List({self.queue!r}, limit={self.limit!r})"


    def frame(self) -> bytes:
        if self.limit is None:
            return wire.pack_line(self.operation, self.queue)
        return wire.pack_line(self.operation, self.queue, self.limit)


    def parse(self, buffer) -> ListType[bytes]:

        remainder, offset = self._status(buffer)
        count = wire.parse_count(remainder)

        messages = list()

        for _ in range(count):
            line, offset = wire.read_line(buffer, offset)
            length = wire.parse_count(line)
            message, offset = wire.read_block(buffer, offset, length)
            messages.append(message)

        return messages


# end of class List


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
