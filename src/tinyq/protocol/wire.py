"""Low level framing helpers.

A frame on the wire is either a newline-terminated header line or a
payload of declared length. Readers operate on the cumulative bytes of
one response and raise :class:`Incomplete` when the frame they were
asked for has not fully arrived; the caller is expected to buffer more
bytes and try again from the beginning.
"""

from __future__ import annotations

from typing import Tuple

from .errors import MalformedResponse
from .fields import ERR, MAXIMUM_LINE, OK


NEWLINE = b"\n"


class Incomplete(Exception):
    """Not enough bytes have arrived to complete the requested frame."""


def pack_line(*words) -> bytes:
    """Join *words* with single spaces into one newline-terminated line."""

    line = " ".join(str(word) for word in words)
    return line.encode("utf-8") + NEWLINE


def pack_block(payload: bytes) -> bytes:
    """Length line followed by the raw *payload*."""

    return pack_line(len(payload)) + payload


def read_line(buffer, offset: int = 0) -> Tuple[str, int]:
    """Return the line starting at *offset*, and the offset just past it.

    Lines are decoded as UTF-8; anything undecodable is replaced rather
    than rejected, since reason text is informational only.
    """

    end = buffer.find(NEWLINE, offset)

    if end == -1:
        if len(buffer) - offset > MAXIMUM_LINE:
            raise MalformedResponse(
                f"no line terminator in {MAXIMUM_LINE} bytes of response"
            )
        raise Incomplete()

    line = bytes(buffer[offset:end]).decode("utf-8", errors="replace")
    return line, end + 1


def read_block(buffer, offset: int, length: int) -> Tuple[bytes, int]:
    """Return *length* raw bytes starting at *offset*, and the offset
    just past them. The payload is never inspected for delimiters.
    """

    end = offset + length
    if len(buffer) < end:
        raise Incomplete()

    return bytes(buffer[offset:end]), end


def parse_count(text: str) -> int:
    """Interpret a declared length or item count."""

    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise MalformedResponse(f"expected a non-negative integer, got {text!r}")

    return int(text)


def split_status(line: str) -> Tuple[str, str]:
    """Split a response header into its status marker and the remainder.

    ``OK 12`` becomes ``('OK', '12')``, ``ERR Queue empty`` becomes
    ``('ERR', 'Queue empty')``.
    """

    if " " in line:
        status, remainder = line.split(" ", 1)
    else:
        status, remainder = line, ""

    if status not in (OK, ERR):
        raise MalformedResponse(f"unexpected response: {line!r}")

    return status, remainder
