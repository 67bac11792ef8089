from . import errors
from . import fields
from . import request
from . import wire


"""
tinyq Protocol Layer
====================

This package defines the text-framed request/response protocol spoken
by a tinyq server. It knows how to encode each operation and how to
recognize a complete response in a growing byte buffer.

The protocol layer MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Client Facade (client.py)
    enqueue() / dequeue() / list() / listen() / close()

    │
    ▼
Requests (request.py)
    One class per operation
    - frame(): request bytes
    - parse(): result, ServerError, or Incomplete
    No transport awareness

    │
    ▼
Framing (wire.py)
    Header lines and declared-length payloads
    Payload bytes are never scanned for delimiters

    │
    ▼
Field Vocabulary (fields.py)
    Operation names, status markers, server limits

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Session Layer
    One pending request per connection
    Feeds received bytes to the pending request's parser

Transport Layer
    Moves bytes
    - ZeroMQ STREAM socket (raw TCP)

---------------------------------------------------------------------

Wire Format
-----------

    ENQUEUE <queue>\\n<length>\\n<bytes>   ->  OK\\n | ERR <reason>\\n
    DEQUEUE <queue>\\n                    ->  OK <length>\\n<bytes>
                                             | ERR Queue empty\\n
                                             | ERR <reason>\\n
    LIST <queue>[ <limit>]\\n             ->  OK <count>\\n
                                             (<length>\\n<bytes>) * count
                                             | ERR <reason>\\n

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
