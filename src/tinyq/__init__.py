""" Python client for tinyq, a minimal message queue server. This includes
    the individual queue operations (enqueue, dequeue, list) and a
    background listener that consumes a queue continuously.
"""

# Submodules used by multiple other components.

from . import config
from . import protocol
from . import transport

# Primary public-facing interfaces.

from . import poll
from .client import Client
from .poll import Listener

from .protocol.errors import (
    TinyQError,
    InvalidRequest,
    InvalidMessage,
    InvalidQueue,
    ServerError,
    MalformedResponse,
)

from .transport import (
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportClosed,
    RequestInProgress,
)

__version__ = '0.1.0'

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
