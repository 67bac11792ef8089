"""ZeroMQ STREAM transport.

A STREAM socket lets ZeroMQ speak plain TCP to a peer that knows nothing
about ZeroMQ, such as a tinyq server. Every event on the connection
arrives as a two-part message:

    [peer, b'']      connect or disconnect notification
    [peer, data]     bytes received from the peer, chunked arbitrarily

and outbound bytes are sent as ``[peer, data]``. Sending ``[peer, b'']``
asks ZeroMQ to end the TCP connection once queued data is flushed.
"""

from __future__ import annotations

import itertools
import logging
import math
import threading
import time
from typing import Optional

import zmq

from ..base import (
    State,
    Transport,
    TransportClosed,
    TransportConnectionError,
    TransportTimeout,
)


logger = logging.getLogger('tinyq')

zmq_context = zmq.Context()
_signal_ids = itertools.count()


class StreamTransport(Transport):
    """Own one TCP connection to a tinyq server at *address*:*port*."""

    linger = 100    # milliseconds


    def __init__(self, address: str, port: int, connect_timeout: Optional[float] = 5.0):
        self.address = address
        self.port = int(port)
        self.connect_timeout = connect_timeout

        self.state = State.ABSENT
        self.socket = None
        self.peer = None
        self.poller = None

        # The signal pair lets any thread wake whoever is blocked on the
        # poller; the STREAM socket itself is never touched from there.
        # Both ends exist only while a connection does.

        self._signal_rx = None
        self._signal_tx = None
        self._signal_lock = threading.Lock()

    def __repr__(self):
        return f"StreamTransport({self.address!r}, {self.port}, state={self.state.value})"

    @property
    def server(self) -> str:
        return f"tcp://{self.address}:{self.port}"

    # --- Transport contract ---

    def open(self) -> None:
        if self.state == State.OPEN and self._alive():
            return

        self.state = State.CONNECTING

        try:
            self._create()
            deadline = self._deadline(self.connect_timeout)

            while True:
                ready = self._poll(deadline)
                if not ready:
                    raise TransportConnectionError(
                        f"no connection to {self.server} in {self.connect_timeout:.2f} sec"
                    )

                if self._signal_rx in ready:
                    raise TransportClosed(f"closed while connecting to {self.server}")

                peer, data = self.socket.recv_multipart()
                if data == b"":
                    self.peer = peer
                    self.state = State.OPEN
                    logger.debug("connected to %s", self.server)
                    return

        except zmq.ZMQError as exc:
            self._discard()
            raise TransportConnectionError(f"cannot connect to {self.server}: {exc}") from exc
        except TransportConnectionError:
            self._discard()
            raise

    def close(self) -> None:
        if self.state == State.OPEN:
            try:
                self.socket.send_multipart((self.peer, b""))
            except zmq.ZMQError as exc:
                logger.debug("disconnect from %s not sent: %s", self.server, exc)

        self._discard()

    def write(self, data: bytes) -> None:
        if self.state != State.OPEN:
            raise TransportClosed(f"not connected to {self.server}")

        try:
            self.socket.send_multipart((self.peer, data))
        except zmq.ZMQError as exc:
            self._discard()
            raise TransportConnectionError(f"write to {self.server} failed: {exc}") from exc

    def receive(self, timeout: Optional[float] = None) -> bytes:
        if self.state != State.OPEN:
            raise TransportClosed(f"not connected to {self.server}")

        deadline = self._deadline(timeout)

        try:
            while True:
                ready = self._poll(deadline)
                if not ready:
                    raise TransportTimeout(f"no response from {self.server} in {timeout:.2f} sec")

                if self._signal_rx in ready:
                    self._discard()
                    raise TransportClosed(f"connection to {self.server} closed locally")

                peer, data = self.socket.recv_multipart()
                if peer != self.peer:
                    continue

                if data == b"":
                    logger.debug("%s closed the connection", self.server)
                    self._discard()
                    raise TransportClosed(f"connection to {self.server} closed by peer")

                return data

        except zmq.ZMQError as exc:
            self._discard()
            raise TransportConnectionError(f"read from {self.server} failed: {exc}") from exc

    def interrupt(self) -> None:
        with self._signal_lock:
            if self._signal_tx is None:
                return
            try:
                self._signal_tx.send(b"", flags=zmq.NOBLOCK)
            except zmq.Again:
                # A signal is already waiting to be noticed.
                pass

    # --- internal ---

    def _create(self) -> None:
        """ Allocate the STREAM socket, the signal pair and the poller
            watching both, and start connecting. Anything allocated here is
            released again by :func:`_discard`.
        """

        internal = f"inproc://tinyq.StreamTransport:signal:{next(_signal_ids)}"

        with self._signal_lock:
            self._signal_rx = zmq_context.socket(zmq.PAIR)
            self._signal_rx.bind(internal)
            self._signal_tx = zmq_context.socket(zmq.PAIR)
            self._signal_tx.connect(internal)

        self.socket = zmq_context.socket(zmq.STREAM)
        self.socket.setsockopt(zmq.LINGER, self.linger)
        self.socket.connect(self.server)

        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        poller.register(self._signal_rx, zmq.POLLIN)
        self.poller = poller

    def _alive(self) -> bool:
        """ Consume anything that arrived while no request was pending.
            Between requests the only legitimate event is a disconnect
            notification; unsolicited bytes mean the framing is lost.
        """

        try:
            while self.socket.poll(0, zmq.POLLIN):
                peer, data = self.socket.recv_multipart()
                if peer != self.peer:
                    continue

                if data == b"":
                    logger.debug("%s closed the connection while idle", self.server)
                    self._discard()
                else:
                    logger.warning("discarding %d unsolicited bytes from %s", len(data), self.server)
                    self.close()
                return False

        except zmq.ZMQError as exc:
            self._discard()
            raise TransportConnectionError(f"read from {self.server} failed: {exc}") from exc

        return True

    def _deadline(self, timeout: Optional[float]) -> Optional[float]:
        if timeout is None:
            return None
        return time.monotonic() + timeout

    def _poll(self, deadline: Optional[float]) -> list:
        if deadline is None:
            timeout = None
        else:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return []
            timeout = int(math.ceil(remaining * 1000))

        return [active for active, _flag in self.poller.poll(timeout)]

    def _discard(self) -> None:
        socket = self.socket

        self.socket = None
        self.peer = None
        self.poller = None

        if socket is not None:
            socket.close(linger=self.linger)

        # Closing the pair also throws away any signal nobody noticed.

        with self._signal_lock:
            for signal in (self._signal_tx, self._signal_rx):
                if signal is not None:
                    signal.close(linger=0)
            self._signal_tx = None
            self._signal_rx = None

        if self.state != State.ABSENT:
            self.state = State.CLOSED
