""" The :class:`Client` is the principal entry point for users talking to a
    tinyq server.
"""

from . import config
from . import poll
from .protocol import request
from .transport import RequestSession, StreamTransport


class Client:
    """ A connection to the tinyq server at *address* and *port*. If either
        is not specified the value is taken from :mod:`tinyq.config`, which
        consults the environment before falling back to localhost:7878.

        The connection is established lazily, on the first request, and
        re-established transparently on the next request after it is
        lost. Every method blocks until the server has responded.

        *timeout* bounds how long, in seconds, any one request waits for
        its response; the default is to wait indefinitely. A request that
        times out discards the connection. *connect_timeout* bounds how
        long establishing the connection may take.

        Only one request may be outstanding on a :class:`Client` at any
        time; a second request issued from another thread while the first
        is pending raises :class:`tinyq.RequestInProgress`. Use one
        :class:`Client` per thread for concurrent work.
    """

    def __init__(self, address=None, port=None, timeout=None, connect_timeout=None):

        self.address = config.address(address)
        self.port = config.port(port)

        timeout = config.timeout(timeout)
        connect_timeout = config.connect_timeout(connect_timeout)

        self.transport = StreamTransport(self.address, self.port, connect_timeout)
        self.session = RequestSession(self.transport, timeout)


    def __repr__(self):
        return 'Client(%r, %d)' % (self.address, self.port)


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def enqueue(self, queue, message):
        """ Append *message* to *queue*. The *message* is bytes, or a str
            that will be encoded as UTF-8; it must not be empty. Returns True
            once the server has accepted the message.
        """

        return self.session.send(request.Enqueue(queue, message))


    def dequeue(self, queue):
        """ Remove and return the oldest message in *queue*, as bytes.
            Returns None if the queue is empty.
        """

        return self.session.send(request.Dequeue(queue))


    def list(self, queue, limit=None):
        """ Return up to *limit* messages from the head of *queue*, oldest
            first, without removing them. With no *limit* every message in
            the queue is returned.
        """

        return self.session.send(request.List(queue, limit))


    def listen(self, queue, callback, interval=0.1, concurrency=1):
        """ Start a :class:`tinyq.poll.Listener` consuming *queue* through
            this client, invoking *callback* with each message. Returns the
            listener; call its :func:`stop` method to end the polling.
        """

        return poll.Listener(self, queue, callback, interval, concurrency)


    def close(self):
        """ Close the connection immediately. A request pending in another
            thread fails with :class:`tinyq.TransportClosed`. The client
            remains usable; the next request opens a new connection.
        """

        self.session.close()


# end of class Client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
