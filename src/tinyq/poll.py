""" Background consumer for a single queue. A :class:`Listener` repeatedly
    dequeues from one queue and hands each message to a callback, with a
    ceiling on how many callbacks may be running at once.
"""

import concurrent.futures
import logging
import threading

from .protocol import request
from .protocol.errors import TinyQError


logger = logging.getLogger('tinyq')


class Listener:
    """ Poll *queue* through *client* and invoke *callback* with each
        message received. Polling starts immediately, in a dedicated
        background thread; callbacks run in a pool of up to *concurrency*
        worker threads, so a slow callback does not hold up the polling.

        When the queue is empty the listener waits *interval* seconds
        before asking again. When *concurrency* callbacks are already
        running it does not dequeue at all; it re-checks every
        :attr:`backoff` seconds until a slot frees up.

        Neither a failed dequeue nor a failed callback stops the listener;
        both are logged. Only :func:`stop` ends the polling, and a stopped
        listener cannot be restarted.

        The *client* should not be used for anything else while the
        listener is running, as only one request may be pending on a
        connection at a time.
    """

    backoff = 0.01

    def __init__(self, client, queue, callback, interval=0.1, concurrency=1):

        # A bad queue name is refused before the polling thread starts.

        request.Dequeue(queue)

        if callable(callback) == False:
            raise TypeError('callback must be callable: %r' % (callback,))

        interval = float(interval)
        if interval < 0:
            raise ValueError('interval must not be negative: %r' % (interval))

        concurrency = int(concurrency)
        if concurrency < 1:
            raise ValueError('concurrency must be at least 1: %r' % (concurrency))

        self.client = client
        self.queue = queue
        self.callback = callback
        self.interval = interval
        self.concurrency = concurrency

        self.running = True
        self.active = 0
        self.active_lock = threading.Lock()
        self.slots = threading.BoundedSemaphore(concurrency)

        self.alarm = threading.Event()
        self.workers = concurrent.futures.ThreadPoolExecutor(max_workers=concurrency)

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def __repr__(self):
        if self.running:
            state = 'running'
        else:
            state = 'stopped'

        return 'Listener(%r, %s, active=%d)' % (self.queue, state, self.active)


    def run(self):

        while self.running:

            # Hold a slot before asking for a message, so that a message is
            # never taken off the queue without somewhere to put it.

            if self.slots.acquire(timeout=self.backoff) == False:
                continue

            try:
                message = self.client.dequeue(self.queue)
            except TinyQError:
                self.slots.release()
                if self.running:
                    logger.exception('listener dequeue from %r failed', self.queue)
                    self.alarm.wait(self.interval)
                continue

            if message is None:
                self.slots.release()
                self.alarm.wait(self.interval)
                continue

            with self.active_lock:
                self.active += 1

            self.workers.submit(self._dispatch, message)


        # The loop is done. Callbacks already dispatched are allowed to
        # run to completion.

        self.workers.shutdown(wait=False)


    def _dispatch(self, message):

        try:
            self.callback(message)
        except Exception:
            logger.exception('listener callback for %r failed', self.queue)
        finally:
            with self.active_lock:
                self.active -= 1
            self.slots.release()


    def stop(self):
        """ Stop issuing new dequeue requests. A dequeue already in flight
            is allowed to complete, as are any callbacks already running;
            use :func:`join` to wait for them.
        """

        self.running = False
        self.alarm.set()


    def join(self, timeout=None):
        """ Wait for the polling thread to exit and for any dispatched
            callbacks to finish. Only meaningful after :func:`stop`.
        """

        self.thread.join(timeout)

        if self.thread.is_alive() == False:
            self.workers.shutdown(wait=True)


# end of class Listener


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
