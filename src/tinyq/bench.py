""" Throughput benchmark for a tinyq server. Each simulated client gets its
    own connection and its own queue; it enqueues a fixed number of
    messages, then dequeues them all. The clients run concurrently, one
    thread apiece.

    Invoke as ``tinyq-bench`` or ``python -m tinyq.bench``.
"""

import argparse
import concurrent.futures
import os
import sys
import time

from . import config
from .client import Client


def run_client(address, port, number, messages):
    """ Run one simulated client. Returns the number of operations it
        completed.
    """

    queue = 'bench-%d' % (number)

    with Client(address, port) as client:
        for count in range(messages):
            client.enqueue(queue, 'msg-%d' % (count))

        for count in range(messages):
            client.dequeue(queue)

    return messages * 2



def run(address, port, clients, messages):
    """ Run *clients* simulated clients concurrently. Returns a tuple of
        the total operation count and the elapsed wall clock seconds.
    """

    workers = concurrent.futures.ThreadPoolExecutor(max_workers=clients)
    begin = time.perf_counter()

    futures = list()
    for number in range(clients):
        future = workers.submit(run_client, address, port, number, messages)
        futures.append(future)

    operations = 0
    for future in futures:
        operations += future.result()

    elapsed = time.perf_counter() - begin
    workers.shutdown()

    return operations, elapsed



def _positive(value):

    value = int(value)
    if value < 1:
        raise argparse.ArgumentTypeError('must be at least 1: %d' % (value))

    return value



def parse_arguments(arguments=None):

    description = 'Measure enqueue/dequeue throughput against a tinyq server.'
    parser = argparse.ArgumentParser(prog='tinyq-bench', description=description)

    parser.add_argument('--address', default=config.address(),
        help='server address (default: %(default)s)')
    parser.add_argument('--port', type=int, default=config.port(),
        help='server port (default: %(default)s)')
    parser.add_argument('--clients', type=_positive,
        default=_positive(os.environ.get('TINYQ_CLIENTS', 10)),
        help='concurrent clients (default: %(default)s)')
    parser.add_argument('--messages', type=_positive,
        default=_positive(os.environ.get('TINYQ_MESSAGES', 1000)),
        help='messages per client (default: %(default)s)')

    return parser.parse_args(arguments)



def report(arguments, operations, elapsed, stream=None):

    if stream is None:
        stream = sys.stdout

    rule = '-' * 36
    total = arguments.clients * arguments.messages * 2

    lines = list()
    lines.append('')
    lines.append('tinyq benchmark')
    lines.append(rule)
    lines.append('Server:     %s:%d' % (arguments.address, arguments.port))
    lines.append('Clients:    %d' % (arguments.clients))
    lines.append('Messages:   %d per client' % (arguments.messages))
    lines.append('Total:      %d operations' % (total))
    lines.append(rule)

    if elapsed > 0:
        rate = int(round(operations / elapsed))
    else:
        rate = 0

    lines.append('Time:       %.2fs' % (elapsed))
    lines.append('Throughput: {:,} ops/sec'.format(rate))
    lines.append('')

    stream.write('\n'.join(lines) + '\n')



def main(arguments=None):

    arguments = parse_arguments(arguments)
    operations, elapsed = run(arguments.address, arguments.port, arguments.clients, arguments.messages)
    report(arguments, operations, elapsed)
    return 0


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
