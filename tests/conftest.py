import itertools
import pytest
import tinyq

import unitserver


@pytest.fixture(scope="session")
def server():

    instance = unitserver.Server().start()

    yield instance

    instance.stop()


@pytest.fixture
def make_server():
    """ Factory for private servers, for tests that need to misbehave
        without disturbing anyone else.
    """

    started = list()

    def factory(**kwargs):
        instance = unitserver.Server(**kwargs).start()
        started.append(instance)
        return instance

    yield factory

    for instance in started:
        instance.stop()


@pytest.fixture
def make_client():

    clients = list()

    def factory(server, **kwargs):
        kwargs.setdefault('timeout', 5)
        kwargs.setdefault('connect_timeout', 2)
        client = tinyq.Client('127.0.0.1', server.port, **kwargs)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def client(server, make_client):
    return make_client(server)


_queue_numbers = itertools.count()

@pytest.fixture
def queue():
    """ A queue name no other test has used.
    """

    return 'q%d' % (next(_queue_numbers))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
