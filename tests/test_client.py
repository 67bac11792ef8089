import concurrent.futures
import pytest
import tinyq


def roundtrip(client, queue, message):

    assert client.enqueue(queue, message) is True

    if isinstance(message, str):
        message = message.encode('utf-8')

    assert client.dequeue(queue) == message


def test_roundtrip(client, queue):

    roundtrip(client, queue, 'hello')
    roundtrip(client, queue, b'hello')
    roundtrip(client, queue, '日本語 🚀 émojis')
    roundtrip(client, queue, 'line1\nline2\ttab\r\n\0null')
    roundtrip(client, queue, bytes(range(256)))


def test_large_message(client, queue):

    # Far larger than any single network read.

    roundtrip(client, queue, 'x' * 100000)
    roundtrip(client, queue, bytes(range(256)) * 4096)


def test_empty_message(client, server, queue):

    with pytest.raises(tinyq.InvalidMessage):
        client.enqueue(queue, '')

    with pytest.raises(tinyq.InvalidMessage):
        client.enqueue(queue, b'')

    # Nothing went on the wire; the connection was not even established.

    assert client.transport.state == tinyq.transport.State.ABSENT

    with server.lock:
        for command in server.commands:
            assert command.split()[1:2] != [queue]


def test_invalid_queue(client):

    with pytest.raises(tinyq.InvalidQueue):
        client.dequeue('two words')

    with pytest.raises(tinyq.InvalidQueue):
        client.list('')


def test_fifo(client, queue):

    client.enqueue(queue, 'a')
    client.enqueue(queue, 'b')
    client.enqueue(queue, 'c')

    assert client.dequeue(queue) == b'a'
    assert client.dequeue(queue) == b'b'
    assert client.dequeue(queue) == b'c'
    assert client.dequeue(queue) is None


def test_empty_queue(client, queue):

    # Absence is not an error, no matter how many times it is observed.

    for attempt in range(5):
        assert client.dequeue(queue) is None


def test_list(client, queue):

    assert client.list(queue) == []

    client.enqueue(queue, '1')
    client.enqueue(queue, '2')
    client.enqueue(queue, '3')

    assert client.list(queue) == [b'1', b'2', b'3']
    assert client.list(queue, 2) == [b'1', b'2']
    assert client.list(queue, 0) == [b'1', b'2', b'3']
    assert client.list(queue, 10) == [b'1', b'2', b'3']

    # Listing does not consume anything.

    assert client.dequeue(queue) == b'1'
    assert client.list(queue) == [b'2', b'3']


def test_list_binary(client, queue):

    messages = [b'a\nb', b'\x00', b'3\n', '日本語'.encode('utf-8')]
    for message in messages:
        client.enqueue(queue, message)

    assert client.list(queue) == messages


def test_isolation(client, queue):

    a = queue + 'a'
    b = queue + 'b'

    client.enqueue(a, 'A')
    client.enqueue(b, 'B')

    assert client.list(a) == [b'A']
    assert client.dequeue(a) == b'A'
    assert client.dequeue(a) is None
    assert client.dequeue(b) == b'B'


def test_server_error(make_server, make_client, queue):

    server = make_server()
    client = make_client(server)

    server.failures[queue] = 'Enqueue failed'

    with pytest.raises(tinyq.ServerError) as caught:
        client.enqueue(queue, 'x')

    assert str(caught.value) == 'Enqueue failed'

    with pytest.raises(tinyq.ServerError):
        client.dequeue(queue)

    with pytest.raises(tinyq.ServerError):
        client.list(queue)

    # A server-side refusal leaves the connection intact.

    assert client.transport.is_open

    del server.failures[queue]
    assert client.dequeue(queue + 'other') is None
    assert len(server.connections) == 1


def test_fragmented_responses(make_server, make_client, queue):

    # Every response arrives one byte at a time.

    server = make_server(chunk=1)
    client = make_client(server)

    payload = b'OK 5\nnot a header\n\x00' * 20

    client.enqueue(queue, payload)
    client.enqueue(queue, 'second')

    assert client.list(queue) == [payload, b'second']
    assert client.dequeue(queue) == payload
    assert client.dequeue(queue) == b'second'
    assert client.dequeue(queue) is None


def test_context_manager(server, queue):

    with tinyq.Client('127.0.0.1', server.port) as client:
        client.enqueue(queue, 'managed')
        assert client.transport.is_open

    assert client.transport.is_open == False

    # A closed client reconnects on demand.

    assert client.dequeue(queue) == b'managed'
    client.close()


def test_parallel_enqueue(server, make_client, client, queue):

    clients = [make_client(server) for number in range(20)]

    workers = concurrent.futures.ThreadPoolExecutor(max_workers=20)
    futures = list()
    for number, each in enumerate(clients):
        futures.append(workers.submit(each.enqueue, queue, str(number)))

    for future in futures:
        assert future.result() is True

    workers.shutdown()

    assert len(client.list(queue)) == 20


def test_parallel_dequeue(server, make_client, client, queue):

    for number in range(10):
        client.enqueue(queue, str(number))

    clients = [make_client(server) for number in range(10)]

    workers = concurrent.futures.ThreadPoolExecutor(max_workers=10)
    futures = [workers.submit(each.dequeue, queue) for each in clients]
    received = [future.result() for future in futures]
    workers.shutdown()

    # Each message was delivered exactly once.

    assert sorted(received) == sorted(str(number).encode() for number in range(10))
    assert client.dequeue(queue) is None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
