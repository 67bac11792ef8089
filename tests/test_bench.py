import io

from tinyq import bench


def test_run(server, client):

    operations, elapsed = bench.run('127.0.0.1', server.port, clients=3, messages=20)

    assert operations == 3 * 20 * 2
    assert elapsed > 0

    # Every simulated client drained its own queue.

    for number in range(3):
        assert client.dequeue('bench-%d' % (number)) is None


def test_report(server):

    arguments = bench.parse_arguments(['--address', '127.0.0.1', '--port', str(server.port), '--clients', '2', '--messages', '5'])

    assert arguments.clients == 2
    assert arguments.messages == 5

    stream = io.StringIO()
    bench.report(arguments, 20, 0.5, stream)
    output = stream.getvalue()

    assert '127.0.0.1:%d' % (server.port) in output
    assert 'Total:      20 operations' in output
    assert 'Throughput: 40 ops/sec' in output


def test_main(server, capsys):

    result = bench.main(['--address', '127.0.0.1', '--port', str(server.port), '--clients', '1', '--messages', '3'])
    assert result == 0

    output = capsys.readouterr().out
    assert 'Throughput' in output


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
