from routebus.protocol import factory, publish
from routebus.protocol.fields import Kind
from routebus.route import Route


def exchange(server, client, messages, attempts=50):
    """ PUB/SUB drops everything sent before the subscription is established,
        so keep sending until something arrives.
    """

    for attempt in range(attempts):
        for message in messages:
            server.send(message)

        received = client.recv(timeout=0.1)
        if received is not None:
            return received

    return None


def test_round_trip():

    server = publish.Server()
    client = publish.Client('localhost', server.port)

    message = factory.automation_response(2, 1, Route(0, 2))

    try:
        received = exchange(server, client, [message])
    finally:
        client.close()
        server.stop()

    assert received == message


def test_subscribe_kind():

    server = publish.Server()
    client = publish.Client('localhost', server.port, kind=Kind.MISSION_COMMAND)

    plan = factory.unique_automation_response(1, Route(0, 2))
    command = factory.mission_command(3, 1, Route(0, 2), 0)

    try:
        received = exchange(server, client, [plan, command])
    finally:
        client.close()
        server.stop()

    assert received == command


def test_fixed_port_in_use():

    server = publish.Server()

    try:
        try:
            publish.Server(server.port)
        except publish.PortError:
            pass
        else:
            raise AssertionError('binding a port in use should fail')
    finally:
        server.stop()


def test_avoid_ports():

    first = publish.Server()
    avoid = set((first.port, first.port + 1))
    first.stop()

    second = publish.Server(avoid=avoid)
    third = publish.Server()

    try:
        assert second.port not in avoid
        assert avoid == set((first.port, first.port + 1))
        assert third.port != second.port
    finally:
        third.stop()
        second.stop()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
