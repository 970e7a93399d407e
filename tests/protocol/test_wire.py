import pytest

import routebus
from routebus.errors import WireError
from routebus.protocol import factory, wire
from routebus.protocol.message import NOTHING, version
from routebus.route import Route


def test_frames():

    message = factory.mission_command(3, 1, Route(0, 2), 1)
    frames = wire.to_frames(message)

    assert len(frames) == 3
    assert frames[0] == b'MissionCommand.'
    assert frames[1] == version
    assert routebus.json.loads(frames[2])['waypoint'] == 1

    assert wire.from_frames(frames) == message
    assert wire.from_frames(wire.to_frames(NOTHING)) == NOTHING


def test_bad_frames():

    message = factory.task_complete(6, 1, Route(0, 2))
    topic, their_version, header = wire.to_frames(message)

    with pytest.raises(WireError):
        wire.from_frames((topic, their_version))

    with pytest.raises(WireError):
        wire.from_frames((topic, b'z', header))

    with pytest.raises(WireError):
        wire.from_frames((topic, version, b'{not json'))

    with pytest.raises(WireError):
        wire.from_frames((topic, version, b'[1, 2]'))

    with pytest.raises(WireError):
        wire.from_frames((b'ErrorResponse.', version, header))

    bad = routebus.json.dumps({'kind': 'TaskComplete', 'id': -1})
    with pytest.raises(WireError):
        wire.from_frames((topic, version, bad))

    fractional = routebus.json.dumps({'kind': 'TaskComplete', 'id': 6, 'ref': 1, 'route': [0.9, 2.7]})
    with pytest.raises(WireError):
        wire.from_frames((topic, version, fractional))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
