import pytest

import routebus
from routebus import config
from routebus.protocol.fields import Token
from routebus.route import Route
from routebus.schedule import Scripted
from routebus.service import PlanSource


S = Token.SOURCE
R = Token.RELAY
D = Token.DISPENSER
M = Token.MONITOR
N = Token.NONE


@pytest.fixture
def scripted_bus():
    """ Return a factory for a bus planning a single route, driven by an
        explicit token sequence.
    """

    def build(tokens, routes=(Route(0, 2),)):
        source = PlanSource(routes)
        return routebus.Bus(source, Scripted(tokens))

    return build


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """ An empty configuration directory, with the module-level cache and the
        resolved directory cleared before and after the test.
    """

    config.clear()
    monkeypatch.setenv('ROUTEBUS_HOME', str(tmp_path))
    yield tmp_path
    config.clear()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
