import pytest

from routebus.errors import ContractError
from routebus.protocol import factory
from routebus.protocol.fields import Kind
from routebus.protocol.message import NOTHING
from routebus.route import EMPTY, Plan, Route
from routebus.service import Dispenser, Monitor, PlanSource, Relay, ScriptedSource, SourceService, State


ROUTE = Route(0, 2)
PLAN = factory.unique_automation_response(1, ROUTE)
RESPONSE = factory.automation_response(2, 1, ROUTE)


def command(id, waypoint, route=ROUTE):
    return factory.mission_command(id, 1, route, waypoint)


def test_plan_source():

    source = PlanSource([Route(0, 2), Plan(['a', 'b'], first=5), (8, 8)])
    assert len(source) == 3

    assert source.poll(False, 0) == NOTHING
    assert len(source) == 3

    first = source.poll(True, 0)
    assert first == factory.unique_automation_response(1, Route(0, 2))

    second = source.poll(True, 9)
    assert second.id == 10
    assert second.route == Route(5, 6)

    third = source.poll(True, 10)
    assert third.route == Route(8, 8)

    assert source.poll(True, 11) == NOTHING

    source.reset()
    assert len(source) == 3

    with pytest.raises(ValueError):
        PlanSource([EMPTY])


def test_source_contract():

    service = SourceService(PlanSource([ROUTE]))
    assert service.react(NOTHING, 0, False) == NOTHING
    assert service.react(NOTHING, 0, True) == PLAN
    assert service.emitted == 1

    stale = SourceService(ScriptedSource([factory.unique_automation_response(3, ROUTE)]))
    with pytest.raises(ContractError):
        stale.react(NOTHING, 3, True)

    wrong_kind = SourceService(ScriptedSource([RESPONSE]))
    with pytest.raises(ContractError):
        wrong_kind.react(NOTHING, 0, True)

    rogue = SourceService(ScriptedSource([PLAN], ignore_permission=True))
    with pytest.raises(ContractError):
        rogue.react(NOTHING, 0, False)

    class Garbage:
        def poll(self, write_permitted, last_id):
            return 'plan'

    with pytest.raises(ContractError):
        SourceService(Garbage()).react(NOTHING, 0, True)

    with pytest.raises(TypeError):
        SourceService(object())


def test_relay():

    relay = Relay()
    assert relay.state == State.IDLE

    # Storing happens regardless of permission.

    assert relay.react(PLAN, 1, False) == NOTHING
    assert relay.stored_route == ROUTE
    assert relay.stored_route_msg_id == 1
    assert relay.state == State.STREAMING

    response = relay.react(PLAN, 1, True)
    assert response == factory.automation_response(2, 1, ROUTE)

    # Anything else clears the stored plan.

    assert relay.react(NOTHING, 2, True) == NOTHING
    assert relay.stored_route == EMPTY
    assert relay.state == State.IDLE

    relay.react(PLAN, 1, False)
    assert relay.react(RESPONSE, 2, True) == NOTHING


def test_dispenser_stream():

    dispenser = Dispenser()
    assert dispenser.state == State.IDLE

    first = dispenser.react(RESPONSE, 2, True)
    assert first == factory.mission_command(3, 1, ROUTE, 0)
    assert dispenser.state == State.STREAMING
    assert dispenser.remaining == 2

    second = dispenser.react(first, 3, True)
    assert second == factory.mission_command(4, 1, ROUTE, 1)

    third = dispenser.react(second, 4, True)
    assert third == factory.mission_command(5, 1, ROUTE, 2)
    assert dispenser.remaining == 0

    assert dispenser.react(third, 5, True) == NOTHING
    assert dispenser.state == State.EXHAUSTED
    assert dispenser.stored_route == EMPTY


def test_dispenser_skips_without_token():
    """ The cursor moves every step; a waypoint not sent on its step is gone.
    """

    dispenser = Dispenser()

    assert dispenser.react(RESPONSE, 2, False) == NOTHING
    assert dispenser.react(NOTHING, 2, False) == NOTHING

    sent = dispenser.react(NOTHING, 2, True)
    assert sent.waypoint == 2

    assert dispenser.react(NOTHING, 3, True) == NOTHING
    assert dispenser.state == State.EXHAUSTED


def test_dispenser_ignores_other_kinds():

    dispenser = Dispenser()
    dispenser.react(RESPONSE, 2, False)

    other = factory.unique_automation_response(5, Route(3, 4))
    assert dispenser.react(other, 5, True).waypoint == 1


def test_dispenser_replaces_route():

    dispenser = Dispenser()
    dispenser.react(RESPONSE, 2, True)

    replacement = factory.automation_response(9, 8, Route(5, 6))
    command = dispenser.react(replacement, 9, True)

    assert command.route == Route(5, 6)
    assert command.ref == 8
    assert command.waypoint == 5


def test_monitor_completion():

    monitor = Monitor()
    assert monitor.state == State.IDLE

    assert monitor.react(RESPONSE, 2, True) == NOTHING
    assert monitor.monitored_route == ROUTE
    assert monitor.waypoint_cursor == 0
    assert monitor.state == State.STREAMING

    assert monitor.react(command(3, 0), 3, True) == NOTHING
    assert monitor.expected_waypoint == 0
    assert monitor.react(command(4, 1), 4, True) == NOTHING

    done = monitor.react(command(5, 2), 5, True)
    assert done == factory.task_complete(6, 1, ROUTE)
    assert monitor.state == State.EXHAUSTED

    # Completion persists until the next reset.

    assert monitor.react(NOTHING, 6, False) == NOTHING
    assert monitor.react(NOTHING, 6, True).kind == Kind.TASK_COMPLETE


def test_monitor_requires_stream():
    """ A reset alone never completes, even for a single waypoint route.
    """

    monitor = Monitor()
    monitor.react(factory.automation_response(2, 1, Route(4, 4)), 2, True)

    for step in range(5):
        assert monitor.react(NOTHING, 2, True) == NOTHING

    assert monitor.react(factory.mission_command(3, 1, Route(4, 4), 4), 3, True).kind == Kind.TASK_COMPLETE


def test_monitor_error_edge():

    monitor = Monitor()
    monitor.react(RESPONSE, 2, True)
    monitor.react(command(3, 0), 3, True)

    error = monitor.react(command(4, 2), 4, True)
    assert error == factory.error_response(5, 4, ROUTE, 2)
    assert monitor.error
    assert monitor.state == State.FAULTED

    # The flag stays set, but the report is not repeated.

    assert monitor.react(NOTHING, 5, True) == NOTHING
    assert monitor.react(command(6, 2), 6, True) == NOTHING
    assert monitor.react(command(7, 0), 7, True) == NOTHING
    assert monitor.error

    # A reset clears the fault.

    monitor.react(factory.automation_response(8, 1, ROUTE), 8, True)
    assert monitor.error == False
    assert monitor.state == State.STREAMING


def test_monitor_error_without_token():
    """ The report is tied to the step of the transition; a monitor without
        the token on that step stays silent.
    """

    monitor = Monitor()
    monitor.react(RESPONSE, 2, True)

    assert monitor.react(command(3, 1), 3, False) == NOTHING
    assert monitor.error
    assert monitor.react(NOTHING, 3, True) == NOTHING


def test_monitor_without_route():

    monitor = Monitor()
    error = monitor.react(command(3, 0), 3, True)

    assert error.kind == Kind.ERROR_RESPONSE
    assert error.route == EMPTY
    assert error.ref == 3


def test_monitor_reorder():

    monitor = Monitor()
    monitor.react(RESPONSE, 2, True)

    error = monitor.react(command(3, 1), 3, True)
    assert error.kind == Kind.ERROR_RESPONSE
    assert error.waypoint == 1


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
