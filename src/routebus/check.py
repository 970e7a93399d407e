""" Verify protocol properties over the sequence of broadcast messages.

    A :class:`TraceChecker` consumes broadcasts in step order and raises
    :class:`routebus.errors.TraceError` at the first step that breaks one
    of the following:

    * non-empty broadcasts carry strictly increasing ids;
    * an AutomationResponse references an earlier UniqueAutomationResponse
      carrying the same route;
    * a MissionCommand's waypoint lies within its route, and that route was
      announced by an earlier AutomationResponse;
    * a TaskComplete follows the complete, in-order waypoint stream of the
      route announced by the most recent AutomationResponse;
    * at most one ErrorResponse is broadcast between two AutomationResponse
      messages.

    A checker may be registered directly as a bus observer.
"""

from .errors import TraceError
from .protocol.fields import Kind
from . import route as routes


class TraceChecker:

    def __init__(self):

        self.last_id = None
        self.unique_responses = dict()
        self.announced = set()

        self.active_route = None
        self.next_waypoint = None
        self.in_order = False
        self.observed = 0
        self.errors_since_reset = 0


    def __call__(self, record):
        self.observe(record.step, record.broadcast)


    def check(self, trace):
        """ Run every record of *trace* through the checker. Returns the
            number of non-empty broadcasts examined.
        """

        count = 0
        for record in trace:
            if self.observe(record.step, record.broadcast):
                count += 1
        return count


    def observe(self, step, message):
        """ Check a single broadcast. Returns False for the None message,
            which is never inspected, and True otherwise.
        """

        if message.empty:
            return False

        if self.last_id is not None and message.id <= self.last_id:
            raise TraceError(step, "id %d does not follow %d" % (message.id, self.last_id))

        self.last_id = message.id

        handler = self._handlers[message.kind]
        handler(self, step, message)
        return True


    def _unique_response(self, step, message):
        self.unique_responses[message.id] = message.route


    def _automation_response(self, step, message):

        try:
            route = self.unique_responses[message.ref]
        except KeyError:
            raise TraceError(step, "AutomationResponse %d references unknown plan %d" % (message.id, message.ref))

        if route != message.route:
            raise TraceError(step, "AutomationResponse %d carries %r, plan %d carried %r" % (message.id, message.route, message.ref, route))

        self.announced.add(message.route)

        self.active_route = message.route
        self.next_waypoint = message.route.first
        self.in_order = True
        self.observed = 0
        self.errors_since_reset = 0


    def _mission_command(self, step, message):

        if not routes.contains(message.route, message.waypoint):
            raise TraceError(step, "MissionCommand %d waypoint %d is outside %r" % (message.id, message.waypoint, message.route))

        if message.route not in self.announced:
            raise TraceError(step, "MissionCommand %d carries unannounced %r" % (message.id, message.route))

        if self.active_route is None:
            return

        if self.in_order and message.waypoint == self.next_waypoint:
            self.next_waypoint += 1
            self.observed += 1
        else:
            self.in_order = False


    def _task_complete(self, step, message):

        route = self.active_route

        if route is None or route != message.route:
            raise TraceError(step, "TaskComplete %d for %r, which is not the active route" % (message.id, message.route))

        if not self.in_order or self.observed == 0 or self.next_waypoint <= route.last:
            raise TraceError(step, "TaskComplete %d before %r was streamed in order" % (message.id, route))


    def _error_response(self, step, message):

        self.errors_since_reset += 1

        if self.errors_since_reset > 1:
            raise TraceError(step, "repeated ErrorResponse %d without a reset" % (message.id))


    _handlers = {
        Kind.UNIQUE_AUTOMATION_RESPONSE: _unique_response,
        Kind.AUTOMATION_RESPONSE: _automation_response,
        Kind.MISSION_COMMAND: _mission_command,
        Kind.TASK_COMPLETE: _task_complete,
        Kind.ERROR_RESPONSE: _error_response,
    }


# end of class TraceChecker


def check(trace):
    """ Check a complete *trace* with a fresh :class:`TraceChecker`.
    """

    checker = TraceChecker()
    return checker.check(trace)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
