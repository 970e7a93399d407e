""" The monitor verifies that the stream of MissionCommand messages seen on
    the channel follows the route announced by the last AutomationResponse.
"""

import logging

from .. import route as routes
from ..protocol import factory
from ..protocol.fields import Kind, NO_ID, Token
from ..protocol.message import NOTHING
from ..route import EMPTY, NO_INDEX, NO_WAYPOINT
from .base import Service, State

logger = logging.getLogger(__name__)


class Monitor(Service):
    """ Track the waypoint stream against *monitored_route*.

        An AutomationResponse resets the monitor onto its route. Every
        MissionCommand is compared against the waypoint expected at the
        cursor, and the cursor advances; the first disagreement latches the
        error flag until the next reset.

        While permitted, the monitor emits:

        * ErrorResponse on the step the error flag is raised, and only that
          step;
        * TaskComplete while the whole route has been observed in order
          without error;
        * nothing otherwise.

        :ivar monitored_route: The route being verified.
        :ivar waypoint_cursor: Position of the next expected waypoint.
        :ivar expected_waypoint: The waypoint expected by the most recent
            MissionCommand, :data:`NO_WAYPOINT` if none has arrived yet.
        :ivar error: True once a mismatch has been observed.
    """

    role = Token.MONITOR

    def __init__(self):
        self.reset()


    def reset(self):
        self.monitored_route = EMPTY
        self.route_msg_id = NO_ID
        self.waypoint_cursor = NO_INDEX
        self.expected_waypoint = NO_WAYPOINT
        self.error = False


    @property
    def state(self):
        if self.error:
            return State.FAULTED
        if self.complete:
            return State.EXHAUSTED
        if self.monitored_route.empty:
            return State.IDLE
        return State.STREAMING


    @property
    def complete(self):
        """ True when every waypoint of a non-empty route has been observed
            in order, and at least one was actually expected.
        """

        route = self.monitored_route

        if self.error or route.empty:
            return False

        if self.expected_waypoint == NO_WAYPOINT:
            return False

        return self.waypoint_cursor > route.last


    def react(self, broadcast, last_id, permitted):

        raised = False

        if broadcast.kind == Kind.AUTOMATION_RESPONSE:
            self.monitored_route = broadcast.route
            self.route_msg_id = broadcast.ref
            self.waypoint_cursor = broadcast.route.first
            self.expected_waypoint = NO_WAYPOINT
            self.error = False

        elif broadcast.kind == Kind.MISSION_COMMAND:
            self.expected_waypoint = routes.get(self.monitored_route, self.waypoint_cursor)

            if not self.monitored_route.empty:
                self.waypoint_cursor += 1

            if broadcast.waypoint != self.expected_waypoint and self.error == False:
                logger.warning("waypoint %d observed, expected %d (message %d)",
                               broadcast.waypoint, self.expected_waypoint, broadcast.id)
                self.error = True
                raised = True

        if permitted == False:
            return NOTHING

        if raised:
            return factory.error_response(last_id + 1, broadcast.id, self.monitored_route, broadcast.waypoint)

        if self.complete:
            return factory.task_complete(last_id + 1, self.route_msg_id, self.monitored_route)

        return NOTHING


# end of class Monitor


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
