""" The dispenser turns an AutomationResponse into a stream of
    MissionCommand messages, one waypoint per step.
"""

import logging

from .. import route as routes
from ..protocol import factory
from ..protocol.fields import Kind, NO_ID, Token
from ..protocol.message import NOTHING
from ..route import EMPTY, NO_INDEX, NO_WAYPOINT
from .base import Service, State

logger = logging.getLogger(__name__)


class Dispenser(Service):
    """ Stream the waypoints of the most recent AutomationResponse.

        Receiving a response with a non-empty route replaces the stored
        route and points the cursor at its first waypoint. On every other
        step the cursor advances by one while a route is stored, whether or
        not the dispenser held the token; a waypoint that could not be sent
        on its step is skipped, and the monitor will notice. When the cursor
        moves past the last waypoint the stored route is discarded.

        :ivar stored_route: The route being streamed, or the empty route.
        :ivar stored_route_msg_id: Id of the UniqueAutomationResponse the
            stored route originated from.
        :ivar cursor: Position of the waypoint offered on this step.
    """

    role = Token.DISPENSER

    def __init__(self):
        self.reset()


    def reset(self):
        self._clear()
        self.exhausted = False


    def _clear(self):
        self.stored_route = EMPTY
        self.stored_route_msg_id = NO_ID
        self.cursor = NO_INDEX


    @property
    def state(self):
        if not self.stored_route.empty:
            return State.STREAMING
        if self.exhausted:
            return State.EXHAUSTED
        return State.IDLE


    @property
    def remaining(self):
        """ The number of waypoints left after the current one. Zero when
            no route is stored.
        """

        if self.stored_route.empty:
            return 0
        return max(self.stored_route.last - self.cursor, 0)


    @property
    def waypoint(self):
        return routes.get(self.stored_route, self.cursor)


    def react(self, broadcast, last_id, permitted):

        if broadcast.kind == Kind.AUTOMATION_RESPONSE and not broadcast.route.empty:
            self.stored_route = broadcast.route
            self.stored_route_msg_id = broadcast.ref
            self.cursor = broadcast.route.first
            self.exhausted = False

        elif not self.stored_route.empty:
            self.cursor += 1

            if self.cursor > self.stored_route.last:
                logger.debug("dispenser finished route %r", self.stored_route)
                self._clear()
                self.exhausted = True

        waypoint = self.waypoint

        if permitted and waypoint != NO_WAYPOINT:
            return factory.mission_command(last_id + 1, self.stored_route_msg_id, self.stored_route, waypoint)

        return NOTHING


# end of class Dispenser


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
