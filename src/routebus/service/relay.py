""" The relay validates plans coming from the source and forwards them as
    AutomationResponse messages.
"""

import logging

from ..protocol import factory
from ..protocol.fields import Kind, NO_ID, Token
from ..protocol.message import NOTHING
from ..route import EMPTY
from .base import Service, State

logger = logging.getLogger(__name__)


class Relay(Service):
    """ Hold the route of the UniqueAutomationResponse observed on the current
        step, and forward it while permitted. Any other broadcast clears the
        stored route, so a plan is only forwarded on the step immediately
        following its appearance.

        :ivar stored_route: Route taken from the last UniqueAutomationResponse.
        :ivar stored_route_msg_id: The id of that message.
    """

    role = Token.RELAY

    def __init__(self):
        self.reset()


    def reset(self):
        self.stored_route = EMPTY
        self.stored_route_msg_id = NO_ID


    @property
    def state(self):
        if self.stored_route.empty:
            return State.IDLE
        return State.STREAMING


    def react(self, broadcast, last_id, permitted):

        if broadcast.kind == Kind.UNIQUE_AUTOMATION_RESPONSE:
            self.stored_route = broadcast.route
            self.stored_route_msg_id = broadcast.id
        else:
            self.reset()

        if permitted and not self.stored_route.empty:
            response = factory.automation_response(last_id + 1, self.stored_route_msg_id, self.stored_route)
            logger.debug("relay forwarding %r", response)
            return response

        return NOTHING


# end of class Relay


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
