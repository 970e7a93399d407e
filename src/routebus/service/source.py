""" The plan source. Route generation is not part of the protocol: any
    object with a ``poll(write_permitted, last_id)`` method can serve, as
    long as it honors the contract checked by :class:`SourceService`.
"""

import collections
import logging

from ..errors import ContractError
from ..protocol import factory
from ..protocol.fields import Kind, Token
from ..protocol.message import Message, NOTHING
from ..route import Plan, Route
from .base import Service

logger = logging.getLogger(__name__)


class SourceService(Service):
    """ Adapt an external *source* to the bus. The source is polled every
        step; whatever it returns is checked against the source contract:

        * without write permission, the result must be the None message;
        * with permission, the result is either the None message or a
          UniqueAutomationResponse whose id exceeds *last_id*.

        Anything else raises :class:`ContractError`.
    """

    role = Token.SOURCE

    def __init__(self, source):

        try:
            source.poll
        except AttributeError:
            raise TypeError('a source must provide poll(write_permitted, last_id)')

        self.source = source
        self.emitted = 0


    def react(self, broadcast, last_id, permitted):

        message = self.source.poll(permitted, last_id)

        if isinstance(message, Message):
            pass
        else:
            raise ContractError('source returned a non-message: ' + repr(message))

        if message.empty:
            return message

        if permitted == False:
            raise ContractError('source emitted without write permission: ' + repr(message))

        if message.kind != Kind.UNIQUE_AUTOMATION_RESPONSE:
            raise ContractError('source may only emit UniqueAutomationResponse, not ' + message.kind.value)

        if message.id <= last_id:
            raise ContractError("source id %d is not fresh, last id is %d" % (message.id, last_id))

        self.emitted += 1
        logger.debug("source emitted %r", message)
        return message


    def reset(self):
        self.emitted = 0
        try:
            reset = self.source.reset
        except AttributeError:
            return
        reset()


# end of class SourceService



class PlanSource:
    """ Emit one UniqueAutomationResponse per permitted step, in order, for
        each of the supplied *plans*. A plan is either a :class:`Route` or a
        :class:`Plan`; the latter is reduced to its route. Once the plans are
        exhausted the source stays silent.
    """

    def __init__(self, plans=()):

        self.routes = collections.deque()
        self._original = list()

        for plan in plans:
            self.add(plan)


    def add(self, plan):
        """ Queue another *plan* for emission.
        """

        if isinstance(plan, Plan):
            route = plan.route()
        elif isinstance(plan, Route):
            route = plan
        else:
            route = Route.from_pair(plan)

        if route.empty:
            raise ValueError('a source plan must contain at least one waypoint')

        self.routes.append(route)
        self._original.append(route)


    def __len__(self):
        return len(self.routes)


    def poll(self, write_permitted, last_id):

        if write_permitted and self.routes:
            route = self.routes.popleft()
            return factory.unique_automation_response(last_id + 1, route)

        return NOTHING


    def reset(self):
        self.routes = collections.deque(self._original)


# end of class PlanSource



class ScriptedSource:
    """ Return pre-built messages verbatim, one per permitted step. This is
        a fault injection tool: nothing is checked here, so a script can
        carry stale ids or the wrong kind of message. If *ignore_permission*
        is set the script advances every step, permitted or not.
    """

    def __init__(self, messages, ignore_permission=False):
        self.messages = list(messages)
        self.ignore_permission = ignore_permission
        self.position = 0


    def poll(self, write_permitted, last_id):

        if write_permitted or self.ignore_permission:
            if self.position < len(self.messages):
                message = self.messages[self.position]
                self.position += 1
                return message

        return NOTHING


    def reset(self):
        self.position = 0


# end of class ScriptedSource


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
