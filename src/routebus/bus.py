""" The shared channel. A :class:`Bus` wires the four services to a single
    broadcast value and advances them together, one discrete step at a time:

    1. the arbiter admits at most one of the candidates offered on the
       previous step as the new broadcast;
    2. the last non-empty message id is updated from that broadcast;
    3. the scheduler picks the token holder for this step;
    4. every service observes the same broadcast and id, and offers its
       candidate for the next step.

    Nothing here depends on how messages would move on a real network; see
    :mod:`routebus.protocol.publish` for an observation tap.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple

from . import poll
from .errors import ArbitrationError, ContractError, ProtocolError
from .protocol.fields import Token, WRITERS
from .protocol.message import Message, NOTHING
from .service import Dispenser, Monitor, Relay, SourceService

logger = logging.getLogger(__name__)


def arbitrate(candidates: Mapping[Token, Message]) -> Tuple[Token, Message]:
    """ Return the writer and message of the single non-empty candidate, or
        ``(Token.NONE, NOTHING)`` when every candidate is empty. Two or more
        non-empty candidates are a protocol violation and raise
        :class:`ArbitrationError`; there is no merge order to fall back on.
    """

    offered = [(token, message) for token, message in candidates.items() if not message.empty]

    if len(offered) > 1:
        writers = ', '.join(token.value for token, message in offered)
        raise ArbitrationError('more than one writer offered a message: ' + writers)

    if offered:
        return offered[0]

    return (Token.NONE, NOTHING)


class StepRecord(NamedTuple):
    """ Everything observable about one completed step. *writer* is the
        service whose candidate became *broadcast*; *candidates* are the
        messages offered for the following step.
    """

    step: int
    token: Token
    writer: Token
    broadcast: Message
    last_id: int
    candidates: Dict[Token, Message]


class Trace(list):
    """ A list of :class:`StepRecord` instances in step order, with a few
        helpers for the questions tests tend to ask.
    """

    def broadcasts(self) -> List[Message]:
        """ Return the non-empty broadcast messages, in order.
        """

        return [record.broadcast for record in self if not record.broadcast.empty]


    def emitted(self, token: Token) -> List[Message]:
        """ Return the non-empty candidates offered by *token*, in order.
        """

        messages = list()
        for record in self:
            message = record.candidates[token]
            if not message.empty:
                messages.append(message)
        return messages


# end of class Trace



class BusView:
    """ Read-only snapshot handed to the scheduler. The services are exposed
        for inspection only; a scheduler must not call into them.
    """

    __slots__ = ('step', 'broadcast', 'last_id', 'source', 'relay', 'dispenser', 'monitor')

    def __init__(self, step, broadcast, last_id, services):
        self.step = step
        self.broadcast = broadcast
        self.last_id = last_id
        self.source = services[Token.SOURCE]
        self.relay = services[Token.RELAY]
        self.dispenser = services[Token.DISPENSER]
        self.monitor = services[Token.MONITOR]


# end of class BusView



class Bus:
    """ The :class:`Bus` owns the broadcast value, the global id counter, and
        the four services. The *source* is any object with a
        ``poll(write_permitted, last_id)`` method; it is wrapped in a
        :class:`routebus.service.SourceService` that checks its contract.
        The *scheduler* assigns the token each step. Replacement relay,
        dispenser or monitor instances may be supplied; the defaults are
        fresh instances of the standard services.

        :ivar step_count: Number of completed steps.
        :ivar broadcast: The message broadcast on the most recent step.
        :ivar last_id: Id of the most recent non-empty broadcast; starts at 0.
        :ivar trace: A :class:`Trace` of every step, if *record* is set.
    """

    def __init__(self, source, scheduler, relay=None, dispenser=None, monitor=None, record=True):

        if isinstance(source, SourceService):
            pass
        else:
            source = SourceService(source)

        self.services = {
            Token.SOURCE: source,
            Token.RELAY: relay if relay is not None else Relay(),
            Token.DISPENSER: dispenser if dispenser is not None else Dispenser(),
            Token.MONITOR: monitor if monitor is not None else Monitor(),
        }

        self.scheduler = scheduler
        self.record = record
        self.observers = list()
        self.trace = Trace()

        self._reset_state()


    def _reset_state(self):
        self.step_count = 0
        self.broadcast = NOTHING
        self.writer = Token.NONE
        self.last_id = 0
        self.candidates = dict((token, NOTHING) for token in WRITERS)
        self.trace = Trace()


    def __getitem__(self, token):
        return self.services[token]


    @property
    def source(self):
        return self.services[Token.SOURCE]

    @property
    def relay(self):
        return self.services[Token.RELAY]

    @property
    def dispenser(self):
        return self.services[Token.DISPENSER]

    @property
    def monitor(self):
        return self.services[Token.MONITOR]


    def register(self, callback):
        """ Register a callback that will be invoked with the
            :class:`StepRecord` of every completed step. Callbacks should be
            lightweight; they run on whatever thread drives the bus.
        """

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        self.observers.append(callback)


    def unregister(self, callback):
        try:
            self.observers.remove(callback)
        except ValueError:
            pass


    def reset(self):
        """ Return every service, the scheduler and the channel to step zero.
        """

        for service in self.services.values():
            service.reset()

        self.scheduler.reset()
        self._reset_state()


    def step(self) -> StepRecord:
        """ Advance the whole protocol by one step and return its record.
            If the candidates from the previous step cannot be arbitrated the
            step is rejected with :class:`ArbitrationError` before any state
            changes.

            A :class:`ContractError` from the scheduler or the source is only
            detectable once they have been consulted. The bus itself is left
            untouched (no step is counted or recorded) but the scheduler and
            the source may already have advanced; :func:`reset` returns
            everything to step zero.
        """

        step = self.step_count + 1

        try:
            writer, broadcast = arbitrate(self.candidates)
        except ArbitrationError:
            logger.error("step %d rejected: %r", step, self.candidates)
            raise

        if broadcast.empty:
            last_id = self.last_id
        elif broadcast.id > self.last_id:
            last_id = broadcast.id
        else:
            logger.error("step %d rejected: id %d does not follow %d", step, broadcast.id, self.last_id)
            raise ProtocolError("broadcast id %d is not greater than %d" % (broadcast.id, self.last_id))

        view = BusView(step, broadcast, last_id, self.services)
        token = self.scheduler.next_writer(view)

        if isinstance(token, Token):
            pass
        else:
            raise ContractError('scheduler returned a non-token: ' + repr(token))

        candidates = dict()
        for role in WRITERS:
            service = self.services[role]
            candidates[role] = service.react(broadcast, last_id, token == role)

        self.step_count = step
        self.writer = writer
        self.broadcast = broadcast
        self.last_id = last_id
        self.candidates = candidates

        if not broadcast.empty:
            logger.debug("step %d: %s broadcast %r", step, writer.value, broadcast)

        record = StepRecord(step, token, writer, broadcast, last_id, candidates)

        if self.record:
            self.trace.append(record)

        self.propagate(record)
        return record


    def propagate(self, record):
        """ Invoke any/all callbacks registered via :func:`register`. A
            failing callback is logged and does not affect the others.
        """

        for callback in tuple(self.observers):
            try:
                callback(record)
            except ProtocolError:
                raise
            except Exception:
                logger.exception("observer %r failed on step %d", callback, record.step)


    def run_steps(self, count: int) -> Trace:
        """ Run *count* steps and return the records for just those steps.
        """

        records = Trace()
        for _ in range(int(count)):
            records.append(self.step())
        return records


    def run_until(self, predicate: Callable[[StepRecord], bool], max_steps: int = 1000) -> Optional[StepRecord]:
        """ Step until *predicate* returns True for a step record, and return
            that record. Returns None if *max_steps* pass without a match.
        """

        for _ in range(int(max_steps)):
            record = self.step()
            if predicate(record):
                return record

        return None


    def run(self, period: float) -> None:
        """ Step the bus every *period* seconds on a background thread until
            :func:`stop` is called, or a step raises a protocol error.
        """

        poll.start(self._tick, period)


    def stop(self) -> None:
        poll.stop(self._tick)


    @property
    def running(self) -> bool:
        return poll.period(self._tick) is not None


    def _tick(self):

        try:
            self.step()
        except ProtocolError:
            logger.exception("periodic stepping halted at step %d", self.step_count + 1)
            self.stop()


# end of class Bus


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
