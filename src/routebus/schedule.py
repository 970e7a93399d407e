""" Scheduling policies. A scheduler decides, once per step, which service
    holds the write token. The protocol must behave under any of them; only
    :class:`Pipeline` is intended to make progress in a real deployment.
"""

from __future__ import annotations

import itertools
import random
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

from .errors import ConfigError
from .protocol.fields import Kind, Token, WRITERS


class Scheduler(ABC):
    """Minimal contract for a token assignment policy."""

    @abstractmethod
    def next_writer(self, view) -> Token:
        """ Return the :class:`Token` for the step described by *view*, a
            :class:`routebus.bus.BusView`. The view reflects the broadcast
            about to be observed, before any service has reacted to it.
        """

    def reset(self) -> None:
        pass


class Scripted(Scheduler):
    """ Hand out *tokens* in order, one per step, then *default* forever.
        Used to drive specific interleavings in tests.
    """

    def __init__(self, tokens: Iterable[Token], default: Token = Token.NONE):
        self.tokens = list(tokens)
        self.default = default
        self.position = 0

    def next_writer(self, view) -> Token:
        if self.position < len(self.tokens):
            token = self.tokens[self.position]
            self.position += 1
            return token
        return self.default

    def reset(self) -> None:
        self.position = 0


class RoundRobin(Scheduler):
    """Cycle through *order*, regardless of protocol state."""

    def __init__(self, order: Sequence[Token] = WRITERS):
        self.order = tuple(order)
        if not self.order:
            raise ValueError('round robin requires at least one token')
        self._cycle = itertools.cycle(self.order)

    def next_writer(self, view) -> Token:
        return next(self._cycle)

    def reset(self) -> None:
        self._cycle = itertools.cycle(self.order)


class Seeded(Scheduler):
    """ Choose uniformly among *choices* with a private random generator.
        With a fixed *seed* the schedule is reproducible, which makes this
        the adversarial policy of choice for property tests.
    """

    def __init__(self, seed: Optional[int] = None, choices: Sequence[Token] = (Token.NONE,) + WRITERS):
        self.seed = seed
        self.choices = tuple(choices)
        self.random = random.Random(seed)

    def next_writer(self, view) -> Token:
        return self.random.choice(self.choices)

    def reset(self) -> None:
        self.random = random.Random(self.seed)


class Pipeline(Scheduler):
    """ Grant the token to whichever service the current broadcast calls
        upon: the relay answers a plan, the dispenser streams while it has
        waypoints left, and the monitor gets the last word on a stream. An
        idle channel, or a finished or failed task, goes back to the source.
    """

    def next_writer(self, view) -> Token:

        kind = view.broadcast.kind

        if kind == Kind.UNIQUE_AUTOMATION_RESPONSE:
            return Token.RELAY

        if kind == Kind.AUTOMATION_RESPONSE:
            return Token.DISPENSER

        if kind == Kind.MISSION_COMMAND:
            if view.dispenser.remaining > 0:
                return Token.DISPENSER
            return Token.MONITOR

        return Token.SOURCE


policies = {
    'pipeline': Pipeline,
    'round-robin': RoundRobin,
    'seeded': Seeded,
}


def by_name(name: str, seed: Optional[int] = None) -> Scheduler:
    """ Return a new scheduler instance for the policy *name*, as used in
        configuration files and on the command line.
    """

    try:
        policy = policies[name]
    except KeyError:
        raise ConfigError("unknown scheduler %r, expected one of %s" % (name, ', '.join(sorted(policies))))

    if policy is Seeded:
        return Seeded(seed)

    return policy()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
