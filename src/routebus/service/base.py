"""Service interface shared by the four protocol roles."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod

from ..protocol.fields import Token
from ..protocol.message import Message


class State(enum.Enum):
    """ Named states for the stateful services. Not every service uses
        every state; a relay, for example, is never exhausted or faulted.
    """

    IDLE = 'Idle'
    STREAMING = 'Streaming'
    EXHAUSTED = 'Exhausted'
    FAULTED = 'Faulted'


class Service(ABC):
    """ Minimal contract for a protocol role. A service owns its state
        outright; the bus calls :func:`react` exactly once per step.
    """

    role = Token.NONE

    @abstractmethod
    def react(self, broadcast: Message, last_id: int, permitted: bool) -> Message:
        """ Observe *broadcast* and *last_id* for the current step, update
            private state, and return the candidate message for the next
            step. A service that is not *permitted* must return the None
            message.
        """

    @abstractmethod
    def reset(self) -> None:
        """Return to the state held at step zero."""

    @property
    def state(self) -> State:
        return State.IDLE

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__, self.state.value)
