""" A class representation of a message on the shared channel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ..route import EMPTY, NO_WAYPOINT, Route
from .fields import Kind, NO_ID


# This is the version of the on-the-wire framing implemented in
# :mod:`routebus.protocol.wire`, identified by a single byte.

version = b'a'


def _check_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("message %s must be an integer, not %r" % (name, value))


@dataclass(frozen=True)
class Message:
    """ The :class:`Message` is the unit broadcast on the channel at every
        step. It is an immutable value: services copy the *route* out of a
        message they receive, and build a new message to send.

        A message of kind :attr:`Kind.NONE` is the no-message value; it, and
        only it, has every other field absent (``-1`` for *id*, *ref* and
        *waypoint*, and the empty route). Every other message carries an
        identification number issued by the bus counter.

        Two messages with the same non-absent *id* are assumed to be the
        same message. Nothing here enforces that.

        :ivar kind: A :class:`Kind` member.
        :ivar id: Identification number, unique per message.
        :ivar ref: Identification number of the message this one answers.
        :ivar route: The :class:`Route` carried by the message.
        :ivar waypoint: A single waypoint position, when relevant.
    """

    kind: Kind = Kind.NONE
    id: int = NO_ID
    ref: int = NO_ID
    route: Route = field(default=EMPTY)
    waypoint: int = NO_WAYPOINT

    def __post_init__(self):

        if isinstance(self.kind, Kind):
            pass
        else:
            raise TypeError('invalid message kind: ' + repr(self.kind))

        if isinstance(self.route, Route):
            pass
        else:
            raise TypeError('message route must be a Route, not ' + repr(self.route))

        _check_int('id', self.id)
        _check_int('ref', self.ref)
        _check_int('waypoint', self.waypoint)

        if self.ref < NO_ID or self.waypoint < NO_WAYPOINT:
            raise ValueError('negative ref or waypoint: ' + repr(self))

        if self.kind == Kind.NONE:
            if self.id != NO_ID or self.ref != NO_ID or not self.route.empty or self.waypoint != NO_WAYPOINT:
                raise ValueError('a None message carries no fields: ' + repr(self))
        elif self.id < 0:
            raise ValueError("a %s message requires an id" % (self.kind.value))


    def __repr__(self):
        if self.empty:
            return 'Message(None)'

        fields = ["id=%d" % (self.id)]
        if self.ref != NO_ID:
            fields.append("ref=%d" % (self.ref))
        if not self.route.empty:
            fields.append("route=[%d,%d]" % (self.route.first, self.route.last))
        if self.waypoint != NO_WAYPOINT:
            fields.append("waypoint=%d" % (self.waypoint))

        return "Message(%s, %s)" % (self.kind.value, ', '.join(fields))


    @property
    def empty(self) -> bool:
        return self.kind == Kind.NONE


    def to_dict(self) -> Dict[str, Any]:
        """ Return the fields of this message as a dictionary of plain
            Python types, suitable for JSON encoding.
        """

        return {
            'kind': self.kind.value,
            'id': self.id,
            'ref': self.ref,
            'route': list(self.route.as_pair()) if not self.route.empty else [],
            'waypoint': self.waypoint,
        }


    @classmethod
    def from_dict(cls, fields: Dict[str, Any]) -> 'Message':
        """ Inverse of :func:`to_dict`. Missing fields take their absent
            value; unknown fields are ignored.
        """

        kind = Kind(fields.get('kind', Kind.NONE.value))
        route = Route.from_pair(fields.get('route'))

        return cls(
            kind=kind,
            id=fields.get('id', NO_ID),
            ref=fields.get('ref', NO_ID),
            route=route,
            waypoint=fields.get('waypoint', NO_WAYPOINT),
        )


# end of class Message


NOTHING = Message()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
