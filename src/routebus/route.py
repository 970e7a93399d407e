""" Routes and the sequence operations used to reason about them.

    A :class:`Route` is the handle carried in every message: a contiguous
    range of positions, where each position doubles as the waypoint that
    occupies it. That encoding keeps every operation here pure and total,
    and it is what the protocol services use.

    A :class:`Plan` is the payload-carrying counterpart: a bounded sequence
    of opaque waypoint payloads with explicit bounds. It answers the same
    questions by scanning, and does not assume that payloads are unique.
    A :class:`Plan` reduces to its :class:`Route` when it is handed to the
    protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence, Tuple


NO_INDEX = -1
NO_WAYPOINT = -1


@dataclass(frozen=True)
class Route:
    """ An immutable range of waypoint positions, *first* through *last*
        inclusive. The empty route has both bounds set to :data:`NO_INDEX`;
        any other combination involving a sentinel is rejected.
    """

    first: int = NO_INDEX
    last: int = NO_INDEX

    def __post_init__(self):

        for bound in (self.first, self.last):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise TypeError('route bounds must be integers, not ' + repr(bound))

        if self.first == NO_INDEX and self.last == NO_INDEX:
            return

        if 0 <= self.first <= self.last:
            return

        raise ValueError("invalid route bounds: [%d, %d]" % (self.first, self.last))


    def __iter__(self) -> Iterator[int]:
        if self.empty:
            return iter(())
        return iter(range(self.first, self.last + 1))


    def __len__(self) -> int:
        if self.empty:
            return 0
        return self.last - self.first + 1


    def __repr__(self) -> str:
        if self.empty:
            return 'Route()'
        return "Route(%d, %d)" % (self.first, self.last)


    @property
    def empty(self) -> bool:
        return self.first == NO_INDEX


    def as_pair(self) -> Tuple[int, int]:
        return (self.first, self.last)


    @classmethod
    def from_pair(cls, pair: Optional[Sequence[int]]) -> 'Route':
        """ Build a route from a ``(first, last)`` pair, as found in
            configuration files and on the wire. None, or an empty sequence,
            is the empty route.
        """

        if not pair:
            return EMPTY

        if len(pair) != 2:
            raise ValueError('a route is described by exactly two bounds, got ' + repr(pair))

        first, last = pair
        return cls(first, last)


# end of class Route


EMPTY = Route()


def valid_index(route: Route, index: int) -> bool:
    return route.first <= index <= route.last


def get(route: Route, index: int) -> int:
    """ Return the waypoint at *index*, or :data:`NO_WAYPOINT` if the route
        is empty or the index falls outside it.
    """

    if route.empty or not valid_index(route, index):
        return NO_WAYPOINT
    return index


def first_index_of(route: Route, element: int) -> int:
    if route.empty or not valid_index(route, element):
        return NO_INDEX
    return element


def last_index_of(route: Route, element: int) -> int:
    # Positions are the elements, so the first and last occurrence coincide.
    return first_index_of(route, element)


def contains(route: Route, element: int) -> bool:
    first = first_index_of(route, element)
    last = last_index_of(route, element)
    return first != NO_INDEX and last != NO_INDEX


def is_first(route: Route, element: int) -> bool:
    return contains(route, element) and element == route.first


def is_last(route: Route, element: int) -> bool:
    return contains(route, element) and element == route.last


def is_unique(route: Route, element: int) -> bool:
    first = first_index_of(route, element)
    return first != NO_INDEX and first == last_index_of(route, element)


def before(route: Route, first: int, second: int) -> bool:
    """ True if the first occurrence of *first* precedes the first occurrence
        of *second*. False if either is absent, or if they are the same
        element.
    """

    if first == second:
        return False

    if contains(route, first) and contains(route, second):
        return first_index_of(route, first) < first_index_of(route, second)

    return False


def after(route: Route, first: int, second: int) -> bool:
    """ True if the last occurrence of *first* follows the last occurrence
        of *second*. False if either is absent, or if they are the same
        element.
    """

    if first == second:
        return False

    if contains(route, first) and contains(route, second):
        return last_index_of(route, first) > last_index_of(route, second)

    return False



class Plan:
    """ A bounded sequence of opaque waypoint payloads. The payload at
        position *first* is the first element of *items*; positions are
        contiguous from there. Payloads are compared with ``==`` and may
        repeat, so :func:`first_index_of` and :func:`last_index_of` can
        legitimately disagree.
    """

    def __init__(self, items: Sequence[Any], first: int = 0):

        first = int(first)
        if first < 0:
            raise ValueError('a plan cannot start at a negative position')

        self.items = tuple(items)
        self.first = first if self.items else NO_INDEX


    def __eq__(self, other):
        if isinstance(other, Plan):
            return self.first == other.first and self.items == other.items
        return NotImplemented


    def __hash__(self):
        return hash((self.first, self.items))


    def __len__(self):
        return len(self.items)


    def __iter__(self):
        return iter(self.items)


    def __repr__(self):
        return "Plan(%r, first=%d)" % (list(self.items), max(self.first, 0))


    @property
    def last(self) -> int:
        if not self.items:
            return NO_INDEX
        return self.first + len(self.items) - 1


    @property
    def empty(self) -> bool:
        return not self.items


    def route(self) -> Route:
        """ The positional handle for this plan, suitable for a message.
        """

        if self.empty:
            return EMPTY
        return Route(self.first, self.last)


    def valid_index(self, index: int) -> bool:
        return self.first <= index <= self.last


    def get(self, index: int) -> Any:
        """ Return the payload at position *index*, or None when the index
            is outside the plan.
        """

        if self.empty or not self.valid_index(index):
            return None
        return self.items[index - self.first]


    def first_index_of(self, element: Any) -> int:
        for offset, item in enumerate(self.items):
            if item == element:
                return self.first + offset
        return NO_INDEX


    def last_index_of(self, element: Any) -> int:
        for offset in range(len(self.items) - 1, -1, -1):
            if self.items[offset] == element:
                return self.first + offset
        return NO_INDEX


    def contains(self, element: Any) -> bool:
        return self.first_index_of(element) != NO_INDEX and self.last_index_of(element) != NO_INDEX


    def is_first(self, element: Any) -> bool:
        return not self.empty and self.items[0] == element


    def is_last(self, element: Any) -> bool:
        return not self.empty and self.items[-1] == element


    def is_unique(self, element: Any) -> bool:
        first = self.first_index_of(element)
        return first != NO_INDEX and first == self.last_index_of(element)


    def before(self, first: Any, second: Any) -> bool:
        if first == second or not (self.contains(first) and self.contains(second)):
            return False
        return self.first_index_of(first) < self.first_index_of(second)


    def after(self, first: Any, second: Any) -> bool:
        if first == second or not (self.contains(first) and self.contains(second)):
            return False
        return self.last_index_of(first) > self.last_index_of(second)


# end of class Plan


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
