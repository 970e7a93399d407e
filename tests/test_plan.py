import pytest

from routebus.route import EMPTY, NO_INDEX, Plan, Route


def test_route_handle():

    plan = Plan(['dock', 'buoy', 'reef'])
    assert plan.first == 0
    assert plan.last == 2
    assert plan.route() == Route(0, 2)

    offset = Plan(['a', 'b'], first=10)
    assert offset.route() == Route(10, 11)
    assert offset.get(10) == 'a'
    assert offset.get(11) == 'b'
    assert offset.get(9) is None

    empty = Plan([])
    assert empty.empty
    assert empty.route() == EMPTY
    assert empty.last == NO_INDEX
    assert empty.get(0) is None

    with pytest.raises(ValueError):
        Plan(['a'], first=-1)


def test_repeated_payloads():
    """ Payloads are opaque and may repeat; nothing may assume otherwise.
    """

    plan = Plan(['home', 'a', 'b', 'a', 'home'])

    assert plan.first_index_of('a') == 1
    assert plan.last_index_of('a') == 3
    assert not plan.is_unique('a')
    assert plan.is_unique('b')
    assert not plan.is_unique('z')

    assert plan.contains('home')
    assert not plan.contains('z')
    assert plan.first_index_of('z') == NO_INDEX

    assert plan.is_first('home')
    assert plan.is_last('home')
    assert not plan.is_first('a')

    assert plan.before('a', 'b')
    assert not plan.before('b', 'a')
    assert plan.after('a', 'b')
    assert not plan.before('a', 'a')
    assert not plan.after('a', 'z')


def test_sequence_laws():

    plans = [Plan([]), Plan(['x']), Plan(['x', 'y', 'x']), Plan(['p', 'q', 'r'], first=4)]
    elements = ['x', 'y', 'p', 'q', 'r', 'missing']

    for plan in plans:
        for index in range(-1, 9):
            payload = plan.get(index)
            if payload is not None:
                assert plan.contains(payload)

        for element in elements:
            first = plan.first_index_of(element)
            last = plan.last_index_of(element)

            assert plan.contains(element) == (first != NO_INDEX and last != NO_INDEX)

            if first != NO_INDEX:
                assert first <= last

            if plan.is_unique(element):
                assert first == last


def test_equality():
    assert Plan(['a', 'b']) == Plan(['a', 'b'])
    assert Plan(['a', 'b']) != Plan(['a', 'b'], first=1)
    assert hash(Plan(['a'])) == hash(Plan(['a']))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
