"""Convenience constructors for protocol messages."""

from __future__ import annotations

from ..route import NO_WAYPOINT, Route
from .fields import Kind, NO_ID
from .message import Message


def unique_automation_response(id: int, route: Route) -> Message:
    return Message(Kind.UNIQUE_AUTOMATION_RESPONSE, id, NO_ID, route)


def automation_response(id: int, ref: int, route: Route) -> Message:
    return Message(Kind.AUTOMATION_RESPONSE, id, ref, route)


def mission_command(id: int, ref: int, route: Route, waypoint: int) -> Message:
    return Message(Kind.MISSION_COMMAND, id, ref, route, waypoint)


def task_complete(id: int, ref: int, route: Route) -> Message:
    return Message(Kind.TASK_COMPLETE, id, ref, route)


def error_response(id: int, ref: int, route: Route, waypoint: int = NO_WAYPOINT) -> Message:
    """Report a waypoint that did not match the monitored route."""
    return Message(Kind.ERROR_RESPONSE, id, ref, route, waypoint)
