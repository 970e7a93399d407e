"""
routebus Protocol Layer
=======================

Message model and framing for the shared channel.

    fields.py     Kind and Token vocabulary, absent-id sentinel
    message.py    Immutable Message value and the None message
    factory.py    One constructor per message kind
    wire.py       Message <-> ZeroMQ multipart frames
    publish.py    PUB/SUB observation tap (imported on demand)

The message layer does not depend on any transport. Only publish.py
imports ZeroMQ, and nothing in the protocol core imports publish.py.
"""

from . import fields
from . import message
from . import factory
from . import wire

from .fields import Kind, Token, NO_ID
from .message import Message, NOTHING

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
