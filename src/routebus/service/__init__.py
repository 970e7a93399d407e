""" The four protocol roles. Each service observes the broadcast message and
    the last issued identification number once per step, and returns its
    candidate for the next broadcast.
"""

from .base import Service, State
from .source import SourceService, PlanSource, ScriptedSource
from .relay import Relay
from .dispenser import Dispenser
from .monitor import Monitor

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
