""" Python implementation of a four-service route execution protocol over a
    single shared broadcast channel: a source of plans, a relay that
    validates them, a dispenser that streams their waypoints, and a monitor
    that checks the stream and reports completion or faults.
"""

# Utility components.

from . import json
from . import poll
from . import errors

# Submodules used by multiple other components.

from . import route
from . import protocol
from . import config

# Primary public-facing interfaces.

from . import service
from . import schedule
from . import check

from .bus import Bus, arbitrate
from .route import Route, Plan
from .protocol import Kind, Message, Token

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
