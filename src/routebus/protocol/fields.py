"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

import enum


# Identifier used for the id and ref fields of a message that has none.

NO_ID = -1


class Kind(enum.Enum):
    """ The kind of a message on the channel. The string values are the
        names used on the wire.
    """

    NONE = 'None'
    MISSION_COMMAND = 'MissionCommand'
    AUTOMATION_RESPONSE = 'AutomationResponse'
    UNIQUE_AUTOMATION_RESPONSE = 'UniqueAutomationResponse'
    TASK_COMPLETE = 'TaskComplete'
    ERROR_RESPONSE = 'ErrorResponse'


class Token(enum.Enum):
    """ The holder of write permission for a single step. NONE means that
        nobody is allowed to emit.
    """

    NONE = 'None'
    SOURCE = 'Source'
    RELAY = 'Relay'
    DISPENSER = 'Dispenser'
    MONITOR = 'Monitor'


# Writers in the order the bus consults them.

WRITERS = (Token.SOURCE, Token.RELAY, Token.DISPENSER, Token.MONITOR)
