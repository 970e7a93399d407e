""" Exceptions raised by the protocol core and its harness. Semantic faults
    observed by the monitor are not exceptions; they travel on the channel
    as ErrorResponse messages.
"""


class ProtocolError(Exception):
    """Base class for all routebus errors."""


class ArbitrationError(ProtocolError):
    """More than one service offered a message for the same step."""


class ContractError(ProtocolError):
    """An external collaborator (source or scheduler) broke its contract."""


class TraceError(ProtocolError):
    """ A recorded trace violates a protocol property. The *step* attribute
        identifies the first offending step.
    """

    def __init__(self, step, text):
        ProtocolError.__init__(self, "step %d: %s" % (step, text))
        self.step = step
        self.text = text


class ConfigError(ProtocolError):
    """The configuration is missing, unreadable, or contains bad values."""


class WireError(ProtocolError):
    """A multipart frame could not be decoded into a message."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
