"""ZMQ multipart framing for channel messages.

Publish (PUB/SUB)
    topic_with_trailing_dot, version, header_json

The topic is the message kind, so a subscriber can narrow its subscription
to a single kind. The header is the JSON encoding of
:func:`Message.to_dict`.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from .. import json
from ..errors import WireError
from .fields import Kind
from .message import Message, version


def topic(kind: Kind) -> bytes:
    # Trailing dot to prevent leading substring matches.
    return (kind.value + '.').encode()


def to_frames(msg: Message) -> Tuple[bytes, bytes, bytes]:
    """Encode a channel message as PUB/SUB multipart frames."""

    header = json.dumps(msg.to_dict())
    return (topic(msg.kind), version, header)


def from_frames(parts: Sequence[bytes]) -> Message:
    """Decode PUB/SUB multipart frames into a channel message."""

    if len(parts) != 3:
        raise WireError("expected 3 frames, got %d" % (len(parts)))

    their_topic, their_version, header = parts

    if their_version != version:
        raise WireError("message is wire version %r, recipient expects %r" % (their_version, version))

    try:
        fields = json.loads(header)
    except json.DecodeError as exc:
        raise WireError('undecodable message header: ' + repr(header)) from exc

    if isinstance(fields, dict):
        pass
    else:
        raise WireError('message header is not an object: ' + repr(fields))

    try:
        msg = Message.from_dict(fields)
    except (TypeError, ValueError) as exc:
        raise WireError('invalid message fields: ' + str(exc)) from exc

    if topic(msg.kind) != their_topic:
        raise WireError("topic %r does not match message kind %s" % (their_topic, msg.kind.value))

    return msg
