"""
Wire protocol for the Tank Relay server.

Inbound payloads are decoded into a closed set of message variants at a
single boundary; anything that does not match becomes ``Unrecognized`` and
is dropped by the router. Outbound messages are plain dicts encoded to
JSON text and handed to the connection's channel.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Union

from ..infrastructure.exceptions import ProtocolError
from .types import (
    DEFAULT_TANK_NAME,
    DEFAULT_TIER,
    RELAY_MESSAGE_TYPES,
    WS_MSG_HOST_START,
    WS_MSG_INFO,
    WS_MSG_JOIN,
    WS_MSG_MATCHED,
    WS_MSG_WELCOME,
)

logger = logging.getLogger(__name__)


class Channel(Protocol):
    """Outbound side of an established connection, owned by the transport."""

    @property
    def is_open(self) -> bool: ...

    def send(self, text: str) -> None: ...

    def close(self) -> None: ...


@dataclass(frozen=True)
class JoinRequest:
    """Request to enter matchmaking for a tier."""

    tier: int = DEFAULT_TIER
    tank_name: str = DEFAULT_TANK_NAME


@dataclass(frozen=True)
class RelayMessage:
    """An ``input``, ``init`` or ``snapshot`` message bound for the other room member."""

    type: str
    payload: Any = field(default_factory=dict)


@dataclass(frozen=True)
class Unrecognized:
    """Outcome of a payload that matched no known message."""

    reason: str


InboundMessage = Union[JoinRequest, RelayMessage, Unrecognized]


def coerce_tier(value: Any) -> int:
    """Coerce a requested tier to an int, falling back to the default tier."""
    if not value or isinstance(value, bool):
        return DEFAULT_TIER
    try:
        tier = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_TIER
    if not math.isfinite(tier):
        return DEFAULT_TIER
    return int(tier)


def coerce_name(value: Any) -> str:
    """Coerce a requested tank name to a string, falling back to the default name."""
    if not value:
        return DEFAULT_TANK_NAME
    return str(value)


def _parse(raw: Union[str, bytes]) -> Dict[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolError(f"Payload is not UTF-8: {e}")

    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise ProtocolError(f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        raise ProtocolError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _decode(raw: Union[str, bytes]) -> InboundMessage:
    data = _parse(raw)
    message_type = data.get("type")

    if not isinstance(message_type, str):
        raise ProtocolError("Missing message type")

    if message_type == WS_MSG_JOIN:
        return JoinRequest(
            tier=coerce_tier(data.get("tier")),
            tank_name=coerce_name(data.get("tankName")),
        )

    if message_type in RELAY_MESSAGE_TYPES:
        return RelayMessage(type=message_type, payload=data.get("payload") or {})

    raise ProtocolError(f"Unknown message type: {message_type}")


def decode_message(raw: Union[str, bytes]) -> InboundMessage:
    """Decode an inbound payload, never raising."""
    try:
        return _decode(raw)
    except ProtocolError as e:
        return Unrecognized(reason=str(e))


def encode_message(message: Dict[str, Any]) -> str:
    """Encode an outbound message to JSON text."""
    return json.dumps(message, ensure_ascii=False)


def send(handle: Optional[Channel], message: Dict[str, Any]) -> bool:
    """
    Deliver ``message`` on ``handle`` if its channel is open.

    Returns:
        True if the message was handed to the channel, False if skipped
    """
    if handle is None or not handle.is_open:
        logger.debug(f"Skipping {message.get('type')} to a closed channel")
        return False
    handle.send(encode_message(message))
    return True


# Outbound message builders


def welcome_message(connection_id: str) -> Dict[str, Any]:
    return {"type": WS_MSG_WELCOME, "id": connection_id}


def info_message(text: str) -> Dict[str, Any]:
    return {"type": WS_MSG_INFO, "text": text}


def matched_message(room_id: str, host_id: str, peer_id: str) -> Dict[str, Any]:
    return {
        "type": WS_MSG_MATCHED,
        "roomId": room_id,
        "hostId": host_id,
        "peerId": peer_id,
    }


def host_start_message() -> Dict[str, Any]:
    return {"type": WS_MSG_HOST_START}


def relay_message(message: RelayMessage) -> Dict[str, Any]:
    return {"type": message.type, "payload": message.payload}
