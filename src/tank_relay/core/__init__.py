"""
Core matchmaking and relay logic for the Tank Relay server.
"""

from .connection_registry import Connection, ConnectionRegistry
from .identifiers import new_id
from .protocol import (
    Channel,
    JoinRequest,
    RelayMessage,
    Unrecognized,
    decode_message,
    encode_message,
)
from .room_manager import Room, RoomManager
from .session_router import SessionRouter
from .tier_queue import JoinOutcome, TierQueue
from .types import Role

__all__ = [
    "Channel",
    "Connection",
    "ConnectionRegistry",
    "JoinOutcome",
    "JoinRequest",
    "RelayMessage",
    "Role",
    "Room",
    "RoomManager",
    "SessionRouter",
    "TierQueue",
    "Unrecognized",
    "decode_message",
    "encode_message",
    "new_id",
]
