"""
Common types and constants for the Tank Relay system.

This module centralizes message types, roles and defaults to avoid
hardcoding throughout the codebase.
"""

from enum import Enum
from typing import Final

# WebSocket Message Types (server -> peer)
WS_MSG_WELCOME: Final[str] = "welcome"
WS_MSG_INFO: Final[str] = "info"
WS_MSG_MATCHED: Final[str] = "matched"
WS_MSG_HOST_START: Final[str] = "hostStart"

# WebSocket Message Types (peer -> server)
WS_MSG_JOIN: Final[str] = "join"

# WebSocket Message Types (relayed between room members)
WS_MSG_INPUT: Final[str] = "input"
WS_MSG_INIT: Final[str] = "init"
WS_MSG_SNAPSHOT: Final[str] = "snapshot"

RELAY_MESSAGE_TYPES = frozenset({WS_MSG_INPUT, WS_MSG_INIT, WS_MSG_SNAPSHOT})
HOST_MESSAGE_TYPES = frozenset({WS_MSG_INIT, WS_MSG_SNAPSHOT})

# Join defaults
DEFAULT_TIER: Final[int] = 1
DEFAULT_TANK_NAME: Final[str] = "Tank"

# Informational notices
INFO_SEARCHING: Final[str] = "Searching for opponent (same tier)..."
INFO_WAITING_FOR_HOST: Final[str] = "Waiting for host to start…"
INFO_OPPONENT_DISCONNECTED: Final[str] = "Opponent disconnected."


class Role(Enum):
    """Role of a connection inside a room."""

    HOST = "host"
    CLIENT = "client"
