"""
Tank Relay - matchmaking and message relay for two-player tank battles.

Players connect over WebSocket, ask to join a tier and are paired with
the next player asking for the same tier. The first player becomes the
host and runs the authoritative simulation; the second becomes the
client and only sends inputs.

Architecture:
- Core: registry, tier queue, rooms and the session router
- WebSockets: server adapter, outbound channels and static files
- Config: environment-backed settings
- Infrastructure: logging and exceptions
"""

__version__ = "1.0.0"

from .core import (
    ConnectionRegistry,
    RoomManager,
    SessionRouter,
    TierQueue,
)
from .config import RelayConfig, RelayConfigManager, config_manager
from .infrastructure.logging_manager import setup_logging, get_logger
from .infrastructure.exceptions import (
    TankRelayError,
    ConfigurationError,
    ProtocolError,
    RoomError,
    NetworkError,
)

__all__ = [
    "__version__",
    # Core components
    "ConnectionRegistry",
    "RoomManager",
    "SessionRouter",
    "TierQueue",
    # Configuration
    "RelayConfig",
    "RelayConfigManager",
    "config_manager",
    # Infrastructure
    "setup_logging",
    "get_logger",
    "TankRelayError",
    "ConfigurationError",
    "ProtocolError",
    "RoomError",
    "NetworkError",
]
