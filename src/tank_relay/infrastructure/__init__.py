"""
Infrastructure components for the Tank Relay server.

This package contains infrastructure concerns including:
- Logging configuration and utilities with production controls
- Custom exception definitions
"""

from .logging_manager import (
    setup_logging,
    get_logger,
    LoggingManager,
    LogLevel,
    Environment,
)
from .exceptions import (
    TankRelayError,
    ConfigurationError,
    ValidationError,
    ProtocolError,
    RoomError,
    NetworkError,
    WebSocketError,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LoggingManager",
    "LogLevel",
    "Environment",
    # Exceptions
    "TankRelayError",
    "ConfigurationError",
    "ValidationError",
    "ProtocolError",
    "RoomError",
    "NetworkError",
    "WebSocketError",
]
