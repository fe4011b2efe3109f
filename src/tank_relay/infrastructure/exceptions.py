"""
Custom exceptions for the Tank Relay system.

This module defines all custom exceptions used throughout the system,
providing clear error categorization and handling.
"""


class TankRelayError(Exception):
    """Base exception for all Tank Relay related errors."""

    pass


class ConfigurationError(TankRelayError):
    """Raised when there are configuration-related errors."""

    pass


class ValidationError(ConfigurationError):
    """Raised when a configuration value fails validation."""

    pass


class ProtocolError(TankRelayError):
    """Raised when an inbound payload does not match any known message."""

    pass


class RoomError(TankRelayError):
    """Raised when a room cannot be formed from the given members."""

    pass


class NetworkError(TankRelayError):
    """Raised when there are network communication errors."""

    pass


class WebSocketError(NetworkError):
    """Raised when there are WebSocket communication errors."""

    pass
