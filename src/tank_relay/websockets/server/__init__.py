"""
WebSocket server implementation for match relay.

This module contains the main MatchRelayServer class and related components.
"""

from .channel import WebSocketChannel
from .relay_server import MatchRelayServer
from .static_files import StaticFileHandler

__all__ = [
    "MatchRelayServer",
    "StaticFileHandler",
    "WebSocketChannel",
]
