"""
Session router for the Tank Relay server.

Single entry point for the transport: one call per new connection, per
inbound payload and per closed connection. Every call runs to completion
without suspending, so the registry, queue and room tables never see
interleaved updates.
"""

import logging
from typing import Any, Dict, Optional, Union

from . import protocol
from .connection_registry import ConnectionRegistry
from .protocol import Channel, JoinRequest, RelayMessage, Unrecognized
from .room_manager import RoomManager
from .tier_queue import TierQueue


class SessionRouter:
    """Dispatches connection events to matchmaking and relay."""

    def __init__(
        self,
        registry: Optional[ConnectionRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.registry = registry or ConnectionRegistry()
        self.rooms = RoomManager(self.registry, self.logger)
        self.queue = TierQueue(self.registry, self.rooms, self.logger)

    def on_connect(self, handle: Channel) -> str:
        """Register a new connection and greet it with its identity."""
        connection_id = self.registry.register(handle)
        self.logger.info(f"Connection {connection_id} registered")
        self.send(handle, protocol.welcome_message(connection_id))
        return connection_id

    def on_message(self, handle: Channel, raw: Union[str, bytes]) -> None:
        """Decode and dispatch one inbound payload."""
        message = protocol.decode_message(raw)
        if isinstance(message, Unrecognized):
            self.logger.debug(f"Dropping unrecognized message: {message.reason}")
            return

        connection = self.registry.lookup(handle)
        if connection is None:
            return

        if isinstance(message, JoinRequest):
            if connection.is_matched:
                self.logger.debug(
                    f"Ignoring join from {connection.id}: already in room {connection.room_id}"
                )
                return
            self.queue.join(handle, message.tier, message.tank_name)
        elif isinstance(message, RelayMessage):
            self.rooms.relay(handle, message)

    def on_close(self, handle: Channel) -> None:
        """Clean up after a closed or failed connection."""
        connection = self.registry.lookup(handle)
        if connection is None:
            return

        self.rooms.teardown(handle)
        self.queue.dequeue(handle)
        self.registry.unregister(handle)
        self.logger.info(f"Connection {connection.id} closed")

    def send(self, handle: Channel, message: Dict[str, Any]) -> bool:
        """Send ``message`` to ``handle``; skipped if its channel is not open."""
        return protocol.send(handle, message)

    def get_stats(self) -> Dict[str, int]:
        """Get router statistics."""
        return {
            "connections": len(self.registry),
            "waiting": len(self.queue),
            "rooms": len(self.rooms),
        }
