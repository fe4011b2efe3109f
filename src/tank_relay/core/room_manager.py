"""
Room manager for the Tank Relay server.

A room is a matched pair of connections. The host is authoritative for
game state and publishes ``init``/``snapshot`` messages; the client only
submits ``input`` messages. Anything flowing the other way is dropped.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..infrastructure.exceptions import RoomError
from . import protocol
from .connection_registry import ConnectionRegistry
from .identifiers import new_id
from .protocol import Channel, RelayMessage
from .types import (
    HOST_MESSAGE_TYPES,
    INFO_OPPONENT_DISCONNECTED,
    INFO_WAITING_FOR_HOST,
    WS_MSG_INPUT,
    Role,
)


@dataclass
class Room:
    """Two connections paired under a tier."""

    id: str
    host: Channel
    client: Channel
    tier: int

    def role_of(self, handle: Channel) -> Optional[Role]:
        if handle is self.host:
            return Role.HOST
        if handle is self.client:
            return Role.CLIENT
        return None

    def other(self, handle: Channel) -> Channel:
        return self.client if handle is self.host else self.host


class RoomManager:
    """Creates rooms, relays messages inside them and tears them down."""

    def __init__(
        self, registry: ConnectionRegistry, logger: Optional[logging.Logger] = None
    ) -> None:
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)

        # Map room_id -> Room
        self.rooms: Dict[str, Room] = {}

    def create_room(self, host: Channel, client: Channel, tier: int) -> str:
        """
        Pair ``host`` and ``client`` into a new room and notify both.

        Raises:
            RoomError: If either member is unregistered or both are the same
        """
        if host is client:
            raise RoomError("A room needs two distinct connections")

        host_conn = self.registry.lookup(host)
        client_conn = self.registry.lookup(client)
        if host_conn is None or client_conn is None:
            raise RoomError("Both room members must be registered")

        room_id = new_id()
        while room_id in self.rooms:
            room_id = new_id()

        self.rooms[room_id] = Room(id=room_id, host=host, client=client, tier=tier)
        host_conn.room_id = room_id
        client_conn.room_id = room_id

        self.logger.info(
            f"Room {room_id} created on tier {tier}: "
            f"host {host_conn.id} ({host_conn.tank_name}), "
            f"client {client_conn.id} ({client_conn.tank_name})"
        )

        matched = protocol.matched_message(room_id, host_conn.id, client_conn.id)
        protocol.send(host, matched)
        protocol.send(client, matched)

        protocol.send(host, protocol.host_start_message())
        protocol.send(client, protocol.info_message(INFO_WAITING_FOR_HOST))

        return room_id

    def get(self, room_id: Optional[str]) -> Optional[Room]:
        if room_id is None:
            return None
        return self.rooms.get(room_id)

    def room_for(self, handle: Channel) -> Optional[Room]:
        """Get the live room a handle belongs to, if any."""
        connection = self.registry.lookup(handle)
        if connection is None:
            return None
        room = self.get(connection.room_id)
        if room is None or room.role_of(handle) is None:
            return None
        return room

    def role_of(self, handle: Channel) -> Optional[Role]:
        room = self.room_for(handle)
        return room.role_of(handle) if room else None

    def relay(self, handle: Channel, message: RelayMessage) -> bool:
        """
        Forward ``message`` to the other room member if the sender's role allows it.

        Returns:
            True if the message was delivered
        """
        room = self.room_for(handle)
        if room is None:
            self.logger.debug(f"Dropping {message.type}: sender is not in a room")
            return False

        role = room.role_of(handle)
        if message.type == WS_MSG_INPUT:
            allowed = role is Role.CLIENT
        elif message.type in HOST_MESSAGE_TYPES:
            allowed = role is Role.HOST
        else:
            allowed = False

        if not allowed:
            self.logger.debug(
                f"Dropping {message.type} from {role.value} in room {room.id}"
            )
            return False

        return protocol.send(room.other(handle), protocol.relay_message(message))

    def teardown(self, handle: Channel) -> Optional[str]:
        """
        Dissolve the room ``handle`` belongs to, closing the surviving member.

        Returns:
            The id of the removed room, or None if there was nothing to remove
        """
        room = self.room_for(handle)
        if room is None:
            return None

        other = room.other(handle)
        del self.rooms[room.id]

        protocol.send(other, protocol.info_message(INFO_OPPONENT_DISCONNECTED))
        if other.is_open:
            other.close()

        self.logger.info(f"Room {room.id} closed")
        return room.id

    def __len__(self) -> int:
        return len(self.rooms)
