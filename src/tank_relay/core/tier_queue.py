"""
Tier-based matchmaking for the Tank Relay server.

Each tier has a single waiting slot. The first connection to join a tier
waits there; the next one to join the same tier is paired with it, the
waiter becoming host and the joiner becoming client.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from . import protocol
from .connection_registry import ConnectionRegistry
from .protocol import Channel
from .room_manager import RoomManager
from .types import DEFAULT_TANK_NAME, DEFAULT_TIER, INFO_SEARCHING, Role


@dataclass(frozen=True)
class JoinOutcome:
    """Result of a join request: either matched into a room or waiting."""

    matched: bool
    room_id: Optional[str] = None
    role: Optional[Role] = None

    @classmethod
    def waiting(cls) -> "JoinOutcome":
        return cls(matched=False)


class TierQueue:
    """Map of tier -> the single connection waiting on it."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        rooms: RoomManager,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.rooms = rooms
        self.logger = logger or logging.getLogger(__name__)

        # Map tier -> waiting handle
        self.waiting: Dict[int, Channel] = {}

    def join(
        self,
        handle: Channel,
        tier: int = DEFAULT_TIER,
        name: str = DEFAULT_TANK_NAME,
    ) -> JoinOutcome:
        """Pair ``handle`` with the waiter on ``tier`` or make it the waiter."""
        connection = self.registry.lookup(handle)
        if connection is None:
            return JoinOutcome.waiting()

        # Leaving a slot on another tier keeps one queue entry per connection
        if connection.tier is not None and connection.tier != tier:
            self.dequeue(handle)

        connection.tier = tier
        connection.tank_name = name

        waiting = self.waiting.get(tier)
        if waiting is not None and waiting is not handle and waiting in self.registry:
            del self.waiting[tier]
            room_id = self.rooms.create_room(waiting, handle, tier)
            return JoinOutcome(matched=True, room_id=room_id, role=Role.CLIENT)

        self.waiting[tier] = handle
        self.logger.info(f"Connection {connection.id} ({name}) waiting on tier {tier}")
        protocol.send(handle, protocol.info_message(INFO_SEARCHING))
        return JoinOutcome.waiting()

    def dequeue(self, handle: Channel) -> bool:
        """Remove ``handle`` from the slot of its recorded tier, if it holds it."""
        connection = self.registry.lookup(handle)
        if connection is None or connection.tier is None:
            return False

        if self.waiting.get(connection.tier) is handle:
            del self.waiting[connection.tier]
            return True
        return False

    def waiting_for(self, tier: int) -> Optional[Channel]:
        return self.waiting.get(tier)

    def __len__(self) -> int:
        return len(self.waiting)
