"""
Connection registry for the Tank Relay server.

Owns the per-connection state for every live channel, keyed by the
channel handle handed over by the transport.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .identifiers import new_id
from .protocol import Channel


@dataclass
class Connection:
    """State of one participant's live channel."""

    id: str
    handle: Channel
    tier: Optional[int] = None
    tank_name: Optional[str] = None
    room_id: Optional[str] = None

    @property
    def is_matched(self) -> bool:
        return self.room_id is not None


class ConnectionRegistry:
    """Registry of live connections with O(1) handle lookups."""

    def __init__(self) -> None:
        # Map handle -> Connection
        self.connections: Dict[Channel, Connection] = {}

    def register(self, handle: Channel) -> str:
        """Register a new connection and return its fresh identity."""
        live_ids = {c.id for c in self.connections.values()}
        connection_id = new_id()
        while connection_id in live_ids:
            connection_id = new_id()

        self.connections[handle] = Connection(id=connection_id, handle=handle)
        return connection_id

    def lookup(self, handle: Optional[Channel]) -> Optional[Connection]:
        """Get the connection for a handle, or None if it already closed."""
        if handle is None:
            return None
        return self.connections.get(handle)

    def unregister(self, handle: Channel) -> Optional[Connection]:
        """Remove a connection record and return it."""
        return self.connections.pop(handle, None)

    def __contains__(self, handle: object) -> bool:
        return handle in self.connections

    def __len__(self) -> int:
        return len(self.connections)

    def __iter__(self) -> Iterator[Connection]:
        return iter(list(self.connections.values()))
