"""
Channel adapter between the relay core and a WebSocket connection.

The core sends synchronously and never waits on the network, so each
channel keeps an outbound queue drained in order by its own writer task.
"""

import asyncio
import logging
from typing import Optional

from websockets.asyncio.server import ServerConnection
from websockets.exceptions import ConnectionClosed
from websockets.protocol import State


class WebSocketChannel:
    """Fire-and-forget outbound side of one WebSocket connection."""

    def __init__(self, websocket: ServerConnection, logger: logging.Logger) -> None:
        self.websocket = websocket
        self.logger = logger

        # None marks a server-side close after everything queued before it
        self._outbox: "asyncio.Queue[Optional[str]]" = asyncio.Queue()
        self._closing = False
        self._writer: asyncio.Task[None] = asyncio.create_task(self._drain())

    @property
    def is_open(self) -> bool:
        return not self._closing and self.websocket.state is State.OPEN

    def send(self, text: str) -> None:
        """Queue ``text`` for delivery; dropped if the channel is not open."""
        if not self.is_open:
            return
        self._outbox.put_nowait(text)

    def close(self) -> None:
        """Close the connection once the messages queued so far are sent."""
        if self._closing:
            return
        self._closing = True
        self._outbox.put_nowait(None)

    async def ping(self) -> None:
        if self.websocket.state is State.OPEN:
            await self.websocket.ping()

    async def _drain(self) -> None:
        while True:
            text = await self._outbox.get()
            if text is None:
                await self.websocket.close()
                return
            try:
                await self.websocket.send(text)
            except ConnectionClosed:
                return
            except Exception as e:
                self.logger.error(
                    f"Error sending to {self.websocket.remote_address}: {e}"
                )
                return

    async def finish(self) -> None:
        """Stop the writer, letting a pending server-side close complete."""
        if self._closing:
            await self._writer
            return

        self._writer.cancel()
        try:
            await self._writer
        except asyncio.CancelledError:
            pass
