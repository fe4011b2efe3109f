"""
WebSocket server for tank battle matchmaking and relay.

The server owns the sockets and hands every connection event to a
SessionRouter. Plain HTTP requests on the same port are answered by
StaticFileHandler.
"""

import asyncio
from typing import Optional, Set

from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.exceptions import ConnectionClosed

from ...config import RelayConfig, config_manager
from ...core import SessionRouter
from ...infrastructure import WebSocketError, get_logger, setup_logging
from .channel import WebSocketChannel
from .static_files import StaticFileHandler
from .utils import ConnectionUtils

logger = get_logger(__name__)


class MatchRelayServer:
    """WebSocket server pairing players by tier and relaying their messages."""

    def __init__(
        self,
        config: Optional[RelayConfig] = None,
        router: Optional[SessionRouter] = None,
    ) -> None:
        """Initialize the match relay server."""
        self.config = config or RelayConfig()
        self.host = self.config.host
        self.port = self.config.port
        self.server: Optional[Server] = None

        self.router = router or SessionRouter()
        self.static_files = StaticFileHandler(self.config.public_dir, logger)
        self.channels: Set[WebSocketChannel] = set()
        self._connection_semaphore = asyncio.Semaphore(self.config.max_connections)
        self._health_task: Optional[asyncio.Task] = None

    async def start(self) -> bool:
        """Start the match relay server."""
        try:
            self.server = await serve(
                self._handle_connection,
                self.host,
                self.port,
                process_request=self.static_files,
                ping_interval=None,  # Manual ping handling
                max_size=self.config.max_message_size,
                compression=None,
            )
        except OSError as e:
            logger.error(f"Failed to start match relay server: {e}", exc_info=True)
            return False

        # Port 0 binds an ephemeral port
        self.port = list(self.server.sockets)[0].getsockname()[1]
        logger.info(f"Web + WebSocket server listening on port {self.port}")

        self._health_task = asyncio.create_task(
            ConnectionUtils.health_monitor(
                self.channels, self.config.ping_interval, logger
            )
        )
        return True

    async def stop(self) -> None:
        """Stop the match relay server."""
        if self.server:
            self.server.close()
            await self.server.wait_closed()
            self.server = None
            logger.info("Match relay server stopped")

        if self._health_task:
            self._health_task.cancel()
            try:
                await self._health_task
            except asyncio.CancelledError:
                pass
            self._health_task = None

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        """Handle incoming WebSocket connections."""
        client_address = websocket.remote_address

        async with self._connection_semaphore:
            channel = WebSocketChannel(websocket, logger)
            self.channels.add(channel)
            connection_id = self.router.on_connect(channel)
            logger.info(f"New connection {connection_id} from {client_address}")

            try:
                async for message in websocket:
                    self.router.on_message(channel, message)
            except ConnectionClosed:
                logger.info(f"Connection closed: {client_address}")
            except Exception as e:
                logger.error(
                    f"Error handling connection from {client_address}: {e}",
                    exc_info=True,
                )
            finally:
                self.router.on_close(channel)
                self.channels.discard(channel)
                await channel.finish()

    def get_stats(self) -> dict:
        """Get server statistics."""
        return {
            "server_running": self.server is not None,
            "router_stats": self.router.get_stats(),
        }


async def main(config: Optional[RelayConfig] = None) -> None:
    """Run the match relay server."""
    config = config or config_manager.get_config()
    setup_logging("tank_relay", log_level=config.log_level, log_file=config.log_file)

    server = MatchRelayServer(config)
    try:
        if not await server.start():
            raise WebSocketError(f"Could not bind {config.host}:{config.port}")
        logger.info("Match relay server running. Press Ctrl+C to stop.")
        await asyncio.Future()  # Run forever
    finally:
        await server.stop()


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down match relay server...")


if __name__ == "__main__":
    run()
