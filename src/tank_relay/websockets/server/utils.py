"""
Utility functions for connection management.

This module provides background helpers for the relay server.
"""

import asyncio
import logging
from typing import Iterable

from .channel import WebSocketChannel


class ConnectionUtils:
    """Utility functions for connection management."""

    @staticmethod
    async def health_monitor(
        channels: Iterable[WebSocketChannel],
        ping_interval: int,
        logger: logging.Logger,
    ) -> None:
        """Send keep-alive pings to every live channel."""
        while True:
            await asyncio.sleep(ping_interval)

            for channel in list(channels):
                try:
                    await channel.ping()
                except Exception as e:
                    logger.debug(f"Ping failed: {e}")
