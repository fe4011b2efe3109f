#!/usr/bin/env python3
"""
Match Relay Server for Tank Relay.

This script starts the WebSocket server that pairs players by tier and
relays game messages between them.
"""

import sys

from tank_relay.websockets.server.relay_server import run


if __name__ == "__main__":
    try:
        run()
    except Exception as e:
        print(f"Fatal error: {e}")
        sys.exit(1)
