"""
Integration tests against a live MatchRelayServer on an ephemeral port.
"""

import asyncio
import json

import pytest
import pytest_asyncio
from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed

from tank_relay.core.types import (
    INFO_OPPONENT_DISCONNECTED,
    INFO_SEARCHING,
    INFO_WAITING_FOR_HOST,
)
from tank_relay.websockets.server import MatchRelayServer

TIMEOUT = 2.0


@pytest_asyncio.fixture
async def server(relay_config):
    server = MatchRelayServer(relay_config)
    assert await server.start()
    yield server
    await server.stop()


@pytest.fixture
def uri(server):
    return f"ws://127.0.0.1:{server.port}/"


async def receive(websocket):
    return json.loads(await asyncio.wait_for(websocket.recv(), TIMEOUT))


async def http_get(port, path):
    reader, writer = await asyncio.open_connection("127.0.0.1", port)
    writer.write(f"GET {path} HTTP/1.1\r\nHost: localhost\r\n\r\n".encode())
    await writer.drain()
    data = await asyncio.wait_for(reader.read(), TIMEOUT)
    writer.close()
    head, _, body = data.partition(b"\r\n\r\n")
    status = int(head.split(b" ")[1])
    return status, body


class TestMatchRelayServer:
    """End-to-end tests over real WebSocket connections."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_match_relay_and_disconnect(self, uri, server):
        async with connect(uri) as a, connect(uri) as b:
            welcome_a = await receive(a)
            assert welcome_a["type"] == "welcome"

            await a.send(json.dumps({"type": "join", "tier": 1, "tankName": "X"}))
            assert await receive(a) == {"type": "info", "text": INFO_SEARCHING}

            welcome_b = await receive(b)
            await b.send(json.dumps({"type": "join", "tier": 1, "tankName": "Y"}))

            matched_a = await receive(a)
            assert matched_a["type"] == "matched"
            assert matched_a["hostId"] == welcome_a["id"]
            assert matched_a["peerId"] == welcome_b["id"]
            assert await receive(a) == {"type": "hostStart"}

            matched_b = await receive(b)
            assert matched_b == matched_a
            assert await receive(b) == {"type": "info", "text": INFO_WAITING_FOR_HOST}

            await a.send(json.dumps({"type": "init", "payload": {"x": 1}}))
            assert await receive(b) == {"type": "init", "payload": {"x": 1}}

            await b.send(json.dumps({"type": "input", "payload": {"fire": True}}))
            assert await receive(a) == {"type": "input", "payload": {"fire": True}}

            assert server.get_stats()["router_stats"]["rooms"] == 1

            await a.close()
            assert await receive(b) == {"type": "info", "text": INFO_OPPONENT_DISCONNECTED}
            with pytest.raises(ConnectionClosed):
                await asyncio.wait_for(b.recv(), TIMEOUT)

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_malformed_messages_keep_connection_alive(self, uri):
        async with connect(uri) as a:
            await receive(a)
            await a.send("not json")
            await a.send(json.dumps({"type": "teleport"}))
            await a.send(json.dumps({"type": "join"}))
            assert await receive(a) == {"type": "info", "text": INFO_SEARCHING}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_cleanup_after_disconnect(self, uri, server):
        async with connect(uri) as a:
            await receive(a)
            await a.send(json.dumps({"type": "join", "tier": 5}))
            await receive(a)

        for _ in range(50):
            if server.get_stats()["router_stats"]["connections"] == 0:
                break
            await asyncio.sleep(0.02)

        assert server.get_stats()["router_stats"] == {
            "connections": 0,
            "waiting": 0,
            "rooms": 0,
        }
        assert server.channels == set()

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_healthz_and_index(self, server, relay_config):
        from pathlib import Path

        Path(relay_config.public_dir, "index.html").write_text("<title>Tanks</title>")

        assert await http_get(server.port, "/healthz") == (200, b"ok")
        assert await http_get(server.port, "/") == (200, b"<title>Tanks</title>")
        status, _ = await http_get(server.port, "/nothing.css")
        assert status == 404
