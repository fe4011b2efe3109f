"""
Pytest configuration and shared fixtures for the Tank Relay test suite.

This module provides common fixtures and configuration for all tests.
"""

import json

import pytest

from tank_relay.config.settings import RelayConfig
from tank_relay.core import ConnectionRegistry, RoomManager, SessionRouter, TierQueue


class FakeChannel:
    """In-memory channel recording everything the core sends to it."""

    def __init__(self, name: str = "channel"):
        self.name = name
        self.open = True
        self.closed_by_server = False
        self.sent = []

    @property
    def is_open(self) -> bool:
        return self.open

    def send(self, text: str) -> None:
        self.sent.append(json.loads(text))

    def close(self) -> None:
        self.open = False
        self.closed_by_server = True

    def types(self):
        return [message["type"] for message in self.sent]

    def last(self):
        return self.sent[-1] if self.sent else None

    def clear(self):
        self.sent.clear()

    def __repr__(self):
        return f"FakeChannel({self.name!r})"


@pytest.fixture
def make_channel():
    """Factory for fake channels."""

    def _make(name: str = "channel") -> FakeChannel:
        return FakeChannel(name)

    return _make


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def room_manager(registry):
    return RoomManager(registry)


@pytest.fixture
def tier_queue(registry, room_manager):
    return TierQueue(registry, room_manager)


@pytest.fixture
def router():
    return SessionRouter()


@pytest.fixture
def matched_pair(router, make_channel):
    """Two connections joined on tier 1: returns (host, client), sent logs cleared."""
    host = make_channel("host")
    client = make_channel("client")
    router.on_connect(host)
    router.on_connect(client)
    router.on_message(host, json.dumps({"type": "join", "tier": 1, "tankName": "X"}))
    router.on_message(client, json.dumps({"type": "join", "tier": 1, "tankName": "Y"}))
    host.clear()
    client.clear()
    return host, client


@pytest.fixture
def relay_config(tmp_path):
    """Configuration for a server on an ephemeral local port."""
    public_dir = tmp_path / "public"
    public_dir.mkdir()
    return RelayConfig(
        host="127.0.0.1",
        port=0,
        public_dir=str(public_dir),
        ping_interval=30,
        max_connections=10,
    )


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
