"""
Unit tests for the wire protocol decode boundary.
"""

import json

import pytest

from tank_relay.core.protocol import (
    JoinRequest,
    RelayMessage,
    Unrecognized,
    coerce_name,
    coerce_tier,
    decode_message,
    encode_message,
    send,
)


class TestDecodeMessage:
    """Test cases for decode_message."""

    @pytest.mark.unit
    def test_join_with_fields(self):
        message = decode_message('{"type": "join", "tier": 3, "tankName": "Abrams"}')
        assert message == JoinRequest(tier=3, tank_name="Abrams")

    @pytest.mark.unit
    def test_join_defaults(self):
        assert decode_message('{"type": "join"}') == JoinRequest(tier=1, tank_name="Tank")

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", ["input", "init", "snapshot"])
    def test_relay_kinds(self, kind):
        message = decode_message(json.dumps({"type": kind, "payload": {"x": 1}}))
        assert message == RelayMessage(type=kind, payload={"x": 1})

    @pytest.mark.unit
    def test_missing_payload_becomes_empty_object(self):
        assert decode_message('{"type": "input"}') == RelayMessage(type="input", payload={})

    @pytest.mark.unit
    def test_bytes_payload(self):
        message = decode_message(b'{"type": "snapshot", "payload": {"t": 2}}')
        assert message == RelayMessage(type="snapshot", payload={"t": 2})

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "",
            "[1, 2]",
            "42",
            '{"tier": 1}',
            '{"type": 5}',
            '{"type": "welcome", "id": "abc"}',
            '{"type": "hostStart"}',
            b"\xff\xfe",
            "[" * 100000 + "]" * 100000,
        ],
    )
    def test_unrecognized(self, raw):
        assert isinstance(decode_message(raw), Unrecognized)


class TestCoercion:
    """Test cases for the permissive join field coercion."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, 1),
            (0, 1),
            ("", 1),
            (False, 1),
            (True, 1),
            (2, 2),
            ("4", 4),
            (2.9, 2),
            ("abc", 1),
            ({"a": 1}, 1),
            (float("nan"), 1),
            ("inf", 1),
            (int("9" * 400), 1),
        ],
    )
    def test_coerce_tier(self, value, expected):
        assert coerce_tier(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [(None, "Tank"), ("", "Tank"), (0, "Tank"), ("Tiger", "Tiger"), (7, "7")],
    )
    def test_coerce_name(self, value, expected):
        assert coerce_name(value) == expected


class TestSend:
    """Test cases for send and encode_message."""

    @pytest.mark.unit
    def test_send_to_open_channel(self, make_channel):
        channel = make_channel()
        assert send(channel, {"type": "info", "text": "hi"}) is True
        assert channel.sent == [{"type": "info", "text": "hi"}]

    @pytest.mark.unit
    def test_send_to_closed_channel_is_skipped(self, make_channel):
        channel = make_channel()
        channel.open = False
        assert send(channel, {"type": "info", "text": "hi"}) is False
        assert channel.sent == []

    @pytest.mark.unit
    def test_send_to_none(self):
        assert send(None, {"type": "info"}) is False

    @pytest.mark.unit
    def test_encode_keeps_unicode(self):
        assert "…" in encode_message({"text": "Waiting…"})
