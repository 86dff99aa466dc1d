"""
Тесты модели сообщения и wire-контракта (UTF-8, text/plain).
"""

import pytest
from pydantic import ValidationError

from relay.messaging.models import WIRE_CONTENT_TYPE, WIRE_ENCODING, Message
from relay.shared.exceptions import InvalidMessageError


class TestMessageBuild:
    def test_build_keeps_payload_verbatim(self):
        msg = Message.build("  hello  ")

        assert msg.payload == "  hello  "

    def test_build_rejects_empty_payload(self):
        with pytest.raises(InvalidMessageError) as exc_info:
            Message.build("")

        assert isinstance(exc_info.value.original_error, ValidationError)
        assert exc_info.value.details["errors"]

    def test_build_rejects_non_string_payload(self):
        with pytest.raises(InvalidMessageError):
            Message.build(123)

    def test_build_rejects_none(self):
        with pytest.raises(InvalidMessageError):
            Message.build(None)

    def test_message_is_immutable(self):
        msg = Message.build("hello")

        with pytest.raises(ValidationError):
            msg.payload = "changed"

    def test_equal_payloads_are_equal_messages(self):
        assert Message.build("a") == Message(payload="a")


class TestWireContract:
    def test_wire_constants(self):
        assert WIRE_CONTENT_TYPE == "text/plain"
        assert WIRE_ENCODING == "utf-8"

    def test_encode_is_plain_utf8(self):
        assert Message.build("hello").encode() == b"hello"
        assert Message.build("привет ✓").encode() == "привет ✓".encode("utf-8")

    def test_decode_round_trip_unmodified(self):
        for payload in ["hello", "test123", "привет мир", "[bold]x[/bold]", '{"a": 1}', "42"]:
            assert Message.decode(Message.build(payload).encode()).payload == payload

    def test_decode_invalid_utf8(self):
        with pytest.raises(InvalidMessageError) as exc_info:
            Message.decode(b"\xff\xfe\xfa")

        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)
        assert exc_info.value.details == {"size": 3}

    def test_decode_empty_body(self):
        with pytest.raises(InvalidMessageError):
            Message.decode(b"")
