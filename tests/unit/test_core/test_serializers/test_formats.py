"""Unit tests for JSON and MessagePack formats"""

import json
from datetime import datetime

import msgpack

from stream_codec.core.serializers import (
    BinaryFormat,
    JsonFormat,
    MsgPackFormat,
    SerializersModule,
    StringFormat,
    default_serializers_module,
)
from tests.fixtures.models import Order, X


class TestJsonFormat:
    """Test JsonFormat"""

    def setup_method(self):
        self.module = SerializersModule()

    def test_compact_output(self):
        """Test output has no whitespace by default"""
        fmt = JsonFormat(self.module)

        assert fmt.encode_to_string(self.module.serializer(X), X(x=1)) == '{"x":1}'

    def test_pretty_print(self):
        fmt = JsonFormat(self.module, pretty_print=True)

        assert fmt.encode_to_string(self.module.serializer(X), X(x=1)) == '{\n  "x": 1\n}'

    def test_field_names_by_default(self):
        fmt = JsonFormat(self.module)
        order = Order(orderId=7)

        assert json.loads(fmt.encode_to_string(self.module.serializer(Order), order)) == {
            "order_id": 7,
            "items": [],
            "note": None,
            "created_at": None,
        }

    def test_by_alias(self):
        fmt = JsonFormat(self.module, by_alias=True)
        encoded = json.loads(fmt.encode_to_string(self.module.serializer(Order), Order(orderId=7)))

        assert encoded["orderId"] == 7
        assert "order_id" not in encoded

    def test_exclude_none(self):
        fmt = JsonFormat(self.module, exclude_none=True)

        assert fmt.encode_to_string(self.module.serializer(Order), Order(orderId=7)) == '{"order_id":7,"items":[]}'

    def test_exclude_defaults(self):
        fmt = JsonFormat(self.module, exclude_defaults=True)

        assert fmt.encode_to_string(self.module.serializer(Order), Order(orderId=7)) == '{"order_id":7}'

    def test_non_ascii_text(self):
        """Test non-ASCII characters survive as text"""
        fmt = JsonFormat(self.module)

        assert fmt.encode_to_string(self.module.serializer(str), "größe") == '"größe"'

    def test_default_module(self):
        assert JsonFormat().serializers_module is default_serializers_module

    def test_is_string_format(self):
        assert isinstance(JsonFormat(), StringFormat)
        assert not isinstance(JsonFormat(), BinaryFormat)


class TestMsgPackFormat:
    """Test MsgPackFormat"""

    def setup_method(self):
        self.module = SerializersModule()

    def test_encode_model(self):
        fmt = MsgPackFormat(self.module)
        encoded = fmt.encode_to_bytes(self.module.serializer(X), X(x=1))

        assert msgpack.unpackb(encoded, raw=False) == {"x": 1}

    def test_datetime_becomes_iso_string(self):
        """Test values are dumped in JSON mode before packing"""
        fmt = MsgPackFormat(self.module, exclude_none=True)
        order = Order(orderId=1, created_at=datetime(2024, 5, 1, 12, 0, 0))

        decoded = msgpack.unpackb(fmt.encode_to_bytes(self.module.serializer(Order), order), raw=False)

        assert decoded == {"order_id": 1, "items": [], "created_at": "2024-05-01T12:00:00"}

    def test_by_alias(self):
        fmt = MsgPackFormat(self.module, by_alias=True)
        decoded = msgpack.unpackb(fmt.encode_to_bytes(self.module.serializer(Order), Order(orderId=3)), raw=False)

        assert decoded["orderId"] == 3

    def test_is_binary_format(self):
        assert isinstance(MsgPackFormat(), BinaryFormat)
        assert not isinstance(MsgPackFormat(), StringFormat)
