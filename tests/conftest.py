"""Global pytest configuration and fixtures

Shared fixtures available to all tests across the test suite.
"""

import pytest

from stream_codec.core.buffers import DefaultDataBufferFactory
from stream_codec.core.mime import APPLICATION_MSGPACK
from stream_codec.core.serializers import JsonFormat, MsgPackFormat, SerializersModule
from stream_codec.encoder import EncoderConfig, SerializationEncoder, default_json_encoder


@pytest.fixture
def buffer_factory():
    """Fixture providing an in-memory buffer factory"""
    return DefaultDataBufferFactory()


@pytest.fixture
def json_encoder():
    """Fixture providing the default JSON encoder"""
    return default_json_encoder()


@pytest.fixture
def serializers_module():
    """Fixture providing an isolated serializers module"""
    return SerializersModule()


@pytest.fixture
def msgpack_encoder(serializers_module):
    """Fixture providing a MessagePack encoder without streaming types"""
    return SerializationEncoder(
        MsgPackFormat(serializers_module),
        EncoderConfig(supported_mime_types=(APPLICATION_MSGPACK,)),
    )


@pytest.fixture
def pretty_json_encoder(serializers_module):
    """Fixture providing a pretty-printing JSON encoder"""
    return SerializationEncoder(
        JsonFormat(serializers_module, pretty_print=True),
        EncoderConfig(supported_mime_types=("application/json",)),
    )
