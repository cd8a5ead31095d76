"""Pydantic-backed response encoder for Starlette/FastAPI with NDJSON streaming"""

from .core.buffers import DataBuffer, DataBufferFactory, DefaultDataBufferFactory, default_buffer_factory
from .core.mime import APPLICATION_JSON, APPLICATION_NDJSON, APPLICATION_STREAM_JSON, MimeType
from .core.serializers import JsonFormat, MsgPackFormat, Serializer, SerializersModule
from .encoder import EncoderConfig, SerializationEncoder, as_encoder, default_json_encoder
from .errors import CodecError, EncodingNotSupportedError, SerializationError
from .responses import EncoderResponseWriter

__version__ = "0.1.0"

__all__ = [
    "APPLICATION_JSON",
    "APPLICATION_NDJSON",
    "APPLICATION_STREAM_JSON",
    "CodecError",
    "DataBuffer",
    "DataBufferFactory",
    "DefaultDataBufferFactory",
    "EncoderConfig",
    "EncoderResponseWriter",
    "EncodingNotSupportedError",
    "JsonFormat",
    "MimeType",
    "MsgPackFormat",
    "SerializationEncoder",
    "SerializationError",
    "Serializer",
    "SerializersModule",
    "as_encoder",
    "default_buffer_factory",
    "default_json_encoder",
]
