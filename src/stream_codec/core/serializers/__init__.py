"""Serialization layer built on pydantic TypeAdapters"""

from ...errors import SerializationError
from .base import Serializer
from .formats import BinaryFormat, JsonFormat, MsgPackFormat, StringFormat
from .module import SerializersModule, default_serializers_module

__all__ = [
    "Serializer",
    "SerializationError",
    "SerializersModule",
    "default_serializers_module",
    "StringFormat",
    "BinaryFormat",
    "JsonFormat",
    "MsgPackFormat",
]
