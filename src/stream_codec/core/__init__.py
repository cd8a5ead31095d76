"""Codec building blocks: mime types, hints, buffers and the encoder interface"""

from .buffers import DataBuffer, DataBufferFactory, DefaultDataBufferFactory, default_buffer_factory
from .codec import Encoder
from .mime import InvalidMimeTypeError, MimeType

__all__ = [
    "DataBuffer",
    "DataBufferFactory",
    "DefaultDataBufferFactory",
    "default_buffer_factory",
    "Encoder",
    "InvalidMimeTypeError",
    "MimeType",
]
