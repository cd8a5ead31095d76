"""Encoder interface used by response writers"""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from typing import Any

from .buffers import DataBuffer, DataBufferFactory
from .mime import MimeType


class Encoder(ABC):
    """Base class for encoders turning values into DataBuffers

    Subclasses declare the mime types they can write; ``can_encode`` here
    only checks the mime type and is meant to be extended with a type check.
    """

    def __init__(self, *encodable_mime_types: MimeType | str) -> None:
        self.encodable_mime_types: tuple[MimeType, ...] = tuple(
            MimeType.of(mime_type) for mime_type in encodable_mime_types
        )
        self.logger = logging.getLogger(f"{type(self).__module__}.{type(self).__name__}")

    def get_encodable_mime_types(self, element_type: Any = None) -> tuple[MimeType, ...]:
        return self.encodable_mime_types

    def can_encode(self, element_type: Any, mime_type: MimeType | None = None) -> bool:
        """True when no mime type is given or it matches an encodable one"""
        if mime_type is None:
            return True
        return any(candidate.is_compatible_with(mime_type) for candidate in self.encodable_mime_types)

    @abstractmethod
    def encode(
        self,
        input_stream: Any,
        buffer_factory: DataBufferFactory,
        element_type: Any,
        mime_type: MimeType | None = None,
        hints: Mapping[str, Any] | None = None,
    ) -> AsyncIterator[DataBuffer]:
        """Encode a stream of values into a stream of buffers"""
        pass

    @abstractmethod
    def encode_value(
        self,
        value: Any,
        buffer_factory: DataBufferFactory,
        value_type: Any,
        mime_type: MimeType | None = None,
        hints: Mapping[str, Any] | None = None,
    ) -> DataBuffer:
        """Encode a single value into one buffer"""
        pass
