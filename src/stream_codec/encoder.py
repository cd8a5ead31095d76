"""Encoder writing pydantic-serializable values as JSON or MessagePack

A ``SerializationEncoder`` turns the values produced by a handler into
DataBuffers for the response writer. The shape of the input decides the
output:

- an awaitable (or a plain value) is one value and produces one buffer
- an async iterable / list / iterator sent with a streaming mime type
  (``application/stream+json``) produces one buffer per element, each
  followed by the configured separator, as elements arrive
- the same input with any other mime type is collected first and encoded
  as a single array
- a list / tuple / set is one value when the element type is itself a
  collection (``list[Item]``)

Usage:
    encoder = default_json_encoder()
    async for buffer in encoder.encode(items(), default_buffer_factory, Item, APPLICATION_STREAM_JSON):
        ...
"""

import inspect
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Collection, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Annotated, Any, TypeVar, get_args, get_origin

from .core.buffers import DataBuffer, DataBufferFactory
from .core.codec import Encoder
from .core.hints import get_log_prefix, is_logging_suppressed
from .core.log_format import format_value, trace_debug
from .core.mime import (
    APPLICATION_JSON,
    APPLICATION_JSON_SUFFIX,
    APPLICATION_STREAM_JSON,
    MimeType,
    parse_mime_types,
)
from .core.serializers import BinaryFormat, JsonFormat, Serializer, StringFormat
from .core.serializers.base import type_name
from .errors import SerializationError

T = TypeVar("T")

NEWLINE_SEPARATOR = b"\n"

DEFAULT_JSON_MIME_TYPES: tuple[MimeType, ...] = (APPLICATION_JSON, APPLICATION_JSON_SUFFIX)
DEFAULT_JSON_STREAMING_MEDIA_TYPES: tuple[MimeType, ...] = (APPLICATION_STREAM_JSON,)
STREAM_SEPARATORS: Mapping[MimeType, bytes] = MappingProxyType({APPLICATION_STREAM_JSON: NEWLINE_SEPARATOR})


def _resolve(format: StringFormat | BinaryFormat, element_type: Any) -> Serializer[Any]:
    return format.serializers_module.serializer(element_type)


@dataclass(frozen=True)
class FromString:
    """Encodes through a string format, then to UTF-8 bytes"""

    format: StringFormat

    def get_serializer(self, element_type: Any) -> Serializer[Any]:
        return _resolve(self.format, element_type)

    def encode_value(self, serializer: Serializer[T], value: T) -> bytes:
        return self.format.encode_to_string(serializer, value).encode("utf-8")


@dataclass(frozen=True)
class FromBytes:
    """Encodes through a binary format"""

    format: BinaryFormat

    def get_serializer(self, element_type: Any) -> Serializer[Any]:
        return _resolve(self.format, element_type)

    def encode_value(self, serializer: Serializer[T], value: T) -> bytes:
        return self.format.encode_to_bytes(serializer, value)


ValueEncoder = FromString | FromBytes


def value_encoder_for(format: Any) -> ValueEncoder:
    """Pick the value encoder matching the kind of format"""
    if isinstance(format, StringFormat):
        return FromString(format)
    if isinstance(format, BinaryFormat):
        return FromBytes(format)
    raise TypeError(
        f"Unsupported format {type(format).__name__}: expected encode_to_string() or encode_to_bytes() "
        "and a serializers_module"
    )


@dataclass(frozen=True)
class EncoderConfig:
    """Mime type configuration of a SerializationEncoder

    Attributes:
        supported_mime_types: mime types the encoder accepts
        streaming_media_types: mime types for which multi-value input is
            written element by element instead of as one array
        stream_separators: bytes written after each streamed element, per
            streaming type; types missing here use a newline
    """

    supported_mime_types: tuple[MimeType, ...]
    streaming_media_types: tuple[MimeType, ...] = ()
    stream_separators: Mapping[MimeType, bytes] = field(default_factory=lambda: STREAM_SEPARATORS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "supported_mime_types", parse_mime_types(self.supported_mime_types))
        object.__setattr__(self, "streaming_media_types", parse_mime_types(self.streaming_media_types))
        object.__setattr__(
            self,
            "stream_separators",
            MappingProxyType({MimeType.of(k): bytes(v) for k, v in self.stream_separators.items()}),
        )


class SerializationEncoder(Encoder):
    """Encoder for any type the format's serializers module can resolve"""

    def __init__(self, format: StringFormat | BinaryFormat, config: EncoderConfig) -> None:
        super().__init__(*config.supported_mime_types)
        self.format = format
        self.config = config
        self._value_encoder: ValueEncoder = value_encoder_for(format)

    @property
    def streaming_media_types(self) -> tuple[MimeType, ...]:
        return self.config.streaming_media_types

    def can_encode(self, element_type: Any, mime_type: MimeType | str | None = None) -> bool:
        if not super().can_encode(element_type, _to_mime(mime_type)):
            return False
        try:
            self._value_encoder.get_serializer(element_type)
        except SerializationError as e:
            self.logger.debug(f"No serializer found for type {type_name(element_type)}: {e}")
            return False
        return True

    def find_streaming_type(self, mime_type: MimeType | str | None) -> MimeType | None:
        """First configured streaming type compatible with the mime type"""
        mime = _to_mime(mime_type)
        return next((s for s in self.config.streaming_media_types if s.is_compatible_with(mime)), None)

    def is_streaming(self, mime_type: MimeType | str | None) -> bool:
        return self.find_streaming_type(mime_type) is not None

    def stream_separator(self, mime_type: MimeType | str | None) -> bytes | None:
        streaming_type = self.find_streaming_type(mime_type)
        if streaming_type is None:
            return None
        return self.config.stream_separators.get(streaming_type, NEWLINE_SEPARATOR)

    def encode(
        self,
        input_stream: Any,
        buffer_factory: DataBufferFactory,
        element_type: Any,
        mime_type: MimeType | str | None = None,
        hints: Mapping[str, Any] | None = None,
    ) -> AsyncIterator[DataBuffer]:
        """Encode the input into an async iterator of buffers

        The serializer is resolved before anything is consumed, so an
        unresolvable type raises SerializationError right here. An awaitable
        input is only awaited once the returned iterator is consumed; dropping
        the iterator unconsumed leaves the coroutine un-awaited.

        Args:
            input_stream: An awaitable or plain value (one value), or an async
                iterable, iterator, list, tuple or set (many values). A list,
                tuple or set whose element_type is itself a collection type
                (``list[Item]``) is one value.
            buffer_factory: Factory wrapping the encoded bytes
            element_type: Type of each value, used to resolve the serializer
            mime_type: Requested mime type; a streaming type writes many values
                one buffer each, anything else collects them into one array
            hints: Encode hints (log prefix, logging suppression)

        Returns:
            Async iterator of buffers. An awaitable resolving to None yields
            nothing.

        Raises:
            SerializationError: No serializer can be resolved for element_type
        """
        serializer = self._value_encoder.get_serializer(element_type)

        if inspect.isawaitable(input_stream) or not _is_multi_value(input_stream, element_type):
            return self._encode_single(input_stream, buffer_factory, serializer, hints)

        values = _aiter(input_stream)
        separator = self.stream_separator(mime_type)
        if separator is not None:
            return self._encode_streaming(values, buffer_factory, serializer, separator, hints)
        return self._encode_collected(values, buffer_factory, serializer.list_serializer(), hints)

    def encode_value(
        self,
        value: Any,
        buffer_factory: DataBufferFactory,
        value_type: Any,
        mime_type: MimeType | str | None = None,
        hints: Mapping[str, Any] | None = None,
    ) -> DataBuffer:
        serializer = self._value_encoder.get_serializer(value_type)
        return self._wrap_encoded_value(buffer_factory, serializer, value, hints)

    async def _encode_single(
        self,
        producer: Awaitable[Any] | Any,
        buffer_factory: DataBufferFactory,
        serializer: Serializer[Any],
        hints: Mapping[str, Any] | None,
    ) -> AsyncIterator[DataBuffer]:
        if inspect.isawaitable(producer):
            value = await producer
            # an awaitable resolving to None is an empty producer
            if value is None:
                return
        else:
            value = producer
        yield self._wrap_encoded_value(buffer_factory, serializer, value, hints)

    async def _encode_streaming(
        self,
        values: AsyncIterator[Any],
        buffer_factory: DataBufferFactory,
        serializer: Serializer[Any],
        separator: bytes,
        hints: Mapping[str, Any] | None,
    ) -> AsyncIterator[DataBuffer]:
        try:
            async for value in values:
                yield self._wrap_encoded_value(buffer_factory, serializer, value, hints).write(separator)
        finally:
            await _aclose(values)

    async def _encode_collected(
        self,
        values: AsyncIterator[Any],
        buffer_factory: DataBufferFactory,
        list_serializer: Serializer[list[Any]],
        hints: Mapping[str, Any] | None,
    ) -> AsyncIterator[DataBuffer]:
        try:
            collected = [value async for value in values]
        finally:
            await _aclose(values)
        yield self._wrap_encoded_value(buffer_factory, list_serializer, collected, hints)

    def _wrap_encoded_value(
        self,
        buffer_factory: DataBufferFactory,
        serializer: Serializer[T],
        value: T,
        hints: Mapping[str, Any] | None,
    ) -> DataBuffer:
        if not is_logging_suppressed(hints):
            trace_debug(
                self.logger,
                lambda trace_on: f"{get_log_prefix(hints)}Encoding [{format_value(value, not trace_on)}]",
            )
        return buffer_factory.wrap(self._value_encoder.encode_value(serializer, value))

    def __repr__(self) -> str:
        mime_types = ", ".join(str(m) for m in self.encodable_mime_types)
        return f"SerializationEncoder({self.format!r}, [{mime_types}])"


def as_encoder(
    json_format: JsonFormat,
    *supported_mime_types: MimeType | str,
    streaming_media_types: Iterable[MimeType | str] = DEFAULT_JSON_STREAMING_MEDIA_TYPES,
) -> SerializationEncoder:
    """Build an encoder for a JSON format, defaulting to the JSON mime types"""
    config = EncoderConfig(
        supported_mime_types=tuple(supported_mime_types) or DEFAULT_JSON_MIME_TYPES,
        streaming_media_types=tuple(streaming_media_types),
    )
    return SerializationEncoder(json_format, config)


def default_json_encoder() -> SerializationEncoder:
    """JSON encoder for application/json and application/*+json, streaming application/stream+json"""
    return as_encoder(JsonFormat())


def _to_mime(mime_type: MimeType | str | None) -> MimeType | None:
    if mime_type is None:
        return None
    return MimeType.of(mime_type)


def _is_multi_value(value: Any, element_type: Any) -> bool:
    if isinstance(value, (AsyncIterable, Iterator)):
        return True
    if isinstance(value, (list, tuple, set, frozenset)):
        return not _is_collection_type(element_type)
    return False


def _is_collection_type(element_type: Any) -> bool:
    """Whether values of the type are themselves sequences or sets"""
    origin = get_origin(element_type)
    if origin is Annotated:
        return _is_collection_type(get_args(element_type)[0])
    cls = origin or element_type
    if not isinstance(cls, type):
        return False
    return issubclass(cls, Collection) and not issubclass(cls, (str, bytes, bytearray, Mapping))


def _aiter(values: AsyncIterable[Any] | Iterable[Any]) -> AsyncIterator[Any]:
    if isinstance(values, AsyncIterable):
        return aiter(values)
    return _iterate(values)


async def _iterate(values: Iterable[Any]) -> AsyncIterator[Any]:
    for value in values:
        yield value


async def _aclose(values: AsyncIterator[Any]) -> None:
    aclose = getattr(values, "aclose", None)
    if aclose is not None:
        await aclose()
