"""Serialization formats: JSON (string based) and MessagePack (binary)"""

from typing import Any, Protocol, TypeVar, runtime_checkable

import msgpack

from .base import Serializer
from .module import SerializersModule, default_serializers_module

T = TypeVar("T")


@runtime_checkable
class StringFormat(Protocol):
    """Format encoding values to text"""

    serializers_module: SerializersModule

    def encode_to_string(self, serializer: Serializer[T], value: T) -> str: ...


@runtime_checkable
class BinaryFormat(Protocol):
    """Format encoding values directly to bytes"""

    serializers_module: SerializersModule

    def encode_to_bytes(self, serializer: Serializer[T], value: T) -> bytes: ...


class JsonFormat:
    """JSON format backed by pydantic's JSON serializer

    Output is compact (``{"x":1}``) unless ``pretty_print`` is set.
    """

    def __init__(
        self,
        serializers_module: SerializersModule | None = None,
        *,
        pretty_print: bool = False,
        by_alias: bool = False,
        exclude_none: bool = False,
        exclude_defaults: bool = False,
    ) -> None:
        self.serializers_module = serializers_module or default_serializers_module
        self.pretty_print = pretty_print
        self.by_alias = by_alias
        self.exclude_none = exclude_none
        self.exclude_defaults = exclude_defaults

    def encode_to_string(self, serializer: Serializer[T], value: T) -> str:
        encoded = serializer.dump_json(
            value,
            indent=2 if self.pretty_print else None,
            by_alias=self.by_alias,
            exclude_none=self.exclude_none,
            exclude_defaults=self.exclude_defaults,
        )
        return encoded.decode("utf-8")

    def __repr__(self) -> str:
        return f"JsonFormat(pretty_print={self.pretty_print})"


class MsgPackFormat:
    """MessagePack format: pydantic dumps to JSON-compatible data, msgpack packs it"""

    def __init__(
        self,
        serializers_module: SerializersModule | None = None,
        *,
        by_alias: bool = False,
        exclude_none: bool = False,
    ) -> None:
        self.serializers_module = serializers_module or default_serializers_module
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    def encode_to_bytes(self, serializer: Serializer[T], value: T) -> bytes:
        data: Any = serializer.dump_python(
            value, mode="json", by_alias=self.by_alias, exclude_none=self.exclude_none
        )
        return msgpack.packb(data, use_bin_type=True)

    def __repr__(self) -> str:
        return "MsgPackFormat()"
