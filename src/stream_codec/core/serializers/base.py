"""Base serializer wrapping a pydantic TypeAdapter"""

from typing import Any, Generic, TypeVar

from pydantic import ConfigDict, TypeAdapter

T = TypeVar("T")


def type_name(type_: Any) -> str:
    """Readable name of a type expression for messages and logs"""
    name = getattr(type_, "__name__", None)
    if name and not getattr(type_, "__args__", None):
        return name
    return repr(type_).replace("typing.", "")


class Serializer(Generic[T]):
    """Serialization strategy for one type

    ``type_`` is the type expression the adapter was built for; it is kept so
    the serializer can be lifted into a "sequence of T" serializer.
    """

    def __init__(self, type_: Any, config: ConfigDict | None = None) -> None:
        self.type_ = type_
        self.config = config
        self.adapter: TypeAdapter[T] = TypeAdapter(type_, config=config)
        # forward references pydantic could not resolve leave the adapter deferred
        if not self.adapter.pydantic_complete:
            self.adapter.rebuild(raise_errors=True)

    def dump_python(self, value: T, *, mode: str = "json", **kwargs: Any) -> Any:
        """Dump to python builtins (JSON-compatible when mode is 'json')"""
        return self.adapter.dump_python(value, mode=mode, **kwargs)

    def dump_json(self, value: T, **kwargs: Any) -> bytes:
        """Dump to UTF-8 encoded JSON"""
        return self.adapter.dump_json(value, **kwargs)

    def list_serializer(self) -> "Serializer[list[T]]":
        """Serializer for an ordered sequence of T"""
        return Serializer(list[self.type_], config=self.config)  # type: ignore[name-defined]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({type_name(self.type_)})"
