"""Type to serializer resolution"""

import datetime
import decimal
import types
import uuid
from collections.abc import Callable
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from pydantic import ConfigDict, PlainSerializer
from pydantic.errors import PydanticUndefinedAnnotation, PydanticUserError

from ...errors import SerializationError
from .base import Serializer, type_name

_PRIMITIVES: frozenset[Any] = frozenset(
    {
        str,
        int,
        float,
        bool,
        bytes,
        type(None),
        None,
        decimal.Decimal,
        uuid.UUID,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
    }
)

_UNION_ORIGINS = (Union, types.UnionType)


class SerializersModule:
    """Resolves serializers for type expressions

    Lookup order:
    - exact types registered with ``contextual()``
    - generic shapes (``list[X]``, ``dict[K, V]``, ``X | None``, ``Annotated[X, ...]``)
      whose arguments resolve, with contextual types substituted inside
    - implicit pydantic resolution (models, dataclasses, TypedDicts, ...)

    With ``implicit=False`` the module behaves as an explicit registry: only
    primitives, types added with ``register()`` or ``contextual()`` and generic
    shapes built from them resolve.
    """

    def __init__(self, *, implicit: bool = True, cache: bool = True) -> None:
        self.implicit = implicit
        self._cache_enabled = cache
        self._registered: set[Any] = set()
        self._contextual: dict[Any, Any] = {}
        self._cache: dict[Any, Serializer[Any]] = {}

    def register(self, *types_: Any) -> "SerializersModule":
        """Add types to the explicit registry"""
        self._registered.update(types_)
        self._cache.clear()
        return self

    def contextual(self, type_: Any, serialize: Callable[[Any], Any]) -> "SerializersModule":
        """Register a custom serialize function for a type pydantic cannot handle"""
        self._contextual[type_] = Annotated[type_, PlainSerializer(serialize)]
        self._cache.clear()
        return self

    def is_registered(self, type_: Any) -> bool:
        return type_ in self._registered or type_ in self._contextual

    def serializer(self, element_type: Any) -> Serializer[Any]:
        """Resolve the serializer for a type expression

        Args:
            element_type: Class, generic alias (``list[Item]``, ``Item | None``),
                ``Annotated`` form or forward reference string

        Returns:
            A fully built Serializer; successful lookups are cached

        Raises:
            SerializationError: The type is not registered (explicit mode), pydantic
                cannot generate a schema for it, or it references an undefined name
        """
        cache_key = self._cache_key(element_type)
        if cache_key is not None and cache_key in self._cache:
            return self._cache[cache_key]

        if not self.implicit:
            self._check_registered(element_type, element_type)

        resolved, uses_contextual = self._substitute(element_type)
        config = ConfigDict(arbitrary_types_allowed=True) if uses_contextual else None
        try:
            serializer: Serializer[Any] = Serializer(resolved, config=config)
        except (PydanticUserError, PydanticUndefinedAnnotation, TypeError) as e:
            raise SerializationError(
                f"Serializer for type {type_name(element_type)} is not found: {e}",
                type_name(element_type),
                e,
            ) from e

        if cache_key is not None:
            self._cache[cache_key] = serializer
        return serializer

    def _cache_key(self, element_type: Any) -> Any:
        if not self._cache_enabled:
            return None
        try:
            hash(element_type)
        except TypeError:
            return None
        return element_type

    def _substitute(self, type_: Any) -> tuple[Any, bool]:
        """Replace contextual types inside generic shapes with their annotated form"""
        try:
            if type_ in self._contextual:
                return self._contextual[type_], True
        except TypeError:
            return type_, False

        origin = get_origin(type_)
        args = get_args(type_)
        if origin is None or not args:
            return type_, False
        if origin is Literal:
            return type_, False

        if origin is Annotated:
            inner, inner_contextual = self._substitute(args[0])
            if not inner_contextual:
                return type_, False
            return Annotated[(inner, *args[1:])], True

        substituted = [self._substitute(arg) for arg in args]
        if not any(flag for _, flag in substituted):
            return type_, False
        new_args = tuple(arg for arg, _ in substituted)
        if origin in _UNION_ORIGINS:
            return Union[new_args], True
        return origin[new_args], True

    def _check_registered(self, type_: Any, root: Any) -> None:
        if type_ is Ellipsis or type_ in _PRIMITIVES or self.is_registered(type_):
            return

        origin = get_origin(type_)
        args = get_args(type_)
        if origin is Literal:
            return
        if origin is Annotated:
            self._check_registered(args[0], root)
            return
        if origin is not None and args:
            for arg in args:
                self._check_registered(arg, root)
            return

        message = f"Serializer for type {type_name(type_)} is not found"
        if type_ is not root:
            message += f" (while resolving {type_name(root)})"
        raise SerializationError(
            message + ". Register it with the serializers module or enable implicit resolution.",
            type_name(type_),
        )


# Used by formats constructed without an explicit module
default_serializers_module = SerializersModule()

__all__ = ["SerializersModule", "default_serializers_module"]
