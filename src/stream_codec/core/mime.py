"""Mime type value object and compatibility rules"""

from dataclasses import dataclass, field
from typing import Any

WILDCARD = "*"


class InvalidMimeTypeError(ValueError):
    """Raised when a mime type string cannot be parsed"""

    def __init__(self, mime_type: str, reason: str):
        super().__init__(f'Invalid mime type "{mime_type}": {reason}')
        self.mime_type = mime_type
        self.reason = reason


@dataclass(frozen=True)
class MimeType:
    """Immutable mime type such as ``application/json`` or ``application/*+json``

    Type and subtype are compared case-insensitively; parameters take part in
    equality but are ignored by ``includes`` and ``is_compatible_with``.
    """

    type: str = WILDCARD
    subtype: str = WILDCARD
    parameters: tuple[tuple[str, str], ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", self.type.strip().lower())
        object.__setattr__(self, "subtype", self.subtype.strip().lower())
        object.__setattr__(
            self,
            "parameters",
            tuple(sorted((k.strip().lower(), v.strip()) for k, v in dict(self.parameters).items())),
        )
        if not self.type or not self.subtype:
            raise InvalidMimeTypeError(f"{self.type}/{self.subtype}", "type and subtype must not be empty")
        if self.type == WILDCARD and self.subtype != WILDCARD:
            raise InvalidMimeTypeError(
                f"{self.type}/{self.subtype}", "wildcard type is legal only in '*/*' (all mime types)"
            )

    @classmethod
    def parse(cls, value: str) -> "MimeType":
        """Parse ``type/subtype;param=value`` into a MimeType"""
        if not value or not value.strip():
            raise InvalidMimeTypeError(value, "'mimeType' must not be empty")

        parts = [part.strip() for part in value.split(";")]
        full_type = parts[0]
        # java.net.HttpURLConnection sends a bare '*'
        if full_type == WILDCARD:
            full_type = "*/*"

        slash = full_type.find("/")
        if slash == -1:
            raise InvalidMimeTypeError(value, "does not contain '/'")
        if slash == len(full_type) - 1:
            raise InvalidMimeTypeError(value, "does not contain subtype after '/'")
        type_, subtype = full_type[:slash], full_type[slash + 1 :]
        if "/" in subtype:
            raise InvalidMimeTypeError(value, "contains more than one '/'")

        parameters: dict[str, str] = {}
        for part in parts[1:]:
            if not part:
                continue
            if "=" not in part:
                raise InvalidMimeTypeError(value, f"parameter '{part}' has no value")
            key, _, raw = part.partition("=")
            parameters[key] = raw.strip().strip('"')

        return cls(type_, subtype, tuple(parameters.items()))

    @classmethod
    def of(cls, value: "MimeType | str") -> "MimeType":
        if isinstance(value, MimeType):
            return value
        return cls.parse(value)

    @property
    def is_wildcard_type(self) -> bool:
        return self.type == WILDCARD

    @property
    def is_wildcard_subtype(self) -> bool:
        return self.subtype == WILDCARD or self.subtype.startswith("*+")

    @property
    def is_concrete(self) -> bool:
        return not self.is_wildcard_type and not self.is_wildcard_subtype

    @property
    def subtype_suffix(self) -> str | None:
        """Suffix after the last '+' of the subtype (``json`` for ``stream+json``)"""
        plus = self.subtype.rfind("+")
        if plus != -1 and plus != len(self.subtype) - 1:
            return self.subtype[plus + 1 :]
        return None

    def get_parameter(self, name: str, default: str | None = None) -> str | None:
        return dict(self.parameters).get(name.lower(), default)

    def includes(self, other: "MimeType | None") -> bool:
        """Whether this mime type includes the other one

        ``text/*`` includes ``text/plain`` but not the other way around.
        """
        if other is None:
            return False
        if self.is_wildcard_type:
            return True
        if self.type != other.type:
            return False
        if self.subtype == other.subtype:
            return True
        if self.is_wildcard_subtype:
            if self.subtype == WILDCARD:
                return True
            # application/*+xml includes application/soap+xml
            other_suffix = other.subtype_suffix
            return other_suffix is not None and self.subtype_suffix == other_suffix
        return False

    def is_compatible_with(self, other: "MimeType | None") -> bool:
        """Symmetric compatibility check honouring ``*`` and ``*+suffix`` wildcards"""
        if other is None:
            return False
        if self.is_wildcard_type or other.is_wildcard_type:
            return True
        if self.type != other.type:
            return False
        if self.subtype == other.subtype:
            return True
        if self.is_wildcard_subtype or other.is_wildcard_subtype:
            this_suffix = self.subtype_suffix
            other_suffix = other.subtype_suffix
            if self.subtype == WILDCARD or other.subtype == WILDCARD:
                return True
            if self.is_wildcard_subtype and this_suffix is not None:
                return this_suffix == other.subtype or this_suffix == other_suffix
            if other.is_wildcard_subtype and other_suffix is not None:
                return self.subtype == other_suffix or other_suffix == this_suffix
        return False

    def without_parameters(self) -> "MimeType":
        return MimeType(self.type, self.subtype)

    def __str__(self) -> str:
        params = "".join(f";{key}={value}" for key, value in self.parameters)
        return f"{self.type}/{self.subtype}{params}"

    def __repr__(self) -> str:
        return f"MimeType('{self}')"


def parse_mime_types(values: Any) -> tuple[MimeType, ...]:
    """Parse a comma separated string or an iterable of strings / MimeTypes"""
    if values is None:
        return ()
    if isinstance(values, (str, MimeType)):
        values = [values] if isinstance(values, MimeType) else values.split(",")
    return tuple(MimeType.of(value) for value in values if not isinstance(value, str) or value.strip())


ALL = MimeType("*", "*")
APPLICATION_JSON = MimeType("application", "json")
APPLICATION_JSON_SUFFIX = MimeType("application", "*+json")
APPLICATION_STREAM_JSON = MimeType("application", "stream+json")
APPLICATION_NDJSON = MimeType("application", "x-ndjson")
APPLICATION_MSGPACK = MimeType("application", "msgpack")
