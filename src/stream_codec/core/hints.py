"""Well-known encode hints shared by encoders and response writers"""

from collections.abc import Mapping
from typing import Any

# Presence (with a truthy value) disables encode logging for the call
SUPPRESS_LOGGING_HINT = "stream_codec.hints.suppress_logging"

# Prefix prepended to encode log lines, typically a request id
LOG_PREFIX_HINT = "stream_codec.hints.log_prefix"


def is_logging_suppressed(hints: Mapping[str, Any] | None) -> bool:
    """Whether the hints ask for encode logging to be skipped"""
    return bool(hints) and bool(hints.get(SUPPRESS_LOGGING_HINT, False))


def get_log_prefix(hints: Mapping[str, Any] | None) -> str:
    """Log prefix from the hints, or an empty string"""
    if not hints:
        return ""
    prefix = hints.get(LOG_PREFIX_HINT)
    return str(prefix) if prefix is not None else ""

