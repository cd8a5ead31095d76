"""Helpers for value formatting in encode log lines"""

import logging
from collections.abc import Callable
from typing import Any

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

MAX_LOGGED_LENGTH = 100


def format_value(value: Any, limit_length: bool) -> str:
    """Render a value for logging, quoting strings and optionally truncating"""
    if value is None:
        return ""
    if isinstance(value, str):
        text = f'"{value}"'
    else:
        try:
            text = str(value)
        except Exception as e:
            text = repr(e)
    if limit_length and len(text) > MAX_LOGGED_LENGTH:
        return text[:MAX_LOGGED_LENGTH] + " (truncated)..."
    return text


def trace_debug(logger: logging.Logger, message_factory: Callable[[bool], str]) -> None:
    """Log at TRACE when enabled, else at DEBUG

    The factory receives whether TRACE is on, so it can choose how much detail
    to include. Nothing is built when DEBUG is disabled.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    trace_on = logger.isEnabledFor(TRACE)
    message = message_factory(trace_on)
    logger.log(TRACE if trace_on else logging.DEBUG, message)
