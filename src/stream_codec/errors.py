"""Codec exceptions and the error body returned by the demo application

All failures raised by the encoder itself derive from ``CodecError``.
Errors produced while converting a value (pydantic serialization errors,
msgpack errors) are not wrapped and reach the caller unchanged.

Error response example:
    {
        "error": "serialization_error",
        "message": "Serializer for type Widget is not found",
        "details": {"type": "Widget"}
    }
"""

from typing import Any

from pydantic import BaseModel, Field


class CodecError(Exception):
    """Base class for encoder failures"""


class SerializationError(CodecError):
    """Raised when no serializer can be resolved for a type"""

    def __init__(self, message: str, obj_type: str, original_error: Exception | None = None):
        super().__init__(message)
        self.obj_type = obj_type
        self.original_error = original_error


class EncodingNotSupportedError(CodecError):
    """Raised when an encoder cannot write a type with the requested mime type"""

    def __init__(self, message: str, element_type: Any = None, mime_type: Any = None):
        super().__init__(message)
        self.element_type = element_type
        self.mime_type = mime_type


class ErrorResponse(BaseModel):
    """Error body written by the demo application"""

    error: str = Field(..., description="Error type (snake_case identifier)")
    message: str = Field(..., description="Human readable error message")
    details: dict[str, Any] | None = Field(None, description="Additional error information")


def get_error_type(status_code: int) -> str:
    """Map an HTTP status code to an error type identifier"""
    error_map = {
        400: "bad_request",
        404: "not_found",
        406: "not_acceptable",
        422: "validation_error",
        500: "internal_error",
        503: "service_unavailable",
    }
    return error_map.get(status_code, "unknown_error")
