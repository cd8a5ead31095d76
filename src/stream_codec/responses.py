"""Starlette responses written through an Encoder"""

import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

from starlette.responses import Response, StreamingResponse

from .core.buffers import DataBuffer, DataBufferFactory, default_buffer_factory
from .core.hints import get_log_prefix
from .core.mime import MimeType
from .encoder import SerializationEncoder
from .errors import EncodingNotSupportedError

logger = logging.getLogger(__name__)


class EncoderResponseWriter:
    """Turns handler results into Starlette responses using a SerializationEncoder

    Streaming mime types get a StreamingResponse that sends each encoded
    element as soon as it is produced; everything else is buffered into a
    single Response with a Content-Length.
    """

    def __init__(
        self,
        encoder: SerializationEncoder,
        buffer_factory: DataBufferFactory = default_buffer_factory,
    ) -> None:
        self.encoder = encoder
        self.buffer_factory = buffer_factory

    def default_media_type(self) -> MimeType:
        """First concrete mime type the encoder supports"""
        for mime_type in self.encoder.encodable_mime_types:
            if mime_type.is_concrete:
                return mime_type
        raise EncodingNotSupportedError("Encoder declares no concrete mime type")

    async def write(
        self,
        content: Any,
        element_type: Any,
        media_type: MimeType | str | None = None,
        hints: Mapping[str, Any] | None = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Encode content into a Starlette response

        Args:
            content: Value, awaitable or stream handed to the encoder
            element_type: Type of each value
            media_type: Response mime type; defaults to default_media_type()
            hints: Encode hints passed through to the encoder
            status_code: HTTP status of the response
            headers: Extra response headers

        Returns:
            StreamingResponse for streaming mime types, otherwise a Response
            holding the whole encoded body

        Raises:
            EncodingNotSupportedError: The encoder cannot write element_type as
                media_type
        """
        mime_type = MimeType.of(media_type) if media_type is not None else self.default_media_type()

        if not self.encoder.can_encode(element_type, mime_type):
            raise EncodingNotSupportedError(
                f"Cannot encode {element_type!r} as {mime_type}", element_type=element_type, mime_type=mime_type
            )

        buffers = self.encoder.encode(content, self.buffer_factory, element_type, mime_type, hints)

        if self.encoder.is_streaming(mime_type):
            logger.debug(f"{get_log_prefix(hints)}Streaming response as {mime_type}")
            return StreamingResponse(
                _body_iterator(buffers),
                status_code=status_code,
                headers=dict(headers or {}),
                media_type=str(mime_type),
            )

        body = self.buffer_factory.join([buffer async for buffer in buffers])
        return Response(
            content=body.as_bytes(),
            status_code=status_code,
            headers=dict(headers or {}),
            media_type=str(mime_type),
        )


async def _body_iterator(buffers: AsyncIterator[DataBuffer]) -> AsyncIterator[bytes]:
    async for buffer in buffers:
        yield buffer.as_bytes()
