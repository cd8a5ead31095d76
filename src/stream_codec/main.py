"""Demo FastAPI application serving values through the SerializationEncoder

Endpoints:
    GET /info              service information
    GET /items             all items; a JSON array, or NDJSON with
                           ``Accept: application/stream+json``
    GET /items/{item_id}   a single item

Run with:
    uvicorn stream_codec.main:app --reload
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import CodecSettings
from .core.hints import LOG_PREFIX_HINT
from .core.mime import InvalidMimeTypeError, MimeType
from .errors import EncodingNotSupportedError, ErrorResponse, SerializationError, get_error_type
from .responses import EncoderResponseWriter

logger = logging.getLogger(__name__)


class Item(BaseModel):
    """Item served by the demo endpoints"""

    id: int
    name: str
    price: float


class InfoResponse(BaseModel):
    """Info endpoint response model"""

    name: str
    version: str
    description: str
    streaming_mime_types: list[str]


ITEMS: list[Item] = [
    Item(id=1, name="keyboard", price=49.0),
    Item(id=2, name="mouse", price=19.5),
    Item(id=3, name="monitor", price=189.99),
]


async def stream_items(delay: float = 0.0) -> AsyncIterator[Item]:
    """Yield the items one by one, optionally pausing between them"""
    for item in ITEMS:
        if delay:
            await asyncio.sleep(delay)
        yield item


async def find_item(item_id: int) -> Item | None:
    return next((item for item in ITEMS if item.id == item_id), None)


def requested_media_type(request: Request) -> MimeType | None:
    """Concrete mime type from the first Accept entry, or None for wildcards"""
    accept = request.headers.get("accept")
    if not accept:
        return None
    mime_type = MimeType.parse(accept.split(",")[0]).without_parameters()
    return mime_type if mime_type.is_concrete else None


def _error_response(status_code: int, message: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=get_error_type(status_code), message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app(settings: CodecSettings | None = None) -> FastAPI:
    """Build the demo application"""
    settings = settings or CodecSettings.from_env()
    writer = EncoderResponseWriter(settings.build_encoder())

    app = FastAPI(title="pydantic-stream-codec demo", version="0.1.0")
    app.state.writer = writer

    @app.exception_handler(EncodingNotSupportedError)
    async def not_acceptable_handler(_request: Request, exc: EncodingNotSupportedError) -> JSONResponse:
        return _error_response(406, str(exc), {"mime_type": str(exc.mime_type)})

    @app.exception_handler(SerializationError)
    async def serialization_error_handler(_request: Request, exc: SerializationError) -> JSONResponse:
        logger.error(f"Serialization failed: {exc}")
        return _error_response(500, str(exc), {"type": exc.obj_type})

    @app.exception_handler(InvalidMimeTypeError)
    async def invalid_mime_type_handler(_request: Request, exc: InvalidMimeTypeError) -> JSONResponse:
        return _error_response(400, str(exc), {"mime_type": exc.mime_type})

    @app.get("/info", response_model=InfoResponse)
    async def info() -> InfoResponse:
        """Simple service information endpoint"""
        return InfoResponse(
            name="pydantic-stream-codec",
            version="0.1.0",
            description="Pydantic response encoder with NDJSON streaming",
            streaming_mime_types=[str(m) for m in writer.encoder.streaming_media_types],
        )

    @app.get("/items")
    async def list_items(request: Request, delay: float = 0.0):
        hints = {LOG_PREFIX_HINT: f"[{request.method} {request.url.path}] "}
        return await writer.write(stream_items(delay), Item, requested_media_type(request), hints)

    @app.get("/items/{item_id}")
    async def get_item(request: Request, item_id: int):
        item = await find_item(item_id)
        if item is None:
            return _error_response(404, f"Item {item_id} not found", {"item_id": item_id})
        return await writer.write(item, Item, requested_media_type(request))

    return app


app = create_app()
