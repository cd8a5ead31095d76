"""Environment driven settings and logging setup

Settings are read from the process environment after ``load_dotenv()`` so a
local ``.env`` file can provide them during development.

Variables:
    CODEC_SUPPORTED_MIME_TYPES  comma separated, default "application/json,application/*+json"
    CODEC_STREAMING_MIME_TYPES  comma separated, default "application/stream+json"
    CODEC_PRETTY_PRINT          "true" / "false", default "false"
    LOG_LEVEL                   default "INFO", "TRACE" enables per-value encode logs
"""

import logging
import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv

from .core.log_format import TRACE
from .core.mime import MimeType, parse_mime_types
from .core.serializers import JsonFormat
from .encoder import (
    DEFAULT_JSON_MIME_TYPES,
    DEFAULT_JSON_STREAMING_MEDIA_TYPES,
    EncoderConfig,
    SerializationEncoder,
)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class CodecSettings:
    """Encoder and logging settings"""

    supported_mime_types: tuple[MimeType, ...] = DEFAULT_JSON_MIME_TYPES
    streaming_mime_types: tuple[MimeType, ...] = DEFAULT_JSON_STREAMING_MEDIA_TYPES
    pretty_print: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "CodecSettings":
        if load_env_file:
            load_dotenv()

        supported = os.getenv("CODEC_SUPPORTED_MIME_TYPES")
        streaming = os.getenv("CODEC_STREAMING_MIME_TYPES")
        return cls(
            supported_mime_types=parse_mime_types(supported) if supported else DEFAULT_JSON_MIME_TYPES,
            streaming_mime_types=(
                parse_mime_types(streaming) if streaming is not None else DEFAULT_JSON_STREAMING_MEDIA_TYPES
            ),
            pretty_print=os.getenv("CODEC_PRETTY_PRINT", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def to_encoder_config(self) -> EncoderConfig:
        return EncoderConfig(
            supported_mime_types=self.supported_mime_types,
            streaming_media_types=self.streaming_mime_types,
        )

    def build_encoder(self) -> SerializationEncoder:
        return SerializationEncoder(JsonFormat(pretty_print=self.pretty_print), self.to_encoder_config())


def configure_logging(level: str = "INFO") -> None:
    """Configure root and package loggers to emit to stdout with formatting."""
    log_level = TRACE if level.upper() == "TRACE" else getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(log_level)

    # Avoid duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        sh = logging.StreamHandler(sys.stdout)
        sh.setFormatter(formatter)
        root.addHandler(sh)

    logging.getLogger("stream_codec").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)
