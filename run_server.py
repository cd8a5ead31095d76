#!/usr/bin/env python3
"""
Server startup script for the demo application.

This script:
1. Loads settings from the environment (and .env)
2. Configures logging
3. Starts the FastAPI server with uvicorn
"""

import os

import uvicorn
from stream_codec.config import CodecSettings, configure_logging


def main() -> None:
    """Start the server"""
    settings = CodecSettings.from_env()
    configure_logging(settings.log_level)

    port = int(os.getenv("PORT", "8000"))

    print(f"Serving demo items at: http://localhost:{port}/items")
    print(f"Streaming types: {', '.join(str(m) for m in settings.streaming_mime_types)}")

    uvicorn.run(
        "stream_codec.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("RELOAD", "false").lower() == "true",
        log_level=os.getenv("UVICORN_LOG_LEVEL", "info"),
    )


if __name__ == "__main__":
    main()
