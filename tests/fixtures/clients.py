"""Test client fixtures"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from stream_codec.config import CodecSettings
from stream_codec.main import create_app


def create_test_app(**settings) -> FastAPI:
    """Build the demo app from explicit settings, ignoring the environment"""
    return create_app(CodecSettings(**settings))


def make_client(app: FastAPI) -> TestClient:
    """Create a test client for the given app"""
    return TestClient(app)
