"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - stream_backend: Scripted backend serving chunked streams via MockTransport
    - stream_client: HTTPX client bound to stream_backend
    - backend_app: Fresh development backend with an empty store
    - async_client: HTTPX client bound to the development backend
"""

from collections.abc import AsyncGenerator

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from streamchat.server.app import create_app
from tests.helpers import StreamBackend


@pytest.fixture
def stream_backend() -> StreamBackend:
    """Return a scripted backend with no chunks configured."""
    return StreamBackend()


@pytest.fixture
async def stream_client(stream_backend: StreamBackend) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client served by the scripted backend.

    Yields:
        AsyncClient whose requests are answered by stream_backend.
    """
    transport = httpx.MockTransport(stream_backend.handler)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def backend_app() -> FastAPI:
    """Return a fresh development backend with an empty store."""
    return create_app()


@pytest.fixture
async def async_client(backend_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=backend_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
