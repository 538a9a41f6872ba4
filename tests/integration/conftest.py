"""Integration-test fixtures.

All integration tests share a single event loop: the router's module-level
service owns asyncio locks, which bind to the loop they first wait on.
The app runs with the default memory backend, so no external services
are needed.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:
    """Session-scoped async HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
