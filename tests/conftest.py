"""Test fixtures — a fresh app and hub per test.

Learn: Two clients, two transports:

1. `client` — httpx AsyncClient over ASGITransport for plain HTTP routes.
2. `ws_client` — Starlette's TestClient, which also speaks WebSocket.
   Every websocket_connect() on one TestClient runs on the same event
   loop, so broadcasts between test "clients" behave as in production.

The hub is built with a fixed start time so init messages are exact.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from pointsync.config import Settings
from pointsync.hub.state import Hub
from pointsync.main import create_app

START_TIME = 1_700_000_000_000


@pytest.fixture()
def test_settings():
    return Settings(
        environment="development",
        allowed_origins=["*"],
        static_dir=None,
        send_timeout_seconds=5.0,
    )


@pytest.fixture()
def hub():
    return Hub(start_time=START_TIME)


@pytest.fixture()
def app(test_settings, hub):
    return create_app(test_settings, hub=hub)


@pytest.fixture()
def ws_client(app):
    """TestClient with the lifespan running, for WebSocket sessions."""
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client for the app's API routes."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
