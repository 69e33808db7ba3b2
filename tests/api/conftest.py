"""API test fixtures — FastAPI app with test Settings + async DB override.

Invariants:
    - Every test builds its own app via create_application (no shared overrides)
    - get_db dependency overridden to use the in-memory SQLite session factory
    - Default client sends the valid X-Api-Key header

Design Decisions:
    - raise_app_exceptions=False: unhandled errors are asserted as 500 responses
      instead of propagating into the test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from cruder.config import Settings
from cruder.infrastructure.database import get_db
from cruder.main import create_application

TEST_API_KEY = "test-api-key"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        x_api_key=TEST_API_KEY,
        log_format="text",
    )


@pytest.fixture
def test_app(test_settings, test_session_factory):
    app = create_application(test_settings)

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
async def anonymous_client(test_app):
    """Client without the API key header."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def client(test_app):
    """Client sending a valid X-Api-Key."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app, raise_app_exceptions=False),
        base_url="http://test",
        headers={"X-Api-Key": TEST_API_KEY},
    ) as c:
        yield c
