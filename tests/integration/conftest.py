"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.security import create_session_token
from app.database import Database, get_store
from app.main import app


@pytest.fixture
async def client(memory_store):
    """
    HTTP client for testing API endpoints.

    Overrides the store dependency with the test's in-memory store.
    """
    async def override_get_store():
        return memory_store

    # Store original connection
    original_store = Database.store
    Database.store = memory_store
    app.dependency_overrides[get_store] = override_get_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    # Restore original connection
    app.dependency_overrides.pop(get_store, None)
    Database.store = original_store


@pytest.fixture
def auth_headers(sample_identity):
    """Bearer header carrying a valid session for sample_identity."""
    token = create_session_token(sample_identity)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_identity):
    token = create_session_token(other_identity)
    return {"Authorization": f"Bearer {token}"}
