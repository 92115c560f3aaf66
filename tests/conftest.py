"""
Pytest fixtures and configuration for all tests.
"""

import os

# Settings se leen al importar la app: el entorno de test va antes que cualquier import de app.*
os.environ.setdefault("SESSION_SECRET", "test-session-secret-at-least-32-chars-long")
os.environ.setdefault("KV_BACKEND", "memory")
os.environ.setdefault("DISCORD_CLIENT_ID", "test-discord-client-id")
os.environ.setdefault("DISCORD_CLIENT_SECRET", "test-discord-client-secret")
os.environ.setdefault("DISCORD_REDIRECT_URI", "http://test/auth/discord/callback")

import asyncio

import pytest

from app.models.user import Identity
from app.repositories.leaderboard_repository import LeaderboardRepository
from app.stores.memory import MemoryStore

LEADERBOARD_KEY = "leaderboard"


class SlowMemoryStore(MemoryStore):
    """MemoryStore that yields to the event loop on every call, like a network store would."""

    async def get(self, key):
        await asyncio.sleep(0)
        return await super().get(key)

    async def set(self, key, value):
        await asyncio.sleep(0)
        await super().set(key, value)


@pytest.fixture
def memory_store():
    """Fresh in-memory store for each test."""
    return MemoryStore()


@pytest.fixture
def slow_store():
    return SlowMemoryStore()


@pytest.fixture
def leaderboard_repo(memory_store):
    return LeaderboardRepository(memory_store, key=LEADERBOARD_KEY)


@pytest.fixture
def sample_identity():
    """Discord user for testing."""
    return Identity(id="111111111111111111", username="alice", avatar="a1b2c3")


@pytest.fixture
def other_identity():
    return Identity(id="222222222222222222", username="bob", avatar=None)


@pytest.fixture
def sample_discord_user():
    """Payload of GET /users/@me as Discord returns it."""
    return {
        "id": "111111111111111111",
        "username": "alice_01",
        "global_name": "alice",
        "avatar": "a1b2c3",
        "discriminator": "0",
    }
