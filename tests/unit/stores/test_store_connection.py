"""
Tests para Database: elección del backend según KV_BACKEND
"""

import pytest
from unittest.mock import Mock, patch

from app.database import Database, get_store
from app.stores.memory import MemoryStore
from app.stores.rest_kv import RestKVStore


@pytest.fixture(autouse=True)
def reset_connection():
    original = Database.store
    Database.store = None
    yield
    Database.store = original


def mock_settings(**overrides):
    values = dict(
        kv_backend="memory",
        kv_rest_api_url=None,
        kv_rest_api_token=None,
        mongodb_uri=None,
        mongodb_db_name="discord_leaderboard",
        kv_collection="kv",
        store_timeout_seconds=5.0,
    )
    values.update(overrides)
    return Mock(**values)


class TestDatabase:
    """Tests para Database.connect / get_store"""

    @pytest.mark.asyncio
    @patch('app.database.get_settings')
    async def test_connect_memory(self, mock_get_settings):
        mock_get_settings.return_value = mock_settings()

        await Database.connect()

        assert isinstance(await get_store(), MemoryStore)
        await Database.disconnect()
        assert Database.store is None

    @pytest.mark.asyncio
    @patch('app.database.get_settings')
    async def test_connect_rest(self, mock_get_settings):
        mock_get_settings.return_value = mock_settings(
            kv_backend="rest",
            kv_rest_api_url="https://example-kv.upstash.io",
            kv_rest_api_token="test-kv-token",
        )

        await Database.connect()

        assert isinstance(Database.get_store(), RestKVStore)
        await Database.disconnect()

    @pytest.mark.asyncio
    @patch('app.database.get_settings')
    async def test_rest_without_credentials_fails(self, mock_get_settings):
        mock_get_settings.return_value = mock_settings(kv_backend="rest")

        with pytest.raises(ValueError):
            await Database.connect()

    @pytest.mark.asyncio
    @patch('app.database.get_settings')
    async def test_mongo_without_uri_fails(self, mock_get_settings):
        mock_get_settings.return_value = mock_settings(kv_backend="mongo")

        with pytest.raises(ValueError):
            await Database.connect()

    @pytest.mark.asyncio
    @patch('app.database.get_settings')
    async def test_unknown_backend_fails(self, mock_get_settings):
        mock_get_settings.return_value = mock_settings(kv_backend="sqlite")

        with pytest.raises(ValueError):
            await Database.connect()

    def test_get_store_before_connect(self):
        with pytest.raises(RuntimeError):
            Database.get_store()
