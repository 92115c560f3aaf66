"""
🔌 Store Connection Setup - Vercel KV / MongoDB / memoria

Configuración centralizada para conectar al key-value store del leaderboard
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import get_settings
from app.stores import KeyValueStore, MemoryStore, MongoKVStore, RestKVStore

logger = logging.getLogger(__name__)


class Database:
    """Singleton para la conexión al key-value store"""

    store: Optional[KeyValueStore] = None
    mongo_client: Optional[AsyncIOMotorClient] = None

    @classmethod
    async def connect(cls):
        """Crea el cliente del backend configurado en KV_BACKEND"""
        if cls.store is not None:
            return

        settings = get_settings()
        backend = settings.kv_backend.lower()

        if backend == "rest":
            if not settings.kv_rest_api_url or not settings.kv_rest_api_token:
                raise ValueError("KV_REST_API_URL and KV_REST_API_TOKEN are required for KV_BACKEND=rest")

            cls.store = RestKVStore(
                settings.kv_rest_api_url,
                settings.kv_rest_api_token,
                timeout=settings.store_timeout_seconds,
            )

        elif backend == "mongo":
            if not settings.mongodb_uri:
                raise ValueError("MONGODB_URI is required for KV_BACKEND=mongo")

            timeout_ms = int(settings.store_timeout_seconds * 1000)
            cls.mongo_client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
                serverSelectionTimeoutMS=timeout_ms,
                socketTimeoutMS=timeout_ms,
            )
            collection = cls.mongo_client[settings.mongodb_db_name][settings.kv_collection]
            cls.store = MongoKVStore(collection, timeout=settings.store_timeout_seconds)

        elif backend == "memory":
            cls.store = MemoryStore()

        else:
            raise ValueError(f"KV_BACKEND inválido: {settings.kv_backend}. Debe ser 'rest', 'mongo' o 'memory'")

        logger.info(f"✅ Connected to key-value store: {cls.store.backend}")

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.store is not None:
            await cls.store.close()
            cls.store = None
        if cls.mongo_client is not None:
            cls.mongo_client.close()
            cls.mongo_client = None
        logger.info("❌ Disconnected from key-value store")

    @classmethod
    def get_store(cls) -> KeyValueStore:
        """Retorna el cliente del store"""
        if cls.store is None:
            raise RuntimeError("Store not connected. Call Database.connect() first.")
        return cls.store


# ============================================
# 🎯 DEPENDENCY para FastAPI
# ============================================

async def get_store() -> KeyValueStore:
    """
    FastAPI dependency para inyectar el store

    Uso:
        @router.get("/api/leaderboard")
        async def get_leaderboard(store: KeyValueStore = Depends(get_store)):
            service = LeaderboardService(store)
            return await service.get_top()
    """
    return Database.get_store()
