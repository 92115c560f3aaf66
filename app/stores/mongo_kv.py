"""
MongoKVStore - key-value pairs stored as documents in a MongoDB collection.

Document shape: {"_id": key, "value": "<string>"}
"""

import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from app.stores.base import KeyValueStore, StoreUnavailableError

logger = logging.getLogger(__name__)


class MongoKVStore(KeyValueStore):
    backend = "mongo"

    def __init__(self, collection: AsyncIOMotorCollection, timeout: float = 5.0):
        super().__init__()
        self.collection = collection
        self.timeout = timeout

    async def _run(self, operation: str, awaitable):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Mongo {operation} timed out after {self.timeout}s")
            raise StoreUnavailableError(f"Mongo {operation} timed out") from e
        except PyMongoError as e:
            logger.error(f"Mongo {operation} failed: {e}")
            raise StoreUnavailableError(f"Mongo {operation} failed") from e

    async def get(self, key: str) -> Optional[str]:
        doc = await self._run("get", self.collection.find_one({"_id": key}))
        if not doc:
            return None
        return doc.get("value")

    async def set(self, key: str, value: str) -> None:
        await self._run(
            "set",
            self.collection.update_one(
                {"_id": key},
                {"$set": {"value": value}},
                upsert=True
            )
        )

    async def delete(self, key: str) -> None:
        await self._run("delete", self.collection.delete_one({"_id": key}))
