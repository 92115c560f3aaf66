"""
KeyValueStore - Contract shared by every store backend.

Values are opaque strings: the store never interprets what it holds.
Encoding and decoding happen in the repositories.
"""

import asyncio
from typing import Optional


class StoreError(Exception):
    """Base exception for key-value store errors."""
    pass


class StoreUnavailableError(StoreError):
    """Raised when the backend cannot be reached, times out, or replies with an error."""
    pass


class KeyValueStore:
    """
    Minimal get/set/delete store.

    No transactions and no compare-and-swap. The only coordination offered is
    a per-process lock registry, so that read-modify-write sequences on one
    key do not interleave inside this process.
    """

    backend: str = "base"

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}

    def lock(self, key: str) -> asyncio.Lock:
        """Return the write lock for `key` (same object for the same key)."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError

    async def ping(self) -> bool:
        """Check that the backend answers. Never raises."""
        try:
            await self.get("__ping__")
        except StoreError:
            return False
        return True

    async def close(self) -> None:
        pass
