"""
RestKVStore - Vercel KV / Upstash Redis over its REST API.

Each command is sent as a JSON array (["GET", key]) to the base URL with a
bearer token. The reply is {"result": ...} on success and {"error": ...} on
failure.
"""

import logging
from typing import Any, Optional

import httpx

from app.stores.base import KeyValueStore, StoreUnavailableError

logger = logging.getLogger(__name__)


class RestKVStore(KeyValueStore):
    backend = "rest"

    def __init__(
        self,
        url: str,
        token: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__()
        self._client = httpx.AsyncClient(
            base_url=url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def _command(self, *args: str) -> Any:
        try:
            response = await self._client.post("/", json=list(args))
        except httpx.TimeoutException as e:
            logger.error(f"KV {args[0]} timed out: {e!r}")
            raise StoreUnavailableError(f"KV {args[0]} timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"KV {args[0]} failed: {e!r}")
            raise StoreUnavailableError(f"KV {args[0]} failed") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code != 200 or "error" in data:
            error_msg = data.get("error") or response.text
            logger.error(f"KV {args[0]} rejected. Status: {response.status_code}, Error: {error_msg}")
            raise StoreUnavailableError(f"KV {args[0]} rejected: {error_msg}")

        return data.get("result")

    async def get(self, key: str) -> Optional[str]:
        result = await self._command("GET", key)
        if result is None:
            return None
        return result if isinstance(result, str) else str(result)

    async def set(self, key: str, value: str) -> None:
        await self._command("SET", key, value)

    async def delete(self, key: str) -> None:
        await self._command("DEL", key)

    async def ping(self) -> bool:
        try:
            return await self._command("PING") == "PONG"
        except StoreUnavailableError:
            return False

    async def close(self) -> None:
        await self._client.aclose()
