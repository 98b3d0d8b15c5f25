"""Key-value tier — the whole serialized aggregate under one key.

Two stores implement the same get/set contract:

  HttpKeyValueStore   GET  {base}?key=<name>          -> {"value": T | null}
                      POST {base}?key=<name>  {"value": T} -> 2xx
  RedisKeyValueStore  GET/SET <prefix><name> holding the JSON text of T

KeyValueBackend adapts a store plus a DocumentCodec to PersistenceBackend.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, Protocol, TypeVar

import httpx
import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.bb_common.enums import StorageTier
from src.bb_common.errors import RemoteUnavailableError
from src.bb_persistence.domain.backend import DocumentCodec

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TIER = StorageTier.KEY_VALUE.value


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def ping(self) -> bool: ...


class HttpKeyValueStore:
    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._base_url = base_url
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    async def get(self, key: str) -> Any | None:
        try:
            resp = await self._client.get(self._base_url, params={"key": key})
        except httpx.HTTPError as exc:
            raise RemoteUnavailableError(_TIER, f"GET {key}: {exc}") from exc
        if resp.is_error:
            raise RemoteUnavailableError(_TIER, f"GET {key}: HTTP {resp.status_code}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise RemoteUnavailableError(_TIER, f"GET {key}: body is not JSON") from exc
        if not isinstance(payload, dict):
            return None
        return payload.get("value")

    async def set(self, key: str, value: Any) -> None:
        try:
            resp = await self._client.post(
                self._base_url, params={"key": key}, json={"value": value}
            )
        except httpx.HTTPError as exc:
            raise RemoteUnavailableError(_TIER, f"POST {key}: {exc}") from exc
        if resp.is_error:
            raise RemoteUnavailableError(_TIER, f"POST {key}: HTTP {resp.status_code}")

    async def ping(self) -> bool:
        try:
            resp = await self._client.get(self._base_url, params={"key": "test"})
        except httpx.HTTPError:
            return False
        return resp.is_success

    async def aclose(self) -> None:
        await self._client.aclose()


class RedisKeyValueStore:
    def __init__(
        self,
        redis_getter: Callable[[], Awaitable[aioredis.Redis]],
        prefix: str = "bb:pricing:",
    ) -> None:
        self._redis_getter = redis_getter
        self._prefix = prefix

    async def get(self, key: str) -> Any | None:
        try:
            client = await self._redis_getter()
            raw = await client.get(self._prefix + key)
        except (RedisError, OSError) as exc:
            raise RemoteUnavailableError(_TIER, f"GET {key}: {exc}") from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise RemoteUnavailableError(_TIER, f"GET {key}: stored value is not JSON") from exc

    async def set(self, key: str, value: Any) -> None:
        try:
            client = await self._redis_getter()
            await client.set(self._prefix + key, json.dumps(value, ensure_ascii=False))
        except (RedisError, OSError) as exc:
            raise RemoteUnavailableError(_TIER, f"SET {key}: {exc}") from exc

    async def ping(self) -> bool:
        try:
            client = await self._redis_getter()
            return bool(await client.ping())
        except (RedisError, OSError):
            return False


class KeyValueBackend(Generic[T]):
    tier = StorageTier.KEY_VALUE

    def __init__(self, store: KeyValueStore, key: str, codec: DocumentCodec[T]) -> None:
        self._store = store
        self._key = key
        self._codec = codec

    async def read(self) -> T | None:
        document = await self._store.get(self._key)
        if not document:
            return None
        try:
            return self._codec.from_document(document)
        except (KeyError, TypeError, ValueError) as exc:
            raise RemoteUnavailableError(_TIER, f"{self._key}: malformed document ({exc})") from exc

    async def write_full(self, value: T) -> None:
        await self._store.set(self._key, self._codec.to_document(value))

    async def ping(self) -> bool:
        return await self._store.ping()
