"""Tests for the key-value tier (HTTP and Redis stores)."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.bb_common.errors import RemoteUnavailableError
from src.bb_persistence.infrastructure.kv_store import (
    HttpKeyValueStore,
    KeyValueBackend,
    RedisKeyValueStore,
)
from src.bb_pricing.domain.models import SizeListCodec

BASE_URL = "http://kv.test/kv-pricing"


def _http_store(handler) -> HttpKeyValueStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpKeyValueStore(BASE_URL, client=client)


class TestHttpKeyValueStore:
    @pytest.mark.asyncio
    async def test_get_returns_value(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.params["key"] == "pricing_sizes"
            return httpx.Response(200, json={"value": ["4x12"]})

        assert await _http_store(handler).get("pricing_sizes") == ["4x12"]

    @pytest.mark.asyncio
    async def test_get_null_value(self) -> None:
        store = _http_store(lambda request: httpx.Response(200, json={"value": None}))
        assert await store.get("pricing_sizes") is None

    @pytest.mark.asyncio
    async def test_set_posts_wrapped_value(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["key"] = request.url.params["key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})

        await _http_store(handler).set("city_multipliers", [{"city_name": "سبها"}])

        assert seen == {
            "method": "POST",
            "key": "city_multipliers",
            "body": {"value": [{"city_name": "سبها"}]},
        }

    @pytest.mark.asyncio
    async def test_non_2xx_is_unavailable(self) -> None:
        store = _http_store(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(RemoteUnavailableError) as exc_info:
            await store.get("rental_pricing")
        assert exc_info.value.tier == "key_value"
        with pytest.raises(RemoteUnavailableError):
            await store.set("rental_pricing", {})

    @pytest.mark.asyncio
    async def test_transport_error_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        store = _http_store(handler)
        with pytest.raises(RemoteUnavailableError):
            await store.get("rental_pricing")
        assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_non_json_body_is_unavailable(self) -> None:
        store = _http_store(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(RemoteUnavailableError):
            await store.get("rental_pricing")

    @pytest.mark.asyncio
    async def test_ping(self) -> None:
        store = _http_store(lambda request: httpx.Response(200, json={"value": None}))
        assert await store.ping() is True


class TestRedisKeyValueStore:
    @pytest.mark.asyncio
    async def test_get_and_set_json(self) -> None:
        client = AsyncMock()
        client.get.return_value = '["4x12"]'
        store = RedisKeyValueStore(AsyncMock(return_value=client))

        assert await store.get("pricing_sizes") == ["4x12"]
        client.get.assert_awaited_once_with("bb:pricing:pricing_sizes")

        await store.set("pricing_sizes", ["3x4"])
        client.set.assert_awaited_once_with("bb:pricing:pricing_sizes", '["3x4"]')

    @pytest.mark.asyncio
    async def test_missing_key(self) -> None:
        client = AsyncMock()
        client.get.return_value = None
        store = RedisKeyValueStore(AsyncMock(return_value=client))
        assert await store.get("rental_pricing") is None

    @pytest.mark.asyncio
    async def test_connection_error_is_unavailable(self) -> None:
        client = AsyncMock()
        client.get.side_effect = RedisConnectionError("down")
        client.ping.side_effect = RedisConnectionError("down")
        store = RedisKeyValueStore(AsyncMock(return_value=client))
        with pytest.raises(RemoteUnavailableError):
            await store.get("rental_pricing")
        assert await store.ping() is False


class TestKeyValueBackend:
    @pytest.mark.asyncio
    async def test_empty_document_reads_as_none(self) -> None:
        store = AsyncMock()
        store.get.return_value = []
        backend = KeyValueBackend(store, "pricing_sizes", SizeListCodec())
        assert await backend.read() is None

    @pytest.mark.asyncio
    async def test_malformed_document_is_unavailable(self) -> None:
        store = AsyncMock()
        store.get.return_value = {"unexpected": True}
        backend = KeyValueBackend(store, "pricing_sizes", SizeListCodec())
        with pytest.raises(RemoteUnavailableError):
            await backend.read()

    @pytest.mark.asyncio
    async def test_write_full_encodes(self) -> None:
        store = AsyncMock()
        backend = KeyValueBackend(store, "pricing_sizes", SizeListCodec())
        await backend.write_full(["4x12"])
        store.set.assert_awaited_once_with("pricing_sizes", ["4x12"])
