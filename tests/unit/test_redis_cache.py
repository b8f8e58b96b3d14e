"""Unit tests for RedisCertCache (Redis client mocked)."""

from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from certcache.core.config import Settings
from certcache.domain.exceptions import CacheMissError, InvalidCacheKeyError
from certcache.infrastructure.cache.redis_cache import RedisCertCache


@pytest.fixture
def redis_client() -> AsyncMock:
    return AsyncMock()


async def test_get_hit_returns_bytes(redis_client: AsyncMock) -> None:
    redis_client.get.return_value = b"cert-bytes"
    cache = RedisCertCache(redis_client)
    assert await cache.get("example.com") == b"cert-bytes"
    redis_client.get.assert_awaited_once_with("certcache:example.com")


async def test_get_none_is_miss(redis_client: AsyncMock) -> None:
    redis_client.get.return_value = None
    cache = RedisCertCache(redis_client, prefix="certs")
    with pytest.raises(CacheMissError):
        await cache.get("example.com")
    redis_client.get.assert_awaited_once_with("certs:example.com")


async def test_empty_value_is_hit_not_miss(redis_client: AsyncMock) -> None:
    redis_client.get.return_value = b""
    cache = RedisCertCache(redis_client)
    assert await cache.get("example.com") == b""


async def test_put_sets_without_expiry(redis_client: AsyncMock) -> None:
    cache = RedisCertCache(redis_client)
    await cache.put("example.com", b"\x00\xff")
    redis_client.set.assert_awaited_once_with("certcache:example.com", b"\x00\xff")


async def test_delete_uses_del(redis_client: AsyncMock) -> None:
    redis_client.delete.return_value = 0
    cache = RedisCertCache(redis_client)
    await cache.delete("missing.example.com")
    redis_client.delete.assert_awaited_once_with("certcache:missing.example.com")


async def test_redis_errors_propagate(redis_client: AsyncMock) -> None:
    redis_client.get.side_effect = redis.ConnectionError("down")
    cache = RedisCertCache(redis_client)
    with pytest.raises(redis.ConnectionError):
        await cache.get("example.com")


async def test_invalid_key_rejected(redis_client: AsyncMock) -> None:
    cache = RedisCertCache(redis_client)
    with pytest.raises(InvalidCacheKeyError):
        await cache.put("", b"x")
    redis_client.set.assert_not_awaited()


def test_prefix_with_separator_rejected(redis_client: AsyncMock) -> None:
    with pytest.raises(ValueError, match="separator"):
        RedisCertCache(redis_client, prefix="a:b")


def test_from_settings_uses_prefix() -> None:
    settings = Settings(
        _env_file=None,
        cert_cache_backend="redis",
        redis_key_prefix="acme",
    )
    cache = RedisCertCache.from_settings(settings)
    assert cache.prefix == "acme"
    assert isinstance(cache.redis, redis.Redis)
