"""Tests specific to MemoryCertCache (shared laws are in test_cache_contract)."""

import pytest

from certcache.domain.exceptions import InvalidCacheKeyError
from certcache.infrastructure.cache.memory_cache import MemoryCertCache


async def test_stores_a_copy() -> None:
    cache = MemoryCertCache()
    data = bytearray(b"cert")
    await cache.put("example.com", data)
    data[0:4] = b"XXXX"
    assert await cache.get("example.com") == b"cert"


async def test_len_tracks_entries() -> None:
    cache = MemoryCertCache()
    await cache.put("a", b"1")
    await cache.put("b", b"2")
    await cache.delete("a")
    assert len(cache) == 1


async def test_invalid_key_rejected() -> None:
    with pytest.raises(InvalidCacheKeyError):
        await MemoryCertCache().put("a/b", b"x")
