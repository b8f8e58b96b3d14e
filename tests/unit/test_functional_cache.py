"""Tests for FunctionalCertCache / FunctionalValueCertCache and helper functions."""

import contextvars
import logging
from unittest.mock import AsyncMock

import pytest

from certcache.domain.exceptions import CacheMissError
from certcache.infrastructure.cache.functional_cache import (
    FunctionalCertCache,
    FunctionalValueCertCache,
    always_miss,
    logging_functions,
    noop,
    noop_put,
)
from certcache.infrastructure.cache.memory_cache import MemoryCertCache

request_id: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")


async def test_get_delegates_and_returns_result_unchanged() -> None:
    get = AsyncMock(return_value=b"cert-bytes")
    cache = FunctionalCertCache(get, AsyncMock(), AsyncMock())
    assert await cache.get("example.com") == b"cert-bytes"
    get.assert_awaited_once_with("example.com")


async def test_put_delegates_key_only() -> None:
    """Faithful shape: the put function receives the key, not the data."""
    put = AsyncMock(return_value=None)
    cache = FunctionalCertCache(AsyncMock(), put, AsyncMock())
    assert await cache.put("example.com", b"ignored") is None
    put.assert_awaited_once_with("example.com")


async def test_value_put_delegates_key_and_data() -> None:
    put = AsyncMock(return_value=None)
    cache = FunctionalValueCertCache(AsyncMock(), put, AsyncMock())
    await cache.put("example.com", b"cert-bytes")
    put.assert_awaited_once_with("example.com", b"cert-bytes")


async def test_delete_delegates() -> None:
    delete = AsyncMock(return_value=None)
    cache = FunctionalCertCache(AsyncMock(), AsyncMock(), delete)
    await cache.delete("example.com")
    delete.assert_awaited_once_with("example.com")


async def test_errors_propagate_unwrapped() -> None:
    err = ConnectionError("store down")
    cache = FunctionalCertCache(
        AsyncMock(side_effect=err),
        AsyncMock(side_effect=err),
        AsyncMock(side_effect=err),
    )
    for call in (cache.get("k"), cache.put("k", b"v"), cache.delete("k")):
        with pytest.raises(ConnectionError) as exc_info:
            await call
        assert exc_info.value is err


@pytest.mark.parametrize("key", ["example.com", "acme_account+key", "x"])
async def test_always_miss_simulates_cold_cache(key: str) -> None:
    cache = FunctionalCertCache(always_miss, noop, noop)
    with pytest.raises(CacheMissError) as exc_info:
        await cache.get(key)
    assert exc_info.value.details["key"] == key
    await cache.put(key, b"data")
    await cache.delete(key)


async def test_closures_see_callers_context_vars() -> None:
    """Closures run in the caller's task, so contextvars set by the caller are visible."""
    seen: list[str] = []

    async def get(key: str) -> bytes:
        seen.append(request_id.get())
        return b""

    cache = FunctionalValueCertCache(get, noop_put, noop)
    token = request_id.set("req-42")
    try:
        await cache.get("example.com")
    finally:
        request_id.reset(token)
    assert seen == ["req-42"]


async def test_logging_functions_delegate_and_log(caplog) -> None:
    inner = MemoryCertCache()
    logger = logging.getLogger("test.certcache.logging")
    cache = FunctionalValueCertCache(*logging_functions(inner, logger))
    caplog.set_level(logging.INFO, logger="test.certcache.logging")

    await cache.put("example.com", b"cert")
    assert await inner.get("example.com") == b"cert"
    assert await cache.get("example.com") == b"cert"
    await cache.delete("example.com")
    with pytest.raises(CacheMissError):
        await cache.get("example.com")

    messages = [r.getMessage() for r in caplog.records]
    assert "cert cache put example.com (4 bytes)" in messages
    assert "cert cache hit example.com (4 bytes)" in messages
    assert "cert cache miss example.com" in messages


async def test_logging_functions_reraise_store_errors(caplog) -> None:
    inner = AsyncMock()
    inner.get.side_effect = TimeoutError("slow")
    get, _, _ = logging_functions(inner)
    with pytest.raises(TimeoutError):
        await get("example.com")
    assert any(r.levelno == logging.WARNING for r in caplog.records)
