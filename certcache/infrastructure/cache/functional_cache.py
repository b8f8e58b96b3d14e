"""Certificate caches built from caller-supplied async functions.

Useful for test doubles and for decorators (logging, forced misses) that
sit in front of a real cache: give FunctionalCertCache a get that always
raises CacheMissError and the certificate manager sees a cold cache.

Two shapes are provided:

- FunctionalCertCache: put(key) does not receive the value. Closures that
  need to persist it must capture it themselves.
- FunctionalValueCertCache: put(key, data) receives the value. Use this one
  for decorators that forward writes to another cache.

Neither adapter logs, translates or wraps anything: each method awaits the
matching function and returns (or raises) exactly what it does.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from certcache.domain.exceptions import CacheMissError
from certcache.infrastructure.cache.cache_protocol import CertCacheProtocol

GetFunc = Callable[[str], Awaitable[bytes]]
KeyFunc = Callable[[str], Awaitable[None]]
PutValueFunc = Callable[[str, bytes], Awaitable[None]]


class FunctionalCertCache:
    """Cert cache whose operations are three injected functions.

    put() is delegated as put(key); the data argument is not forwarded.
    """

    def __init__(self, get: GetFunc, put: KeyFunc, delete: KeyFunc) -> None:
        self._get = get
        self._put = put
        self._delete = delete

    async def get(self, key: str) -> bytes:
        return await self._get(key)

    async def put(self, key: str, data: bytes) -> None:
        return await self._put(key)

    async def delete(self, key: str) -> None:
        return await self._delete(key)


class FunctionalValueCertCache:
    """Cert cache whose operations are three injected functions; put gets the data."""

    def __init__(self, get: GetFunc, put: PutValueFunc, delete: KeyFunc) -> None:
        self._get = get
        self._put = put
        self._delete = delete

    async def get(self, key: str) -> bytes:
        return await self._get(key)

    async def put(self, key: str, data: bytes) -> None:
        return await self._put(key, data)

    async def delete(self, key: str) -> None:
        return await self._delete(key)


async def always_miss(key: str) -> bytes:
    """get function that reports every key as missing (cold cache)."""
    raise CacheMissError(key)


async def noop(key: str) -> None:
    """put/delete function for FunctionalCertCache that does nothing."""


async def noop_put(key: str, data: bytes) -> None:
    """put function for FunctionalValueCertCache that does nothing."""


def logging_functions(
    cache: CertCacheProtocol,
    logger: logging.Logger | None = None,
) -> tuple[GetFunc, PutValueFunc, KeyFunc]:
    """Return (get, put, delete) that log each call and delegate to cache.

    Intended for FunctionalValueCertCache(*logging_functions(inner)).
    Misses are logged at INFO, other errors at WARNING; all are re-raised.
    """
    log = logger or logging.getLogger(__name__)

    async def get(key: str) -> bytes:
        log.info("cert cache get %s", key)
        try:
            data = await cache.get(key)
        except CacheMissError:
            log.info("cert cache miss %s", key)
            raise
        except Exception as e:
            log.warning("cert cache get %s failed: %s", key, e)
            raise
        log.info("cert cache hit %s (%d bytes)", key, len(data))
        return data

    async def put(key: str, data: bytes) -> None:
        log.info("cert cache put %s (%d bytes)", key, len(data))
        try:
            await cache.put(key, data)
        except Exception as e:
            log.warning("cert cache put %s failed: %s", key, e)
            raise

    async def delete(key: str) -> None:
        log.info("cert cache delete %s", key)
        try:
            await cache.delete(key)
        except Exception as e:
            log.warning("cert cache delete %s failed: %s", key, e)
            raise

    return get, put, delete
