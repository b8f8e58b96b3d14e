"""Redis-backed certificate cache (implements CertCacheProtocol).

Values are stored as raw bytes (decode_responses=False), so no text
encoding is involved. Unlike a best-effort performance cache, Redis errors
are not swallowed: the certificate manager must be able to tell "no
certificate" from "store unreachable".
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import redis.asyncio as redis

from certcache.core.constants import REDIS_DEFAULT_PREFIX, REDIS_KEY_SEP
from certcache.domain.exceptions import CacheMissError
from certcache.infrastructure.cache.keys import validate_cache_key

if TYPE_CHECKING:
    from certcache.core.config import Settings

logger = logging.getLogger(__name__)


class RedisCertCache:
    """Cert cache stored under '<prefix>:<key>' in Redis, without TTL."""

    def __init__(self, redis_client: redis.Redis, prefix: str = REDIS_DEFAULT_PREFIX) -> None:
        """Initialize with a Redis client.

        Args:
            redis_client: Client created with decode_responses=False.
            prefix: Namespace for cache keys (must not contain the separator).
        """
        if REDIS_KEY_SEP in prefix:
            raise ValueError(
                f"Redis key prefix must not contain separator {REDIS_KEY_SEP!r}"
            )
        self.redis = redis_client
        self.prefix = prefix

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> RedisCertCache:
        """Build a client from settings; no connection is made until first use."""
        from certcache.core.config import get_settings

        s = settings or get_settings()
        client = redis.Redis(
            host=s.redis_host,
            port=s.redis_port,
            db=s.redis_db,
            password=s.redis_password.get_secret_value() if s.redis_password else None,
            decode_responses=False,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        return cls(client, s.redis_key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{REDIS_KEY_SEP}{validate_cache_key(key)}"

    async def aclose(self) -> None:
        """Close the Redis connection pool."""
        await self.redis.aclose()

    async def get(self, key: str) -> bytes:
        """Return stored bytes. Raises CacheMissError if key is absent."""
        value = await self.redis.get(self._key(key))
        if value is None:
            logger.debug("Cert cache MISS: %s", key)
            raise CacheMissError(key)
        logger.debug("Cert cache HIT: %s", key)
        return bytes(value)

    async def put(self, key: str, data: bytes) -> None:
        """Store data under key (SET, no expiry)."""
        await self.redis.set(self._key(key), bytes(data))
        logger.debug("Cert cache SET: %s", key)

    async def delete(self, key: str) -> None:
        """Remove key; DEL on a missing key is not an error."""
        await self.redis.delete(self._key(key))
        logger.debug("Cert cache DELETE: %s", key)
