"""Cert cache factory: creates a Firestore, Redis or memory backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from certcache.core.constants import BACKEND_FIRESTORE, BACKEND_MEMORY, BACKEND_REDIS
from certcache.infrastructure.cache.cache_protocol import CertCacheProtocol

if TYPE_CHECKING:
    from certcache.core.config import Settings


class CertCacheFactory:
    """Factory for cert cache instances based on configuration."""

    @staticmethod
    def create_cert_cache(settings: "Settings | None" = None) -> CertCacheProtocol:
        """Create cert cache from settings.

        Args:
            settings: Settings; if None, uses get_settings().

        Returns:
            FirestoreCertCache, RedisCertCache or MemoryCertCache.

        Raises:
            ValueError: Unknown backend.
            CacheConstructionError: Firestore credentials unusable.
        """
        from certcache.core.config import get_settings

        s = settings or get_settings()
        backend = s.cert_cache_backend

        if backend == BACKEND_FIRESTORE:
            from certcache.infrastructure.cache.firestore_cache import FirestoreCertCache

            return FirestoreCertCache.from_settings(s)
        if backend == BACKEND_REDIS:
            from certcache.infrastructure.cache.redis_cache import RedisCertCache

            return RedisCertCache.from_settings(s)
        if backend == BACKEND_MEMORY:
            from certcache.infrastructure.cache.memory_cache import MemoryCertCache

            return MemoryCertCache()
        raise ValueError(
            f"Unknown cert cache backend: {backend}. "
            f"Supported: '{BACKEND_FIRESTORE}', '{BACKEND_REDIS}', '{BACKEND_MEMORY}'"
        )
