"""Cert cache backends and the protocol they share.

FirestoreCertCache and RedisCertCache persist across restarts;
MemoryCertCache and the functional caches are for tests and decorators.
"""

from certcache.infrastructure.cache.cache_protocol import CertCacheProtocol
from certcache.infrastructure.cache.factory import CertCacheFactory
from certcache.infrastructure.cache.firestore_cache import FirestoreCertCache
from certcache.infrastructure.cache.functional_cache import (
    FunctionalCertCache,
    FunctionalValueCertCache,
    always_miss,
    logging_functions,
    noop,
    noop_put,
)
from certcache.infrastructure.cache.keys import validate_cache_key
from certcache.infrastructure.cache.memory_cache import MemoryCertCache
from certcache.infrastructure.cache.redis_cache import RedisCertCache

__all__ = [
    "CertCacheFactory",
    "CertCacheProtocol",
    "FirestoreCertCache",
    "FunctionalCertCache",
    "FunctionalValueCertCache",
    "MemoryCertCache",
    "RedisCertCache",
    "always_miss",
    "logging_functions",
    "noop",
    "noop_put",
    "validate_cache_key",
]
