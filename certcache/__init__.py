"""certcache: pluggable storage for ACME certificate material.

Backends share CertCacheProtocol (get/put/delete of bytes by key); get
raises CacheMissError when nothing is stored.
"""

from certcache.domain.enums import ValueEncoding
from certcache.domain.exceptions import (
    CacheConstructionError,
    CacheEntryDecodeError,
    CacheMissError,
    CertCacheException,
    InvalidCacheKeyError,
)
from certcache.infrastructure.cache import (
    CertCacheFactory,
    CertCacheProtocol,
    FirestoreCertCache,
    FunctionalCertCache,
    FunctionalValueCertCache,
    MemoryCertCache,
    RedisCertCache,
    always_miss,
    logging_functions,
    noop,
    noop_put,
)

__version__ = "1.0.0"

__all__ = [
    "CacheConstructionError",
    "CacheEntryDecodeError",
    "CacheMissError",
    "CertCacheException",
    "CertCacheFactory",
    "CertCacheProtocol",
    "FirestoreCertCache",
    "FunctionalCertCache",
    "FunctionalValueCertCache",
    "InvalidCacheKeyError",
    "MemoryCertCache",
    "RedisCertCache",
    "ValueEncoding",
    "always_miss",
    "logging_functions",
    "noop",
    "noop_put",
]
