"""Domain layer: exceptions and enums shared by every cache backend."""

from certcache.domain.enums import ValueEncoding
from certcache.domain.exceptions import (
    CacheConstructionError,
    CacheEntryDecodeError,
    CacheMissError,
    CertCacheException,
    InvalidCacheKeyError,
)

__all__ = [
    "CacheConstructionError",
    "CacheEntryDecodeError",
    "CacheMissError",
    "CertCacheException",
    "InvalidCacheKeyError",
    "ValueEncoding",
]
