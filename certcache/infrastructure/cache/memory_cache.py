"""In-memory certificate cache.

Suitable for development, tests and single-process use. Entries are lost
when the process exits.
"""

from certcache.domain.exceptions import CacheMissError
from certcache.infrastructure.cache.keys import validate_cache_key


class MemoryCertCache:
    """Dict-backed cert cache with the same semantics as the persistent backends."""

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._store)

    async def get(self, key: str) -> bytes:
        """Return stored bytes. Raises CacheMissError if key is absent."""
        validate_cache_key(key)
        try:
            return self._store[key]
        except KeyError:
            raise CacheMissError(key) from None

    async def put(self, key: str, data: bytes) -> None:
        """Store a copy of data under key (last write wins)."""
        validate_cache_key(key)
        self._store[key] = bytes(data)

    async def delete(self, key: str) -> None:
        """Remove key if present."""
        validate_cache_key(key)
        self._store.pop(key, None)
