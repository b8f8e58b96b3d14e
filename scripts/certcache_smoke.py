"""Put/get/delete a test entry against the configured cert cache backend.

Usage:
    uv run python -m scripts.certcache_smoke [key]
Uses CERT_CACHE_BACKEND and the matching settings (see certcache.core.config).
Exits with status 1 if the backend cannot be constructed or a step fails.
"""

import asyncio
import logging
import sys

from certcache.core.config import get_settings
from certcache.domain.exceptions import CacheConstructionError, CacheMissError
from certcache.infrastructure.cache import CertCacheFactory
from certcache.shared.telemetry import setup_logging

logger = logging.getLogger("scripts.certcache_smoke")


async def main() -> None:
    """Run the round trip; key defaults to smoke-test.example.com."""
    key = sys.argv[1] if len(sys.argv) > 1 else "smoke-test.example.com"
    settings = get_settings()
    setup_logging(settings)

    try:
        cache = CertCacheFactory.create_cert_cache(settings)
    except CacheConstructionError as e:
        logger.critical("%s", e.message)
        sys.exit(1)

    payload = b"certcache smoke test\x00\xff"
    try:
        await cache.put(key, payload)
        if await cache.get(key) != payload:
            print(f"Round trip mismatch for {key}", file=sys.stderr)
            sys.exit(1)
        await cache.delete(key)
        try:
            await cache.get(key)
        except CacheMissError:
            pass
        else:
            print(f"Key still present after delete: {key}", file=sys.stderr)
            sys.exit(1)
    finally:
        aclose = getattr(cache, "aclose", None)
        if aclose is not None:
            await aclose()
    print(f"OK: {settings.cert_cache_backend} put/get/delete of {key}")


if __name__ == "__main__":
    asyncio.run(main())
