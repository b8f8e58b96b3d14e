"""Cache key validation. Single place for key rules (DRY).

Keys become Firestore document ids and Redis key suffixes, so they must be
non-empty strings that Firestore accepts as a single path segment.
"""

import re

from certcache.domain.exceptions import InvalidCacheKeyError

_RESERVED_ID = re.compile(r"^__.*__$")


def validate_cache_key(key: object) -> str:
    """Return key unchanged if usable, else raise.

    Args:
        key: Candidate cache key.

    Returns:
        The key.

    Raises:
        InvalidCacheKeyError: Not a non-empty str, contains '/', is '.' or '..',
            or matches the reserved '__...__' pattern.
    """
    if not isinstance(key, str) or not key:
        raise InvalidCacheKeyError(key, "must be a non-empty string")
    if "/" in key:
        raise InvalidCacheKeyError(key, "must not contain '/'")
    if key in (".", ".."):
        raise InvalidCacheKeyError(key, "must not be '.' or '..'")
    if _RESERVED_ID.match(key):
        raise InvalidCacheKeyError(key, "'__...__' ids are reserved")
    return key
