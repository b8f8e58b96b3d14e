"""Domain exceptions for the certificate cache.

Every error raised by this package (as opposed to errors passed through
from the backing store) derives from CertCacheException. Callers branch on
the exception type, never on the message text.
"""

from typing import Any


class CertCacheException(Exception):
    """Base exception for all certcache errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. key, collection).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class CacheMissError(CertCacheException):
    """Raised by get() when no value is stored for the key."""

    def __init__(self, key: str) -> None:
        """Initialize with the key that has no stored value.

        Args:
            key: Cache key that was looked up.
        """
        super().__init__(
            f"Cache miss: {key}",
            "CACHE_MISS",
            {"key": key},
        )


class InvalidCacheKeyError(CertCacheException):
    """Raised when a cache key is empty or not usable as a document id."""

    def __init__(self, key: Any, reason: str) -> None:
        """Initialize with the rejected key and the reason.

        Args:
            key: The rejected key (may not be a str).
            reason: Why the key was rejected.
        """
        super().__init__(
            f"Invalid cache key {key!r}: {reason}",
            "INVALID_CACHE_KEY",
            {"key": key, "reason": reason},
        )


class CacheEntryDecodeError(CertCacheException):
    """Raised when a stored entry cannot be turned back into bytes (or a value cannot be stored as text)."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Invalid cache entry for {key}: {reason}",
            "CACHE_ENTRY_INVALID",
            {"key": key, "reason": reason},
        )


class CacheConstructionError(CertCacheException):
    """Raised when a backend cannot be constructed (bad credentials, no token).

    The cache cannot operate without its store; entry points treat this as a
    fatal startup error.
    """

    def __init__(self, backend: str, reason: str) -> None:
        """Initialize with backend name and failure reason.

        Args:
            backend: Backend being constructed (e.g. 'firestore').
            reason: Human-readable cause.
        """
        super().__init__(
            f"Failed to initialize {backend} cert cache: {reason}",
            "CACHE_CONSTRUCTION_FAILED",
            {"backend": backend, "reason": reason},
        )
