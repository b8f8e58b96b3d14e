"""Cert cache protocol (DIP). Implementations: Firestore, functional, memory, Redis.

The certificate manager depends only on this protocol, so backends are
interchangeable without caller changes.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CertCacheProtocol(Protocol):
    """Protocol for certificate cache backends.

    Cancellation and deadlines come from the calling asyncio task
    (Task.cancel(), asyncio.timeout()); request-scoped values travel in
    contextvars.
    """

    async def get(self, key: str) -> bytes:
        """Return the bytes stored under key.

        Raises:
            CacheMissError: No value stored for key.
        """
        ...

    async def put(self, key: str, data: bytes) -> None:
        """Store data under key, replacing any previous value."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key. Succeeds if key is not present."""
        ...
