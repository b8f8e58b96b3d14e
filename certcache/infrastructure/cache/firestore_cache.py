"""Firestore-backed certificate cache (implements CertCacheProtocol).

Each cache key is a document id in one collection (default "certcache").
The document holds a single text field "data" with the value encoded per
ValueEncoding. Firestore's NOT_FOUND status on read is the cache miss;
every other store error reaches the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from certcache.core.constants import DATA_FIELD, DEFAULT_COLLECTION, STATUS_NOT_FOUND
from certcache.domain.enums import ValueEncoding
from certcache.domain.exceptions import CacheEntryDecodeError, CacheMissError
from certcache.infrastructure.cache.keys import validate_cache_key
from certcache.infrastructure.cache.value_codec import decode_entry, encode_entry
from certcache.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    FirestoreStatusError,
)
from certcache.infrastructure.firebase.client import (
    create_firestore_client,
    load_service_account_info,
)

if TYPE_CHECKING:
    from certcache.core.config import Settings

logger = logging.getLogger(__name__)


class FirestoreCertCache:
    """Certificate cache stored in a Firestore collection.

    Owns its FirestoreRESTClient for the process lifetime; call aclose() at
    shutdown to release the HTTP pool. Safe for concurrent use from one
    event loop (no locking; httpx handles the connection pool).
    """

    def __init__(
        self,
        client: FirestoreRESTClient,
        collection: str = DEFAULT_COLLECTION,
        value_encoding: ValueEncoding = ValueEncoding.BASE64,
    ) -> None:
        """Initialize with an existing client.

        Args:
            client: Firestore REST client.
            collection: Collection holding one document per key.
            value_encoding: How bytes are written into the text field.
        """
        self._client = client
        self.collection_name = collection
        self.value_encoding = value_encoding
        self._coll = client.collection(collection)

    @classmethod
    def from_service_account_file(
        cls,
        credentials_path: str,
        project_id: str | None = None,
        collection: str = DEFAULT_COLLECTION,
        *,
        value_encoding: ValueEncoding = ValueEncoding.BASE64,
        http_client: httpx.AsyncClient | None = None,
    ) -> FirestoreCertCache:
        """Build from a service account JSON file.

        Raises:
            CacheConstructionError: Credentials unreadable or token fetch failed.
        """
        key_dict = load_service_account_info(path=credentials_path)
        client = create_firestore_client(key_dict, project_id, http_client=http_client)
        return cls(client, collection, value_encoding)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> FirestoreCertCache:
        """Build from settings (key JSON or path, project, database, collection).

        Raises:
            CacheConstructionError: Credentials unreadable or token fetch failed.
        """
        from certcache.core.config import get_settings

        s = settings or get_settings()
        key_json = (
            s.firebase_service_account_key.get_secret_value()
            if s.firebase_service_account_key
            else None
        )
        key_dict = load_service_account_info(
            key_json=key_json, path=s.firebase_service_account_path
        )
        client = create_firestore_client(
            key_dict,
            s.firestore_project_id,
            database_id=s.firestore_database_id,
            timeout=s.firestore_http_timeout_seconds,
            http_client=http_client,
        )
        return cls(client, s.cert_cache_collection, s.value_encoding)

    async def aclose(self) -> None:
        """Release the underlying HTTP client (if owned by the REST client)."""
        await self._client.aclose()

    async def get(self, key: str) -> bytes:
        """Return the bytes stored under key.

        Raises:
            CacheMissError: Document does not exist.
            CacheEntryDecodeError: Document has no readable 'data' field.
            FirestoreStatusError: Any other Firestore error (unchanged).
        """
        validate_cache_key(key)
        logger.info("[firestore-certcache] fetching %s from firestore", key)
        try:
            snapshot = await self._coll.document(key).get()
        except FirestoreStatusError as e:
            if e.status == STATUS_NOT_FOUND:
                logger.info("[firestore-certcache] %s not found in firestore", key)
                raise CacheMissError(key) from None
            logger.warning(
                "[firestore-certcache] error fetching %s from firestore: %s", key, e
            )
            raise
        except httpx.TransportError as e:
            logger.warning(
                "[firestore-certcache] error fetching %s from firestore: %s", key, e
            )
            raise
        try:
            stored = snapshot.get(DATA_FIELD)
        except TypeError as e:
            logger.warning(
                "[firestore-certcache] error reading document snapshot for %s: %s", key, e
            )
            raise CacheEntryDecodeError(key, str(e)) from e
        if not isinstance(stored, str):
            logger.warning(
                "[firestore-certcache] error reading document snapshot for %s: "
                "field %r missing or not a string",
                key,
                DATA_FIELD,
            )
            raise CacheEntryDecodeError(key, f"field {DATA_FIELD!r} missing or not a string")
        data = decode_entry(key, stored, self.value_encoding)
        logger.info("[firestore-certcache] fetched %s from firestore", key)
        return data

    async def put(self, key: str, data: bytes) -> None:
        """Replace the document for key with {'data': <encoded data>}.

        Raises:
            CacheEntryDecodeError: TEXT encoding and data is not UTF-8.
            FirestoreStatusError: Firestore rejected the write (unchanged).
        """
        validate_cache_key(key)
        text = encode_entry(key, data, self.value_encoding)
        logger.info("[firestore-certcache] storing %s in firestore", key)
        try:
            await self._coll.document(key).set({DATA_FIELD: text})
        except (FirestoreStatusError, httpx.TransportError) as e:
            logger.warning("[firestore-certcache] failed to store %s in firestore: %s", key, e)
            raise
        logger.info("[firestore-certcache] successfully stored %s in firestore", key)

    async def delete(self, key: str) -> None:
        """Delete the document for key; deleting a missing document succeeds."""
        validate_cache_key(key)
        logger.info("[firestore-certcache] deleting %s from firestore", key)
        try:
            await self._coll.document(key).delete()
        except (FirestoreStatusError, httpx.TransportError) as e:
            logger.warning("[firestore-certcache] failed to delete %s from firestore: %s", key, e)
            raise
        logger.info("[firestore-certcache] deleted %s from firestore", key)
