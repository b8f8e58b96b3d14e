"""Firestore REST integration (google-auth + httpx)."""

from certcache.infrastructure.firebase._rest_client import (
    CollectionReference,
    DocumentReference,
    DocumentSnapshot,
    FirestoreRESTClient,
    FirestoreStatusError,
)
from certcache.infrastructure.firebase.client import (
    create_firestore_client,
    load_service_account_info,
)

__all__ = [
    "CollectionReference",
    "DocumentReference",
    "DocumentSnapshot",
    "FirestoreRESTClient",
    "FirestoreStatusError",
    "create_firestore_client",
    "load_service_account_info",
]
