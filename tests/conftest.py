"""Pytest configuration and fixtures for certcache.

Firestore tests run against FakeFirestore, an httpx.MockTransport handler
that answers the REST calls the client makes (GET/PATCH/DELETE of single
documents) from an in-memory dict. Live Firestore tests live in
tests/integration and are marked requires_firestore.
"""

import json
from typing import Any

import httpx
import pytest

from certcache.core.config import get_settings
from certcache.infrastructure.cache.firestore_cache import FirestoreCertCache
from certcache.infrastructure.firebase._rest_client import FirestoreRESTClient

TEST_PROJECT = "test-project"
TEST_COLLECTION = "testcerts"


class FakeCredentials:
    """Stand-in for service account credentials that are always valid."""

    valid = True
    token = "test-token"

    def refresh(self, request: Any) -> None:  # pragma: no cover - never invalid
        raise AssertionError("FakeCredentials should not be refreshed")


class FakeFirestore:
    """In-memory Firestore REST server for httpx.MockTransport.

    documents maps decoded document paths (".../documents/<coll>/<id>") to
    the stored 'fields' dict. Queue an error with fail_next() to make the
    next request return that status instead.
    """

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._failures: list[tuple[int, dict[str, Any] | None]] = []

    def fail_next(self, status_code: int, status: str | None = None, message: str = "") -> None:
        body = (
            {"error": {"code": status_code, "message": message, "status": status}}
            if status
            else None
        )
        self._failures.append((status_code, body))

    def fields_for(self, collection: str, key: str) -> dict[str, Any] | None:
        """Return stored REST 'fields' for a document, or None."""
        suffix = f"/documents/{collection}/{key}"
        for path, fields in self.documents.items():
            if path.endswith(suffix):
                return fields
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._failures:
            status_code, body = self._failures.pop(0)
            if body is None:
                return httpx.Response(status_code, text="upstream error")
            return httpx.Response(status_code, json=body)
        path = request.url.path.removeprefix("/v1/")
        if request.method == "GET":
            if path not in self.documents:
                return httpx.Response(
                    404,
                    json={
                        "error": {
                            "code": 404,
                            "message": f"No document to get. Path: {path}",
                            "status": "NOT_FOUND",
                        }
                    },
                )
            return httpx.Response(200, json={"name": path, "fields": self.documents[path]})
        if request.method == "PATCH":
            body = json.loads(request.content)
            self.documents[path] = body.get("fields", {})
            return httpx.Response(200, json={"name": path, "fields": self.documents[path]})
        if request.method == "DELETE":
            self.documents.pop(path, None)
            return httpx.Response(200, json={})
        return httpx.Response(405)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_firestore() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
async def firestore_client(fake_firestore: FakeFirestore) -> FirestoreRESTClient:
    """FirestoreRESTClient wired to FakeFirestore."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_firestore.handler))
    client = FirestoreRESTClient(TEST_PROJECT, FakeCredentials(), http_client=http)
    yield client
    await http.aclose()


@pytest.fixture
def firestore_cache(firestore_client: FirestoreRESTClient) -> FirestoreCertCache:
    """Firestore cert cache on the 'testcerts' collection."""
    return FirestoreCertCache(firestore_client, collection=TEST_COLLECTION)
