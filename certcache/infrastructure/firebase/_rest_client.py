"""Thin Firestore REST API client (no firebase-admin, no grpcio).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Non-success responses raise FirestoreStatusError carrying the canonical
status string from the error body, so callers can branch on it.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any
from urllib.parse import quote

import httpx

from certcache.core.constants import (
    DEFAULT_DATABASE_ID,
    FIRESTORE_BASE_URL,
    FIRESTORE_SCOPE,
)
from certcache.infrastructure.firebase._rest_encoding import (
    decode_document,
    decode_value,
    encode_document,
)

# Used only when an error response has no parseable google.rpc.Status body
_HTTP_TO_STATUS: dict[int, str] = {
    400: "INVALID_ARGUMENT",
    401: "UNAUTHENTICATED",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
    409: "ALREADY_EXISTS",
    429: "RESOURCE_EXHAUSTED",
    499: "CANCELLED",
    500: "INTERNAL",
    501: "UNIMPLEMENTED",
    503: "UNAVAILABLE",
    504: "DEADLINE_EXCEEDED",
}


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class FirestoreStatusError(Exception):
    """Firestore REST call returned a non-success response.

    Attributes:
        http_status: HTTP status code of the response.
        status: Canonical status name (e.g. 'NOT_FOUND', 'PERMISSION_DENIED').
        message: Server-provided message, if any.
    """

    def __init__(self, http_status: int, status: str, message: str = "") -> None:
        self.http_status = http_status
        self.status = status
        self.message = message
        super().__init__(f"Firestore {status} ({http_status}): {message}")

    @classmethod
    def from_response(cls, resp: httpx.Response) -> FirestoreStatusError:
        """Build from an error response, preferring the google.rpc.Status body."""
        status = _HTTP_TO_STATUS.get(resp.status_code, "UNKNOWN")
        message = resp.reason_phrase
        try:
            body = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None
        if isinstance(body, list) and body:
            body = body[0]
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            status = error.get("status") or status
            message = error.get("message") or message
        return cls(resp.status_code, status, message)


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
) -> dict:
    """Perform async HTTP request to Firestore REST API.

    Raises:
        FirestoreStatusError: Response status is not 2xx.
        httpx.TransportError: Network failure (passed through).
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, json=body)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if not resp.is_success:
        raise FirestoreStatusError.from_response(resp)
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentSnapshot:
    """Snapshot of a document (id + raw REST fields, decoded on access)."""

    def __init__(self, id_: str, fields: dict[str, dict] | None):
        self.id = id_
        self._fields = fields or {}

    def to_dict(self) -> dict[str, Any]:
        """Decode every field. Raises TypeError on value kinds we do not support."""
        return decode_document({"fields": self._fields})

    def get(self, field: str) -> Any:
        """Decode one field; None if absent. Other fields are not inspected.

        Raises:
            TypeError: The field holds a value kind we do not support.
        """
        value = self._fields.get(field)
        if value is None:
            return None
        return decode_value(value)


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, collection_path: str, document_id: str):
        self._client = client
        self.id = document_id
        self._url = f"{FIRESTORE_BASE_URL}/{collection_path}/{quote(document_id, safe='')}"

    @property
    def url(self) -> str:
        return self._url

    async def get(self) -> DocumentSnapshot:
        """Fetch the document.

        Raises:
            FirestoreStatusError: status 'NOT_FOUND' when the document does not exist.
        """
        out = await _request_async(
            self._client._http, self._url, access_token=await self._client.get_token()
        )
        return DocumentSnapshot(self.id, out.get("fields"))

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the whole document (PATCH without update mask)."""
        await _request_async(
            self._client._http,
            self._url,
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )

    async def delete(self) -> None:
        """Delete the document. Firestore returns success if it is already missing."""
        await _request_async(
            self._client._http,
            self._url,
            method="DELETE",
            access_token=await self._client.get_token(),
        )


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, self._path, document_id)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        database_id: str = DEFAULT_DATABASE_ID,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/{database_id}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")
