"""Firestore client construction from service account credentials.

Credentials come from a JSON string (FIREBASE_SERVICE_ACCOUNT_KEY, e.g. on
serverless platforms) or a file path (FIREBASE_SERVICE_ACCOUNT_PATH).
Every failure is raised as CacheConstructionError: the cache has no way to
operate without its store.
"""

import json
import logging
from pathlib import Path

import httpx
from google.auth.exceptions import GoogleAuthError

from certcache.core.constants import BACKEND_FIRESTORE, DEFAULT_DATABASE_ID
from certcache.domain.exceptions import CacheConstructionError
from certcache.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_access_token,
    _get_credentials,
)

logger = logging.getLogger(__name__)


def load_service_account_info(
    key_json: str | None = None, path: str | None = None
) -> dict:
    """Return service account dict from a JSON string or a file path.

    key_json wins when both are given.

    Raises:
        CacheConstructionError: Neither given, file missing, or invalid JSON.
    """
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise CacheConstructionError(
                BACKEND_FIRESTORE, "service account key is not valid JSON"
            ) from e
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "Service account file not found: %s (resolved: %s)", path, resolved
            )
            raise CacheConstructionError(
                BACKEND_FIRESTORE, f"service account file not found: {path}"
            )
        try:
            with open(resolved, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CacheConstructionError(
                BACKEND_FIRESTORE, f"cannot read service account file {path}: {e}"
            ) from e
    raise CacheConstructionError(
        BACKEND_FIRESTORE, "no service account key or path configured"
    )


def create_firestore_client(
    key_dict: dict,
    project_id: str | None = None,
    *,
    database_id: str = DEFAULT_DATABASE_ID,
    timeout: float = 30.0,
    http_client: httpx.AsyncClient | None = None,
    verify: bool = True,
) -> FirestoreRESTClient:
    """Build a Firestore REST client and (by default) fetch a first token.

    Args:
        key_dict: Parsed service account JSON.
        project_id: Target project; defaults to key_dict['project_id'].
        database_id: Firestore database id.
        timeout: HTTP timeout in seconds (ignored when http_client is given).
        http_client: Optional shared httpx.AsyncClient (not closed by us).
        verify: Fetch an access token now so bad credentials fail at startup.

    Raises:
        CacheConstructionError: Missing project id, malformed key, or token fetch failed.
    """
    project = project_id or key_dict.get("project_id")
    if not project:
        logger.error("Firebase service account JSON missing 'project_id'")
        raise CacheConstructionError(BACKEND_FIRESTORE, "no project id")
    try:
        cred = _get_credentials(key_dict)
    except (ValueError, KeyError) as e:
        raise CacheConstructionError(
            BACKEND_FIRESTORE, f"malformed service account key: {e}"
        ) from e
    # Token before the HTTP client exists, so a failed check has nothing to close
    if verify:
        try:
            _get_access_token(cred)
        except GoogleAuthError as e:
            raise CacheConstructionError(
                BACKEND_FIRESTORE, f"could not obtain access token: {e}"
            ) from e
    client = FirestoreRESTClient(
        project,
        cred,
        database_id=database_id,
        http_client=http_client,
        timeout=timeout,
    )
    logger.info("Firestore client initialized for project %s", project)
    return client
