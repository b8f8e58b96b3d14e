"""Core constants: persisted layout and shared literal values.

Single source of truth for collection/field names and the Firestore REST
endpoint, used by the Firestore backend, the REST client and settings.
"""

# Firestore layout: one document per key in this collection, value in DATA_FIELD
DEFAULT_COLLECTION = "certcache"
DATA_FIELD = "data"

# Firestore REST
FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"
FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
DEFAULT_DATABASE_ID = "(default)"

# Canonical gRPC status carried in Firestore REST error bodies
STATUS_NOT_FOUND = "NOT_FOUND"

# Redis backend: keys are REDIS_DEFAULT_PREFIX + REDIS_KEY_SEP + cache key
REDIS_DEFAULT_PREFIX = "certcache"
REDIS_KEY_SEP = ":"

# Supported values for settings.cert_cache_backend
BACKEND_FIRESTORE = "firestore"
BACKEND_REDIS = "redis"
BACKEND_MEMORY = "memory"
SUPPORTED_BACKENDS = (BACKEND_FIRESTORE, BACKEND_REDIS, BACKEND_MEMORY)
