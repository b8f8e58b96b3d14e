"""Encode/decode document fields to/from the Firestore REST 'Value' format.

Only the scalar types a cache entry can hold are supported; anything else
is rejected rather than silently dropped.
"""

import base64
from typing import Any


def encode_value(v: Any) -> dict:
    """Convert one Python scalar to a Firestore REST Value."""
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def decode_value(obj: dict) -> Any:
    """Convert one Firestore REST Value to a Python scalar.

    Raises:
        TypeError: Value kind is not one encode_value produces.
    """
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return obj["doubleValue"]
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    raise TypeError(f"Unsupported Firestore value kind: {sorted(obj)}")


def encode_document(data: dict[str, Any]) -> dict:
    """Convert a flat Python dict to a Firestore REST Document body."""
    return {"fields": {k: encode_value(v) for k, v in data.items()}}


def decode_document(document: dict | None) -> dict[str, Any]:
    """Convert a Firestore REST Document body to a flat Python dict.

    A document with no fields (or no body) decodes to an empty dict.
    """
    if not document:
        return {}
    return {k: decode_value(v) for k, v in (document.get("fields") or {}).items()}
