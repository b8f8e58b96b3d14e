"""Byte <-> text conversion for the single text field of a cache entry."""

import base64
import binascii

from certcache.domain.enums import ValueEncoding
from certcache.domain.exceptions import CacheEntryDecodeError


def encode_entry(key: str, data: bytes, encoding: ValueEncoding) -> str:
    """Return data as text for storage.

    Raises:
        CacheEntryDecodeError: TEXT encoding and data is not valid UTF-8.
    """
    if encoding is ValueEncoding.BASE64:
        return base64.standard_b64encode(data).decode("ascii")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CacheEntryDecodeError(key, f"value is not valid UTF-8: {e}") from e


def decode_entry(key: str, text: str, encoding: ValueEncoding) -> bytes:
    """Return the stored text back as the original bytes.

    Raises:
        CacheEntryDecodeError: BASE64 encoding and text is not valid base64.
    """
    if encoding is ValueEncoding.BASE64:
        try:
            return base64.b64decode(text.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise CacheEntryDecodeError(key, f"stored value is not valid base64: {e}") from e
    return text.encode("utf-8")
