"""Domain enumerations for the certificate cache."""

from enum import Enum


class ValueEncoding(str, Enum):
    """How cached bytes are written into a text-typed document field.

    BASE64 is lossless for any bytes (DER included). TEXT stores the bytes as
    strict UTF-8, the layout used by earlier deployments that wrote PEM
    directly; it rejects values that are not valid UTF-8.
    """

    BASE64 = "base64"
    TEXT = "text"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid encoding values as strings."""
        return [encoding.value for encoding in cls]
