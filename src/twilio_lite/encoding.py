from __future__ import annotations

import base64
import binascii

from .errors import DecodeError


def to_base64(text: str) -> str:
    """Encode the UTF-8 bytes of `text` as standard Base64."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def from_base64(data: str, encoding: str = "utf-8") -> str:
    """
    Decode a Base64 payload back to text.

    Raises DecodeError if the payload has non-Base64 characters or the decoded
    bytes are not valid in `encoding`.
    """
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid Base64 payload: {exc}") from exc

    try:
        return raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise DecodeError(f"Cannot decode Base64 payload as {encoding}: {exc}") from exc
