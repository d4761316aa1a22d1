from __future__ import annotations

from .encoding import to_base64
from .errors import InvalidCredentialFormat


def encode_basic_auth(user: str, password: str) -> str:
    """
    Turn plain-text credentials into a value for the HTTP Authorization header.
    """
    # https://tools.ietf.org/html/rfc2617#section-2
    if ":" in user:
        raise InvalidCredentialFormat(
            "Colons (e.g. ':') are not allowed in HTTP Authentication usernames."
        )
    return f"Basic {to_base64(f'{user}:{password}')}"
