"""Bearer credential extraction."""

from typing import Optional

BEARER_SCHEME = "Bearer"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    The header must split into exactly two whitespace-separated parts and
    the first must be ``Bearer`` (case-sensitive). Anything else yields None.
    """
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        return None
    return parts[1]
